"""Text heuristics that turn raw listing text into field values.

Pure functions, no DOM access. Every list below is ordered and evaluated
first-match-wins; the order is part of the contract, not a ranking of
correctness. Defaults are the literal placeholders from core.schemas.
"""

import re

from gigscraper.core.schemas import (
    DESCRIPTION_MAX_CHARS,
    NO_CLIENT_INFO,
    RECENTLY_POSTED,
    ExperienceLevel,
    JobType,
)
from gigscraper.core.text import clean_lines, clean_text

CURRENCY_MARKERS: tuple[str, ...] = ("₹", "$")

# --- Budget / hourly rate ---

BUDGET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"₹([\d,]+)(?:\s*-\s*₹([\d,]+))?\s*(?:INR)?", re.IGNORECASE),
    re.compile(r"\$([\d,]+)(?:\s*-\s*\$([\d,]+))?\s*(?:USD)?", re.IGNORECASE),
    re.compile(r"Budget[:\s]*₹([\d,]+)", re.IGNORECASE),
    re.compile(r"Budget[:\s]*\$([\d,]+)", re.IGNORECASE),
)

HOURLY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"₹([\d,]+)(?:\s*-\s*₹([\d,]+))?\s*/\s*hour", re.IGNORECASE),
    re.compile(r"\$([\d,]+)(?:\s*-\s*\$([\d,]+))?\s*/\s*hour", re.IGNORECASE),
    re.compile(r"([\d,]+)\s*/\s*hr", re.IGNORECASE),
    re.compile(r"Hourly[:\s]*₹([\d,]+)", re.IGNORECASE),
    re.compile(r"Hourly[:\s]*\$([\d,]+)", re.IGNORECASE),
)

# --- Skills (canonical spelling; aliases map onto it) ---

SKILL_FAMILIES: dict[str, tuple[str, ...]] = {
    "languages": (
        "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "PHP",
        "Ruby", "Go", "Rust", "Swift", "Kotlin", "Scala",
    ),
    "frameworks": (
        "React", "Vue", "Angular", "Node.js", "Express", "Django", "Flask",
        "Laravel", "Spring", "ASP.NET",
    ),
    "databases": (
        "MySQL", "PostgreSQL", "MongoDB", "Redis", "SQLite", "Oracle", "SQL Server",
    ),
    "cloud_devops": (
        "AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "Jenkins", "CI/CD",
    ),
    "design_content": (
        "Photoshop", "Illustrator", "Figma", "Sketch", "After Effects",
        "Premiere", "Content Writing", "Copywriting",
    ),
    "marketing_business": (
        "SEO", "SEM", "Social Media", "Digital Marketing", "Data Entry",
        "Virtual Assistant", "Excel", "Word",
    ),
    "mobile": ("iOS", "Android", "React Native", "Flutter", "Xamarin", "Ionic"),
}

SKILL_ALIASES: dict[str, str] = {
    "nodejs": "Node.js",
}

# --- Posted time ---

POSTED_TIME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+)\s*(?:hour|hr|hours|hrs)\s*ago", re.IGNORECASE),
    re.compile(r"(\d+)\s*(?:day|days)\s*ago", re.IGNORECASE),
    re.compile(r"(\d+)\s*(?:week|weeks)\s*ago", re.IGNORECASE),
    re.compile(r"yesterday", re.IGNORECASE),
    re.compile(r"today", re.IGNORECASE),
)

# --- Client info ---

CLIENT_INFO_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+)\s*(?:review|reviews)\b", re.IGNORECASE),
    re.compile(r"(\d+)\s*(?:job|jobs)\s*posted", re.IGNORECASE),
    re.compile(r"Payment\s*verified", re.IGNORECASE),
    re.compile(r"Verified", re.IGNORECASE),
    re.compile(r"(\$\d+[\d,]*)\s*spent", re.IGNORECASE),
)
CLIENT_INFO_MAX_MATCHES = 2

# --- Experience level ---

EXPERIENCE_PHRASES: tuple[tuple[ExperienceLevel, tuple[str, ...]], ...] = (
    (ExperienceLevel.ENTRY_LEVEL, ("entry level", "beginner")),
    (ExperienceLevel.INTERMEDIATE, ("intermediate",)),
    (ExperienceLevel.EXPERT, ("expert", "advanced")),
)

# --- Raw-text fallbacks ---

TITLE_LINE_MIN, TITLE_LINE_MAX = 10, 100
DESCRIPTION_LINE_MIN, DESCRIPTION_LINE_MAX = 30, 300


def _build_skill_regex() -> tuple[re.Pattern[str], ...]:
    patterns = []
    for names in SKILL_FAMILIES.values():
        # Longest first so "React Native" wins over "React" inside one family.
        ordered = sorted(names, key=len, reverse=True)
        alternation = "|".join(re.escape(n) for n in ordered)
        patterns.append(re.compile(rf"(?<![\w.+#])(?:{alternation})(?![\w+#])", re.IGNORECASE))
    alias_alt = "|".join(re.escape(a) for a in SKILL_ALIASES)
    patterns.append(re.compile(rf"(?<![\w.])(?:{alias_alt})(?!\w)", re.IGNORECASE))
    return tuple(patterns)


_SKILL_PATTERNS = _build_skill_regex()
_SKILL_CANONICAL: dict[str, str] = {
    **{name.lower(): name for names in SKILL_FAMILIES.values() for name in names},
    **SKILL_ALIASES,
}


def parse_budget(text: str) -> str:
    """Return the first fixed-price amount found, or ""."""
    return _first_match(BUDGET_PATTERNS, text)


def parse_hourly_rate(text: str) -> str:
    """Return the first hourly amount found, or ""."""
    return _first_match(HOURLY_PATTERNS, text)


def resolve_job_type(budget: str, hourly_rate: str) -> JobType:
    """An hourly match outranks a fixed budget; neither means unknown."""
    if hourly_rate:
        return JobType.HOURLY
    if budget:
        return JobType.FIXED_PRICE
    return JobType.NOT_SPECIFIED


def extract_skills(text: str) -> tuple[str, ...]:
    """Union of every skill family match, canonical spelling, no duplicates."""
    found: list[str] = []
    for pattern in _SKILL_PATTERNS:
        for match in pattern.finditer(text):
            found.append(_SKILL_CANONICAL.get(match.group(0).lower(), match.group(0)))
    return tuple(dict.fromkeys(found))


def parse_posted_time(text: str) -> str:
    return _first_match(POSTED_TIME_PATTERNS, text) or RECENTLY_POSTED


def parse_client_info(text: str) -> str:
    """Join the first two client signals, taken in pattern order.

    A match overlapping one already taken (e.g. "Verified" inside
    "Payment verified") is ignored.
    """
    taken: list[tuple[int, int, str]] = []
    for pattern in CLIENT_INFO_PATTERNS:
        for match in pattern.finditer(text):
            start, end = match.span()
            if any(start < t_end and t_start < end for t_start, t_end, _ in taken):
                continue
            taken.append((start, end, clean_text(match.group(0))))
            if len(taken) == CLIENT_INFO_MAX_MATCHES:
                return ", ".join(t[2] for t in taken)
    if not taken:
        return NO_CLIENT_INFO
    return ", ".join(t[2] for t in taken)


def parse_experience_level(text: str) -> ExperienceLevel:
    lowered = text.lower()
    for level, phrases in EXPERIENCE_PHRASES:
        if any(phrase in lowered for phrase in phrases):
            return level
    return ExperienceLevel.NOT_SPECIFIED


def has_currency_marker(text: str) -> bool:
    return any(marker in text for marker in CURRENCY_MARKERS)


def title_from_text(text: str) -> str:
    """First cleaned line of plausible title length with no price in it."""
    for line in clean_lines(text):
        if TITLE_LINE_MIN < len(line) < TITLE_LINE_MAX and not has_currency_marker(line):
            return line
    return ""


def description_from_text(text: str) -> str:
    """Join the 2nd and 3rd description-sized lines of the raw text."""
    lines = [
        line for line in clean_lines(text)
        if DESCRIPTION_LINE_MIN < len(line) < DESCRIPTION_LINE_MAX
    ]
    return " ".join(lines[1:3])[:DESCRIPTION_MAX_CHARS]


def _first_match(patterns: tuple[re.Pattern[str], ...], text: str) -> str:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            # [\d,]+ happily swallows a list comma after the amount
            return match.group(0).strip().rstrip(",")
    return ""
