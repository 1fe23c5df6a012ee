"""Freelancer DOM selector constants with fallbacks.

Each constant is a tuple so callers iterate until a match is found.
Current markup first, older or alternate markup after.
"""

# --- "Listings rendered" probes after navigation ---
READY_SELECTORS: tuple[str, ...] = (
    ".JobSearchCard-item",
    ".JobCard",
    ".job-item",
    ".project-item",
    '[data-testid="job-card"]',
)

# --- Listing containers, tier 1 (current markup) ---
MODERN_CARD_SELECTORS: tuple[str, ...] = (
    ".JobSearchCard-item",
    ".JobCard",
    '[data-testid="job-card"]',
    ".project-item",
)

# --- Listing containers, tier 2 (legacy / alternate markup) ---
LEGACY_CARD_SELECTORS: tuple[str, ...] = (
    ".job-item",
    ".project-card",
    ".freelancer-job",
    "[data-job-id]",
    ".job-listing",
)

# --- Listing containers, tier 3 (any structural block, filtered by text) ---
GENERIC_CARD_SELECTOR: str = 'article, .card, [class*="job"], [class*="project"]'

# --- Title inside a card ---
TITLE_SELECTORS: tuple[str, ...] = (
    "h1",
    "h2",
    "h3",
    "h4",
    ".job-title",
    ".project-title",
    ".title",
    '[data-testid="job-title"]',
    'a[href*="/projects/"]',
    'a[href*="/job/"]',
    ".JobSearchCard-primary-heading",
    ".JobSearchCard-item-title",
)

# --- Description inside a card ---
DESCRIPTION_SELECTORS: tuple[str, ...] = (
    ".job-description",
    ".project-description",
    ".description",
    ".JobSearchCard-secondary-price",
    "p",
)

# --- Detail link ---
JOB_LINK_SELECTOR: str = 'a[href*="/projects/"], a[href*="/job/"]'
