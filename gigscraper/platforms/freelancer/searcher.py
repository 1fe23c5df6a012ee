"""Freelancer URL builder and category vocabulary.

Pure functions, no browser dependency.
"""

import logging
from urllib.parse import quote_plus, urlencode

from gigscraper.core.config import SearchFilters

logger = logging.getLogger(__name__)

FREELANCER_BASE = "https://www.freelancer.in"

SUPPORTED_CATEGORIES: tuple[str, ...] = (
    "websites",
    "mobile-apps",
    "software-development",
    "data-entry",
    "writing",
    "translation",
    "design",
    "marketing",
    "engineering-architecture",
    "legal",
    "admin-support",
    "customer-service",
    "sales",
    "accounting",
)

# --- Mapping dicts (URL concern) ---

JOB_TYPE_MAP: dict[str, str] = {
    "fixed": "fixed",
    "hourly": "hourly",
}

# Relevance is the site default and needs no parameter.
SORT_MAP: dict[str, str] = {
    "newest": "time",
    "budget": "price",
}


def build_url(filters: SearchFilters) -> str:
    """Build a Freelancer jobs search URL from filters.

    Args:
        filters: SearchFilters instance. Unknown categories are ignored,
            tags stand in for the keyword only when no keyword is given.

    Returns:
        Fully qualified Freelancer search URL. Same filters, same URL.
    """
    url = f"{FREELANCER_BASE}/jobs"

    if filters.category:
        if filters.category in SUPPORTED_CATEGORIES:
            url += f"/{filters.category}"
        else:
            logger.debug("Unsupported category '%s', ignoring", filters.category)

    params: dict[str, str] = {}

    if filters.keyword:
        params["keyword"] = filters.keyword
    elif filters.tags:
        params["keyword"] = " ".join(filters.tags)

    job_type = JOB_TYPE_MAP.get(filters.job_type)
    if job_type is not None:
        params["type"] = job_type

    if filters.min_budget:
        params["min_price"] = str(filters.min_budget)
    if filters.max_budget:
        params["max_price"] = str(filters.max_budget)

    sort = SORT_MAP.get(filters.sort_by)
    if sort is not None:
        params["sort"] = sort

    if not params:
        return url
    return f"{url}?{urlencode(params, quote_via=quote_plus)}"
