"""Selector tiers: locate listing elements, degrading from specific to generic.

Tiers are tried in order and the first one yielding at least one element
wins; later tiers are never queried. Inside a tier the first selector that
returns accepted elements is used.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from gigscraper.platforms.fields import has_currency_marker

logger = logging.getLogger(__name__)

GENERIC_MIN_TEXT_LENGTH = 100


class QueryableSession(Protocol):
    async def query_all(self, selector: str) -> list[Any]: ...


@dataclass(frozen=True)
class SelectorTier:
    name: str
    selectors: tuple[str, ...]
    # Optional text filter; elements whose text fails it are dropped.
    accept: Callable[[str], bool] | None = None


@dataclass(frozen=True)
class TierMatch:
    tier: str
    selector: str
    elements: list[Any]


def looks_like_listing(text: str) -> bool:
    """Generic-tier filter: long text mentioning a price or an hourly rate."""
    return len(text) > GENERIC_MIN_TEXT_LENGTH and (
        has_currency_marker(text) or "hour" in text
    )


async def find_listing_elements(
    session: QueryableSession, tiers: tuple[SelectorTier, ...],
) -> TierMatch | None:
    """Return the elements from the first productive tier, or None."""
    for tier in tiers:
        for selector in tier.selectors:
            elements = await session.query_all(selector)
            if elements and tier.accept is not None:
                elements = await _filter_by_text(elements, tier.accept)
            if elements:
                logger.info(
                    "Found %d elements with %s selector '%s'",
                    len(elements), tier.name, selector,
                )
                return TierMatch(tier=tier.name, selector=selector, elements=elements)
            logger.debug("Tier '%s' selector '%s' matched nothing", tier.name, selector)
    logger.warning("No listing elements found in any selector tier")
    return None


async def _filter_by_text(elements: list[Any], accept: Callable[[str], bool]) -> list[Any]:
    kept = []
    for element in elements:
        try:
            text = await element.text_content() or ""
        except Exception:
            logger.debug("Could not read element text, dropping", exc_info=True)
            continue
        if accept(text):
            kept.append(element)
    return kept
