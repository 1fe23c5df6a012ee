"""Element-level listing extraction.

Design rules:
  - Every selector lookup walks an ordered candidate tuple, first hit wins.
  - A missing field falls back to raw-text heuristics, then to a placeholder.
  - extract() never raises: a broken element yields None and is skipped.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import urljoin

from gigscraper.core.schemas import (
    DESCRIPTION_MAX_CHARS,
    NO_DESCRIPTION,
    UNTITLED,
    Listing,
)
from gigscraper.core.text import clean_text
from gigscraper.platforms import fields

logger = logging.getLogger(__name__)

DESCRIPTION_MIN_CHARS = 20


@runtime_checkable
class ElementLike(Protocol):
    """Minimal element interface so tests can use AsyncMock instead of patchright."""

    async def query_selector(self, selector: str) -> "ElementLike | None": ...
    async def get_attribute(self, name: str) -> str | None: ...
    async def text_content(self) -> str | None: ...


@dataclass(frozen=True)
class FieldSelectors:
    """Child selectors a platform offers for the DOM-backed fields."""

    title: tuple[str, ...]
    description: tuple[str, ...]
    job_link: str


class ListingExtractor:
    """Turns one candidate element into a Listing (platform left unset)."""

    def __init__(self, base_url: str, selectors: FieldSelectors) -> None:
        self._base_url = base_url
        self._selectors = selectors

    async def extract(self, element: ElementLike) -> Listing | None:
        try:
            raw_text = await element.text_content() or ""
            title = await self._parse_title(element, raw_text)
            job_url = await self._parse_url(element)
            description = await self._parse_description(element, raw_text)

            budget = fields.parse_budget(raw_text)
            hourly_rate = fields.parse_hourly_rate(raw_text)

            return Listing(
                title=title,
                description=description,
                budget=budget,
                hourly_rate=hourly_rate,
                skills=fields.extract_skills(raw_text),
                posted_time=fields.parse_posted_time(raw_text),
                client_info=fields.parse_client_info(raw_text),
                job_url=job_url,
                job_type=fields.resolve_job_type(budget, hourly_rate),
                experience_level=fields.parse_experience_level(raw_text),
            )
        except Exception:
            logger.debug("Failed to extract listing from element, skipping", exc_info=True)
            return None

    async def _parse_title(self, element: ElementLike, raw_text: str) -> str:
        for selector in self._selectors.title:
            child = await element.query_selector(selector)
            if child is None:
                continue
            text = clean_text(await child.text_content())
            if text and text != UNTITLED:
                return text
        return fields.title_from_text(raw_text) or UNTITLED

    async def _parse_url(self, element: ElementLike) -> str:
        link = await element.query_selector(self._selectors.job_link)
        if link is None:
            return ""
        href = await link.get_attribute("href")
        if not href or not href.strip():
            return ""
        return urljoin(self._base_url, href.strip())

    async def _parse_description(self, element: ElementLike, raw_text: str) -> str:
        for selector in self._selectors.description:
            child = await element.query_selector(selector)
            if child is None:
                continue
            text = clean_text(await child.text_content())
            if len(text) >= DESCRIPTION_MIN_CHARS:
                return text[:DESCRIPTION_MAX_CHARS]
        return fields.description_from_text(raw_text) or NO_DESCRIPTION
