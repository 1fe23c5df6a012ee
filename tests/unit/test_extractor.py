"""Tests for element-level listing extraction."""

from unittest.mock import AsyncMock

import pytest

from gigscraper.core.schemas import ExperienceLevel, JobType
from gigscraper.platforms.extractor import FieldSelectors, ListingExtractor

BASE = "https://www.freelancer.in"

SELECTORS = FieldSelectors(
    title=("h2", ".job-title"),
    description=(".job-description", "p"),
    job_link='a[href*="/projects/"]',
)

RAW_TEXT = (
    "Build a Django REST API\n"
    "Budget: $500 - $800, 3 reviews, Payment verified\n"
    "Posted 2 days ago\n"
    "Python Django PostgreSQL expert needed"
)


def _element(text: str | None) -> AsyncMock:
    el = AsyncMock()
    el.text_content.return_value = text
    return el


def _make_mock_card(
    *,
    raw_text: str = RAW_TEXT,
    title: str | None = "Build a Django REST API",
    href: str | None = "/projects/python/build-django-rest-api-123",
    description: str | None = "Need an experienced developer to build a REST API with Django.",
    paragraph: str | None = None,
) -> AsyncMock:
    """Build a mock card element satisfying the ElementLike protocol."""
    link = AsyncMock()
    link.get_attribute.return_value = href

    children: dict[str, AsyncMock | None] = {
        "h2": _element(title) if title is not None else None,
        ".job-description": _element(description) if description is not None else None,
        "p": _element(paragraph) if paragraph is not None else None,
        SELECTORS.job_link: link if href is not None else None,
    }

    card = AsyncMock()
    card.text_content.return_value = raw_text

    async def _query_selector(selector: str) -> AsyncMock | None:
        return children.get(selector)

    card.query_selector = AsyncMock(side_effect=_query_selector)
    return card


@pytest.fixture
def extractor() -> ListingExtractor:
    return ListingExtractor(BASE, SELECTORS)


# ---------------------------------------------------------------------------
# TestExtract
# ---------------------------------------------------------------------------


class TestExtract:
    """Full card extraction."""

    async def test_full_card(self, extractor: ListingExtractor) -> None:
        job = await extractor.extract(_make_mock_card())
        assert job is not None
        assert job.title == "Build a Django REST API"
        assert job.description.startswith("Need an experienced developer")
        assert job.budget == "$500 - $800"
        assert job.hourly_rate == ""
        assert job.job_type is JobType.FIXED_PRICE
        assert job.skills == ("Python", "Django", "PostgreSQL")
        assert job.posted_time == "2 days ago"
        assert job.client_info == "3 reviews, Payment verified"
        assert job.experience_level is ExperienceLevel.EXPERT
        assert job.job_url == f"{BASE}/projects/python/build-django-rest-api-123"

    async def test_platform_left_unset(self, extractor: ListingExtractor) -> None:
        job = await extractor.extract(_make_mock_card())
        assert job is not None
        assert job.platform == ""

    async def test_broken_element_returns_none(self, extractor: ListingExtractor) -> None:
        card = _make_mock_card()
        card.text_content.side_effect = RuntimeError("element detached")
        assert await extractor.extract(card) is None

    async def test_empty_card_uses_placeholders(self, extractor: ListingExtractor) -> None:
        card = _make_mock_card(raw_text="", title=None, href=None, description=None)
        job = await extractor.extract(card)
        assert job is not None
        assert job.title == "Untitled Job"
        assert job.description == "No description available"
        assert job.job_url == ""
        assert job.job_type is JobType.NOT_SPECIFIED
        assert job.client_info == "Client information not available"
        assert job.posted_time == "Recently posted"


# ---------------------------------------------------------------------------
# TestTitle
# ---------------------------------------------------------------------------


class TestTitle:
    async def test_whitespace_collapsed(self, extractor: ListingExtractor) -> None:
        job = await extractor.extract(_make_mock_card(title="  Build   a\n landing page "))
        assert job is not None
        assert job.title == "Build a landing page"

    async def test_placeholder_text_skipped(self, extractor: ListingExtractor) -> None:
        """A child literally reading the placeholder falls through to raw text."""
        job = await extractor.extract(_make_mock_card(title="Untitled Job"))
        assert job is not None
        assert job.title == "Build a Django REST API"

    async def test_raw_text_fallback(self, extractor: ListingExtractor) -> None:
        raw = "$300\nWrite ten blog posts about fintech\nBudget: $300"
        job = await extractor.extract(_make_mock_card(raw_text=raw, title=None))
        assert job is not None
        assert job.title == "Write ten blog posts about fintech"


# ---------------------------------------------------------------------------
# TestUrl
# ---------------------------------------------------------------------------


class TestUrl:
    async def test_absolute_href_kept(self, extractor: ListingExtractor) -> None:
        href = "https://www.freelancer.in/projects/design/logo-42"
        job = await extractor.extract(_make_mock_card(href=href))
        assert job is not None
        assert job.job_url == href

    async def test_blank_href(self, extractor: ListingExtractor) -> None:
        job = await extractor.extract(_make_mock_card(href="   "))
        assert job is not None
        assert job.job_url == ""


# ---------------------------------------------------------------------------
# TestDescription
# ---------------------------------------------------------------------------


class TestDescription:
    async def test_short_text_falls_through_to_next_selector(
        self, extractor: ListingExtractor,
    ) -> None:
        card = _make_mock_card(
            description="$500",
            paragraph="Looking for someone to design a mobile onboarding flow.",
        )
        job = await extractor.extract(card)
        assert job is not None
        assert job.description == "Looking for someone to design a mobile onboarding flow."

    async def test_truncated_to_500(self, extractor: ListingExtractor) -> None:
        job = await extractor.extract(_make_mock_card(description="word " * 300))
        assert job is not None
        assert len(job.description) == 500

    async def test_raw_text_fallback(self, extractor: ListingExtractor) -> None:
        raw = "\n".join([
            "Migrate legacy site to a modern stack quickly",
            "We need a developer to migrate our legacy PHP site",
            "The new stack should be Django with a Postgres database",
        ])
        job = await extractor.extract(_make_mock_card(raw_text=raw, description=None))
        assert job is not None
        assert job.description == (
            "We need a developer to migrate our legacy PHP site "
            "The new stack should be Django with a Postgres database"
        )
