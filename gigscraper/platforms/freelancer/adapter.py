"""Freelancer platform adapter: wires the URL builder, selectors and extractor."""

from gigscraper.core.config import AdapterConfig, SearchFilters
from gigscraper.platforms.base import PlatformAdapter, SessionFactory
from gigscraper.platforms.extractor import FieldSelectors, ListingExtractor
from gigscraper.platforms.freelancer.searcher import (
    FREELANCER_BASE,
    SUPPORTED_CATEGORIES,
    build_url,
)
from gigscraper.platforms.freelancer.selectors import (
    DESCRIPTION_SELECTORS,
    GENERIC_CARD_SELECTOR,
    JOB_LINK_SELECTOR,
    LEGACY_CARD_SELECTORS,
    MODERN_CARD_SELECTORS,
    READY_SELECTORS,
    TITLE_SELECTORS,
)
from gigscraper.platforms.tiers import SelectorTier, looks_like_listing

FREELANCER_TIERS: tuple[SelectorTier, ...] = (
    SelectorTier(name="modern", selectors=MODERN_CARD_SELECTORS),
    SelectorTier(name="legacy", selectors=LEGACY_CARD_SELECTORS),
    SelectorTier(
        name="generic",
        selectors=(GENERIC_CARD_SELECTOR,),
        accept=looks_like_listing,
    ),
)


class FreelancerAdapter(PlatformAdapter):
    """Freelancer.in project listings."""

    def __init__(
        self,
        config: AdapterConfig,
        session_factory: SessionFactory | None = None,
    ) -> None:
        super().__init__(config, session_factory)
        self._extractor = ListingExtractor(
            FREELANCER_BASE,
            FieldSelectors(
                title=TITLE_SELECTORS,
                description=DESCRIPTION_SELECTORS,
                job_link=JOB_LINK_SELECTOR,
            ),
        )

    @property
    def platform_id(self) -> str:
        return "freelancer"

    @property
    def base_url(self) -> str:
        return FREELANCER_BASE

    @property
    def ready_selectors(self) -> tuple[str, ...]:
        return READY_SELECTORS

    @property
    def selector_tiers(self) -> tuple[SelectorTier, ...]:
        return FREELANCER_TIERS

    @property
    def extractor(self) -> ListingExtractor:
        return self._extractor

    def build_search_url(self, filters: SearchFilters) -> str:
        return build_url(filters)

    def get_supported_categories(self) -> list[str]:
        return list(SUPPORTED_CATEGORIES)
