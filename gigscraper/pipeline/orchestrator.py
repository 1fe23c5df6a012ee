"""Orchestrator: wires the adapter registry, scraping runs, and persistence.

Data flow:
  1. Registry lookup (unknown id is caller misuse → UnknownPlatformError)
  2. Adapter scrape → ScrapeResult (success or failure, never raises)
  3. Per-platform artifacts when the platform produced listings
  4. Politeness delay, then the next platform (strictly sequential)
  5. Combined artifacts when the whole run produced listings
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from gigscraper.browser.actions import politeness_delay
from gigscraper.core.config import ScraperSettings, SearchFilters
from gigscraper.core.schemas import ScrapeResult, ScrapeStatistics
from gigscraper.core.storage import ResultStore
from gigscraper.pipeline import stats
from gigscraper.platforms import AdapterRegistry
from gigscraper.platforms.base import SessionFactory, build_search_query

logger = logging.getLogger(__name__)


class ScraperOrchestrator:
    """Drives single- and multi-platform scraping runs.

    Usage::

        orchestrator = ScraperOrchestrator(ScraperSettings(output_format="both"))
        results = await orchestrator.scrape_all(SearchFilters(keyword="python"))
        print(orchestrator.get_statistics(results).top_skills)
    """

    def __init__(
        self,
        settings: ScraperSettings | None = None,
        *,
        registry: AdapterRegistry | None = None,
        store: ResultStore | None = None,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self._settings = settings or ScraperSettings()
        self._session_factory = session_factory
        self._registry = registry if registry is not None else self._build_registry(self._settings)
        self._store = store if store is not None else ResultStore(
            self._settings.output_dir, self._settings.output_format,
        )

    @property
    def settings(self) -> ScraperSettings:
        return self._settings

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    def supported_platforms(self) -> list[str]:
        return self._registry.platforms()

    def supported_categories(self, platform: str) -> list[str]:
        """Category vocabulary for a platform, or [] if it is not registered."""
        if platform not in self._registry:
            return []
        return self._registry.get(platform).get_supported_categories()

    async def scrape_single_platform(
        self, platform: str, filters: SearchFilters,
    ) -> ScrapeResult:
        """Scrape one platform and persist its listings.

        Raises:
            UnknownPlatformError: If no adapter is registered for ``platform``.
        """
        adapter = self._registry.get(platform)

        logger.info("Starting scraping for platform: %s", platform)
        logger.debug("Search filters: %s", filters.model_dump())

        try:
            result = await adapter.scrape(filters)
        except Exception as e:
            logger.error("Scraping failed for %s: %s", platform, e)
            return _failure(platform, filters, e)

        if result.jobs:
            self._persist(lambda: self._store.save_result(result))

        logger.info(
            "Scraping completed for %s: %d jobs found (success=%s)",
            platform, len(result.jobs), result.success,
        )
        return result

    async def scrape_multiple_platforms(
        self, platforms: list[str], filters: SearchFilters,
    ) -> list[ScrapeResult]:
        """Scrape platforms one after another; one failure never stops the rest.

        Returns exactly one result per requested platform, in request order.
        """
        results: list[ScrapeResult] = []

        for index, platform in enumerate(platforms):
            logger.info("Processing platform: %s", platform)
            try:
                result = await self.scrape_single_platform(platform, filters)
            except Exception as e:
                logger.error("Failed to scrape from %s: %s", platform, e)
                result = _failure(platform, filters, e)
            results.append(result)

            if index < len(platforms) - 1:
                await politeness_delay(self._settings.delay_between_requests)

        if any(r.jobs for r in results):
            self._persist(lambda: self._store.save_combined(results, filters))

        return results

    async def scrape_all(self, filters: SearchFilters) -> list[ScrapeResult]:
        platforms = self.supported_platforms()
        logger.info("Scraping from all platforms: %s", ", ".join(platforms))
        return await self.scrape_multiple_platforms(platforms, filters)

    async def quick_search(
        self,
        keyword: str,
        category: str | None = None,
        platforms: list[str] | None = None,
    ) -> list[ScrapeResult]:
        filters = SearchFilters(keyword=keyword, category=category)
        return await self.scrape_multiple_platforms(self._targets(platforms), filters)

    async def search_by_tags(
        self,
        tags: list[str],
        category: str | None = None,
        platforms: list[str] | None = None,
    ) -> list[ScrapeResult]:
        filters = SearchFilters(tags=tuple(tags), category=category)
        return await self.scrape_multiple_platforms(self._targets(platforms), filters)

    async def advanced_search(
        self, filters: SearchFilters, platforms: list[str] | None = None,
    ) -> list[ScrapeResult]:
        return await self.scrape_multiple_platforms(self._targets(platforms), filters)

    def get_statistics(self, results: list[ScrapeResult]) -> ScrapeStatistics:
        return stats.get_statistics(results)

    def update_config(self, **changes: Any) -> None:
        """Validate new settings and swap in a freshly built registry and store."""
        merged = {**self._settings.model_dump(), **changes}
        settings = ScraperSettings.model_validate(merged)
        registry = self._build_registry(settings)
        store = ResultStore(settings.output_dir, settings.output_format)
        # Nothing is swapped until every piece has been built.
        self._settings, self._registry, self._store = settings, registry, store
        logger.info("Configuration updated, adapters rebuilt: %s", ", ".join(self.supported_platforms()))

    async def cleanup(self) -> None:
        for adapter in self._registry.adapters():
            try:
                await adapter.cleanup()
            except Exception:
                logger.warning("Error cleaning up %s adapter", adapter.platform_id, exc_info=True)

    # --- Private helpers ---

    def _build_registry(self, settings: ScraperSettings) -> AdapterRegistry:
        return AdapterRegistry.build(
            settings.to_adapter_config(),
            settings.platforms or None,
            self._session_factory,
        )

    def _targets(self, platforms: list[str] | None) -> list[str]:
        return platforms or self.supported_platforms()

    def _persist(self, save: Callable[[], object]) -> None:
        try:
            save()
        except Exception:
            logger.error("Error saving results", exc_info=True)


def _failure(platform: str, filters: SearchFilters, error: Exception) -> ScrapeResult:
    return ScrapeResult(
        jobs=[],
        platform=platform,
        search_query=build_search_query(filters),
        timestamp=datetime.now(),
        success=False,
        errors=[str(error) or type(error).__name__],
    )
