"""Abstract base class for platform adapters.

An adapter owns one rendering session for the duration of a scrape() call:

    IDLE -> INITIALIZING -> NAVIGATING -> EXTRACTING -> CLEANUP -> SUCCESS
                 |               |             |
                 +---------------+-------------+--> CLEANUP -> FAILURE

CLEANUP always runs and never changes the outcome.
"""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from gigscraper.browser.actions import settle_delay
from gigscraper.core.config import AdapterConfig, SearchFilters
from gigscraper.core.errors import InitializationError, NavigationError
from gigscraper.core.retry import retry
from gigscraper.core.schemas import Listing, ScrapeResult
from gigscraper.platforms.extractor import ListingExtractor
from gigscraper.platforms.tiers import SelectorTier, find_listing_elements

logger = logging.getLogger(__name__)

READY_SELECTOR_TIMEOUT_MS = 10000
NAVIGATION_RETRY_BASE_DELAY = 1.0


class SessionLike(Protocol):
    """The slice of the rendering collaborator adapters rely on."""

    async def goto(self, url: str, timeout_ms: int) -> None: ...
    async def wait_for(self, selector: str, timeout_ms: int) -> bool: ...
    async def query_all(self, selector: str) -> list[Any]: ...
    async def screenshot(self, path: str | Path) -> None: ...
    async def close(self) -> None: ...


SessionFactory = Callable[[AdapterConfig], Awaitable[SessionLike]]


class AdapterState(str, Enum):
    IDLE = "idle"
    INITIALIZING = "initializing"
    NAVIGATING = "navigating"
    EXTRACTING = "extracting"
    CLEANUP = "cleanup"
    SUCCESS = "success"
    FAILURE = "failure"


async def _launch_browser(config: AdapterConfig) -> SessionLike:
    # Imported lazily so adapters can be built and tested without patchright.
    from gigscraper.browser.session import BrowserSession

    return await BrowserSession.launch(config)


class PlatformAdapter(ABC):
    """Base class that every platform adapter must implement."""

    def __init__(
        self,
        config: AdapterConfig,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self._config = config
        self._session_factory = session_factory or _launch_browser
        self._session: SessionLike | None = None
        self._state = AdapterState.IDLE

    # --- Platform capabilities ---

    @property
    @abstractmethod
    def platform_id(self) -> str:
        """Unique identifier for this platform (e.g. 'freelancer')."""

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Scheme + host used to resolve relative links."""

    @property
    @abstractmethod
    def ready_selectors(self) -> tuple[str, ...]:
        """Selectors whose appearance means listings have rendered, in probe order."""

    @property
    @abstractmethod
    def selector_tiers(self) -> tuple[SelectorTier, ...]:
        """Ordered tiers used to locate listing elements."""

    @property
    @abstractmethod
    def extractor(self) -> ListingExtractor:
        """Field extractor bound to this platform's selectors."""

    @abstractmethod
    def build_search_url(self, filters: SearchFilters) -> str:
        """Pure URL construction from filters."""

    @abstractmethod
    def get_supported_categories(self) -> list[str]:
        """Static category vocabulary (no network)."""

    # --- State ---

    @property
    def config(self) -> AdapterConfig:
        return self._config

    @property
    def state(self) -> AdapterState:
        return self._state

    @property
    def session(self) -> SessionLike:
        if self._session is None:
            msg = "Session not initialized. Call initialize() first."
            raise RuntimeError(msg)
        return self._session

    # --- Steps ---

    async def initialize(self) -> None:
        """Acquire a rendering session (reuses one that is already open)."""
        if self._session is not None:
            logger.debug("%s session already open, reusing it", self.platform_id)
            return
        logger.info("Initializing %s adapter...", self.platform_id)
        try:
            self._session = await self._session_factory(self._config)
        except Exception as e:
            msg = f"Failed to start browser session for {self.platform_id}: {e}"
            raise InitializationError(msg) from e

    async def navigate_to_jobs_page(self, filters: SearchFilters) -> None:
        session = self.session
        url = self.build_search_url(filters)
        logger.info("Navigating to: %s", url)

        try:
            await retry(
                lambda: session.goto(url, self._config.timeout_ms),
                max_attempts=self._config.retry_attempts,
                base_delay=NAVIGATION_RETRY_BASE_DELAY,
            )
        except Exception as e:
            msg = f"Failed to load {url}: {e}"
            raise NavigationError(msg) from e

        ready = await self._probe_ready_selectors(session)
        if ready is None:
            logger.warning(
                "No ready selector matched on %s, continuing with generic extraction",
                self.platform_id,
            )
            await self._save_debug_screenshot(session)

        await settle_delay()

    async def extract_jobs(self) -> list[Listing]:
        """Locate listing elements and extract at most max_jobs listings."""
        match = await find_listing_elements(self.session, self.selector_tiers)
        if match is None:
            return []

        listings: list[Listing] = []
        skipped = 0
        for element in match.elements:
            if len(listings) >= self._config.max_jobs:
                break
            listing = await self.extractor.extract(element)
            if listing is None:
                skipped += 1
                continue
            listings.append(listing)

        logger.info(
            "Extracted %d listings from %d elements (%s tier, %d skipped)",
            len(listings), len(match.elements), match.tier, skipped,
        )
        return listings

    async def cleanup(self) -> None:
        """Close the session if one is open. Never raises."""
        session, self._session = self._session, None
        if session is None:
            return
        try:
            await session.close()
        except Exception:
            logger.warning("Error during %s cleanup", self.platform_id, exc_info=True)

    async def scrape(self, filters: SearchFilters) -> ScrapeResult:
        """Run initialize → navigate → extract and always clean up."""
        started_at = datetime.now()
        search_query = build_search_query(filters)
        listings: list[Listing] = []
        errors: list[str] = []

        try:
            self._state = AdapterState.INITIALIZING
            await self.initialize()
            self._state = AdapterState.NAVIGATING
            await self.navigate_to_jobs_page(filters)
            self._state = AdapterState.EXTRACTING
            listings = await self.extract_jobs()
        except Exception as e:
            logger.error("Scrape failed on %s during %s: %s", self.platform_id, self._state.value, e)
            errors.append(str(e) or type(e).__name__)
        finally:
            self._state = AdapterState.CLEANUP
            await self.cleanup()

        if errors:
            self._state = AdapterState.FAILURE
            return ScrapeResult(
                jobs=[],
                platform=self.platform_id,
                search_query=search_query,
                timestamp=started_at,
                success=False,
                errors=errors,
            )

        stamped = [job.model_copy(update={"platform": self.platform_id}) for job in listings]
        self._state = AdapterState.SUCCESS
        return ScrapeResult(
            jobs=stamped,
            platform=self.platform_id,
            search_query=search_query,
            timestamp=started_at,
            success=True,
        )

    # --- Private helpers ---

    async def _probe_ready_selectors(self, session: SessionLike) -> str | None:
        for selector in self.ready_selectors:
            if await session.wait_for(selector, READY_SELECTOR_TIMEOUT_MS):
                logger.info("Jobs loaded with selector: %s", selector)
                return selector
            logger.debug("Selector '%s' not found, trying next", selector)
        return None

    async def _save_debug_screenshot(self, session: SessionLike) -> None:
        path = Path(self._config.screenshot_dir) / (
            f"debug-{self.platform_id}-{int(time.time() * 1000)}.png"
        )
        try:
            await session.screenshot(path)
            logger.info("Saved debug screenshot to %s", path)
        except Exception:
            logger.warning("Could not save debug screenshot", exc_info=True)


def build_search_query(filters: SearchFilters) -> str:
    """Human-readable summary of the non-default filters, for logs and results."""
    parts: list[str] = []
    if filters.keyword:
        parts.append(f'keyword: "{filters.keyword}"')
    if filters.category:
        parts.append(f'category: "{filters.category}"')
    if filters.tags:
        parts.append(f"tags: [{', '.join(filters.tags)}]")
    if filters.job_type != "all":
        parts.append(f"type: {filters.job_type}")
    if filters.experience_level != "all":
        parts.append(f"experience: {filters.experience_level}")
    if filters.min_budget:
        parts.append(f"min budget: {filters.min_budget}")
    if filters.max_budget:
        parts.append(f"max budget: {filters.max_budget}")
    if filters.location:
        parts.append(f'location: "{filters.location}"')
    if filters.sort_by != "relevance":
        parts.append(f"sort: {filters.sort_by}")
    return ", ".join(parts) if parts else "no filters"
