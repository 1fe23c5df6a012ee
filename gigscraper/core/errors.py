"""Exception hierarchy for scraping runs."""


class ScraperError(Exception):
    """Base class for scraper errors."""


class InitializationError(ScraperError):
    """The rendering session could not be acquired."""


class NavigationError(ScraperError):
    """The search page could not be loaded, even after retries."""


class UnknownPlatformError(ScraperError, ValueError):
    """No adapter is registered under the requested platform id."""

    def __init__(self, platform: str, available: list[str]) -> None:
        self.platform = platform
        self.available = available
        valid = ", ".join(sorted(available)) or "none"
        super().__init__(f"Unknown platform '{platform}'. Available: {valid}")
