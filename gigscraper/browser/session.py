"""Browser session management using patchright.

The rest of the package only talks to the narrow surface exposed here:
goto, wait_for, query_all, screenshot, close. Elements returned by
query_all are patchright ElementHandles (query_selector, get_attribute,
text_content).

Hard rules:
  - One browser + context + page per session, owned by a single adapter run
  - Deterministic header and viewport profile (anti-detection)
  - wait_for never raises on absence; it answers True/False
"""

import logging
from pathlib import Path
from types import TracebackType
from typing import Any

from patchright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)
from patchright.async_api import TimeoutError as PatchrightTimeoutError

from gigscraper.core.config import AdapterConfig

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

EXTRA_HEADERS: dict[str, str] = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Upgrade-Insecure-Requests": "1",
}

VIEWPORT: dict[str, int] = {"width": 1920, "height": 1080}

LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-blink-features=AutomationControlled",
    "--window-size=1920,1080",
)


class BrowserSession:
    """Owns one patchright browser + context + page.

    Usage::

        session = await BrowserSession.launch(config)
        try:
            await session.goto("https://...", timeout_ms=60000)
            found = await session.wait_for(".card", timeout_ms=10000)
        finally:
            await session.close()

    Also usable as ``async with BrowserSession(config) as session``.
    """

    def __init__(self, config: AdapterConfig) -> None:
        self._config = config
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @classmethod
    async def launch(cls, config: AdapterConfig) -> "BrowserSession":
        """Start a browser and return a ready session."""
        session = cls(config)
        try:
            await session.start()
        except Exception:
            await session.close()
            raise
        return session

    @property
    def page(self) -> Page:
        """The single page for this session. Raises if not started."""
        if self._page is None:
            msg = "BrowserSession not started, use launch() or 'async with'"
            raise RuntimeError(msg)
        return self._page

    async def start(self) -> None:
        pw = await async_playwright().start()
        self._playwright = pw

        self._browser = await pw.chromium.launch(
            headless=self._config.headless,
            args=list(LAUNCH_ARGS),
        )
        self._context = await self._browser.new_context(
            user_agent=USER_AGENT,
            viewport=VIEWPORT,  # type: ignore[arg-type]
            extra_http_headers=EXTRA_HEADERS,
        )
        self._context.set_default_timeout(self._config.timeout_ms)
        self._page = await self._context.new_page()
        logger.debug("Browser session started (headless=%s)", self._config.headless)

    async def goto(self, url: str, timeout_ms: int) -> None:
        await self.page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)

    async def wait_for(self, selector: str, timeout_ms: int) -> bool:
        """Return True if ``selector`` appears within the timeout, else False."""
        try:
            handle = await self.page.wait_for_selector(selector, timeout=timeout_ms)
        except PatchrightTimeoutError:
            return False
        return handle is not None

    async def query_all(self, selector: str) -> list[Any]:
        return await self.page.query_selector_all(selector)  # type: ignore[no-any-return]

    async def screenshot(self, path: str | Path) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=str(path), full_page=False)

    async def close(self) -> None:
        """Release page, context, browser and driver. Safe to call twice."""
        context, browser, pw = self._context, self._browser, self._playwright
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        if context is not None:
            await context.close()
        if browser is not None:
            await browser.close()
        if pw is not None:
            await pw.stop()

    async def __aenter__(self) -> "BrowserSession":
        try:
            await self.start()
        except Exception:
            await self.close()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
