"""Playwright-backed renderer engine."""

from typing import Any, Dict, Optional

from playwright.async_api import Browser, Page, Playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from svgraster.config import Settings
from svgraster.config import settings as default_settings
from svgraster.core.constants import LOAD_STATUS_FAIL, LOAD_STATUS_SUCCESS
from svgraster.core.exceptions import EngineError
from svgraster.utils.logging import get_logger

from .base import PageScript, RendererEngine, RendererPage

logger = get_logger(__name__)


class PlaywrightPage(RendererPage):
    """A browser page holding one SVG document."""

    def __init__(self, page: Page, omit_background: bool = True):
        self._page = page
        self._omit_background = omit_background

    async def load(self, content: str) -> str:
        try:
            response = await self._page.goto(content)
        except PlaywrightError as e:
            logger.debug("page_load_error", error=e)
            return LOAD_STATUS_FAIL
        # Data URIs may complete without a response object
        if response is not None and not response.ok:
            return f"{LOAD_STATUS_FAIL} ({response.status})"
        return LOAD_STATUS_SUCCESS

    async def evaluate(self, script: PageScript, arg: Any = None) -> Any:
        return await self._page.evaluate(script.source, arg)

    async def set_viewport(self, size: Dict[str, int]) -> None:
        await self._page.set_viewport_size(size)

    async def render(self, destination_path: str) -> None:
        await self._page.screenshot(
            path=destination_path,
            full_page=True,
            omit_background=self._omit_background,
        )

    async def close(self) -> None:
        await self._page.close()


class PlaywrightEngine(RendererEngine):
    """One browser process shared by all pages of a batch."""

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        settings: Optional[Settings] = None,
    ):
        self._playwright = playwright
        self._browser = browser
        self.settings = settings or default_settings

    @classmethod
    async def create(cls, settings: Optional[Settings] = None) -> "PlaywrightEngine":
        """Start Playwright and launch the configured browser.

        Raises:
            EngineError: If the driver or the browser fails to start
        """
        settings = settings or default_settings
        playwright = None
        try:
            playwright = await async_playwright().start()
            browser_type = getattr(playwright, settings.browser_type)
            browser = await browser_type.launch(headless=settings.headless)
        except PlaywrightError as e:
            if playwright is not None:
                await playwright.stop()
            raise EngineError(
                f"Failed to launch {settings.browser_type}: {e.message}",
                details={
                    "browser_type": settings.browser_type,
                    "operation": "launch",
                    "reason": e.message,
                },
            ) from e

        logger.info(
            "engine_started",
            browser_type=settings.browser_type,
            version=browser.version,
        )
        return cls(playwright, browser, settings)

    async def new_page(self) -> PlaywrightPage:
        try:
            page = await self._browser.new_page()
        except PlaywrightError as e:
            raise EngineError(
                f"Failed to create page: {e.message}",
                details={"operation": "new_page", "reason": e.message},
            ) from e

        if self.settings.navigation_timeout_ms is not None:
            page.set_default_timeout(self.settings.navigation_timeout_ms)
        if self.settings.log_page_console:
            page.on(
                "console",
                lambda message: logger.debug(
                    "page_console", type=message.type, text=message.text
                ),
            )
        return PlaywrightPage(page, omit_background=self.settings.omit_background)

    async def exit(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()
        logger.info("engine_stopped")
