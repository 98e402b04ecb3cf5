"""Playwright rendering of pages to audit."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, TypeVar

import structlog
from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeout

from .config import settings
from .exceptions import FetchError
from .models import FetchedPage

logger = structlog.get_logger()

T = TypeVar("T")

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)
SKIPPED_LINK_SCHEMES = ("javascript:", "mailto:", "tel:")

# Absolute hrefs of anchors that take up layout space
VISIBLE_HREFS_JS = """
() => Array.from(document.querySelectorAll('a[href]'))
    .filter(a => a.offsetParent !== null)
    .map(a => a.href)
"""


async def with_retries(
    operation: Callable[[], Awaitable[T]],
    attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
) -> T:
    """Await ``operation()`` up to ``attempts`` times, doubling the pause between tries."""
    attempts = max(1, attempts)

    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt == attempts:
                raise
            delay = min(base_delay * 2 ** (attempt - 1), max_delay)
            logger.debug("Navigation failed, retrying", attempt=attempt, delay=delay, error=str(e))
            await asyncio.sleep(delay)


def filter_links(hrefs: list[str]) -> list[str]:
    """Drop script, mail and phone links and duplicates, keeping first-seen order."""
    kept = (href for href in hrefs if href and not href.lower().startswith(SKIPPED_LINK_SCHEMES))
    return list(dict.fromkeys(kept))


class AuditBrowser:
    """Headless Chromium session that renders pages for the auditor.

    Each rendered page gets its own browser context, so cookies and storage
    never leak from one audit into the next.
    """

    def __init__(self, headless: bool | None = None):
        self.headless = settings.browser_headless if headless is None else headless
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> "AuditBrowser":
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.headless,
            args=list(CHROMIUM_ARGS),
        )
        logger.info("Browser launched", headless=self.headless)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()
        self._browser = self._playwright = None
        logger.info("Browser closed")

    @asynccontextmanager
    async def tab(self) -> AsyncIterator[Page]:
        """Open a page in a fresh context sized like the screenshot viewport."""
        if self._browser is None:
            raise RuntimeError("AuditBrowser must be entered with 'async with' first")

        context = await self._browser.new_context(
            viewport={"width": settings.screenshot_width, "height": settings.screenshot_height},
            user_agent=settings.user_agent,
        )
        try:
            yield await context.new_page()
        finally:
            await context.close()

    async def render(
        self,
        url: str,
        include_screenshot: bool = False,
        include_links: bool = False,
    ) -> FetchedPage:
        """
        Load ``url`` and collect the audit inputs.

        Args:
            url: Absolute http(s) URL to load
            include_screenshot: Capture a PNG screenshot
            include_links: Collect the page's visible links

        Returns:
            FetchedPage with the serialized DOM

        Raises:
            FetchError: If the page could not be loaded after retries
        """
        async with self.tab() as page:
            await self._navigate(page, url)
            try:
                await page.wait_for_timeout(settings.js_wait_timeout)
                html = await page.content()
            except PlaywrightError as e:
                raise FetchError(f"Could not read the rendered DOM of {url}: {e}") from e

            fetched = FetchedPage(url=url, html=html)
            if include_screenshot:
                fetched.screenshot = await self._screenshot(page)
            if include_links:
                fetched.links = await self._visible_links(page)

        logger.info(
            "Page rendered",
            url=url,
            size=len(fetched.html),
            screenshot=fetched.screenshot is not None,
            links=len(fetched.links),
        )
        return fetched

    async def _navigate(self, page: Page, url: str) -> None:
        async def goto() -> None:
            response = await page.goto(url, wait_until="networkidle", timeout=settings.page_load_timeout)
            if response is None:
                raise FetchError(f"No response received for {url}")
            if response.status >= 400:
                raise FetchError(f"HTTP {response.status} for {url}")

        try:
            await with_retries(goto, attempts=settings.max_retries)
        except FetchError:
            raise
        except PlaywrightTimeout as e:
            raise FetchError(f"Page load timed out for {url}") from e
        except Exception as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

    async def _visible_links(self, page: Page) -> list[str]:
        # Links are best-effort, like screenshots
        try:
            return filter_links(await page.evaluate(VISIBLE_HREFS_JS))
        except Exception as e:
            logger.warning("Link collection failed", url=page.url, error=str(e))
            return []

    async def _screenshot(self, page: Page) -> bytes | None:
        # Screenshots are best-effort
        try:
            return await page.screenshot(
                full_page=settings.screenshot_full_page,
                type="png",
                animations="disabled",
            )
        except Exception as e:
            logger.warning("Screenshot capture failed", url=page.url, error=str(e))
            return None
