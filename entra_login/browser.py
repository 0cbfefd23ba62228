#!/usr/bin/env python3
"""
Browser lifecycle management.

The Playwright driver owns the browser, which owns the context, which owns
the page. browser_session acquires them in that order and releases them in
reverse on every exit path.
"""
import contextlib
from typing import Optional

from playwright.async_api import async_playwright, Error as PlaywrightError

from entra_login import logger, add_error
from entra_login.constants import DEFAULT_LOCALE, DEFAULT_MEDIA
from entra_login.utils.error_utils import BrowserLaunchError, async_resource_cleanup_context

class BrowserSession:
    """Handle to the browser objects behind an authenticated page."""

    def __init__(self, browser, context, page):
        self.browser = browser
        self.context = context
        self.page = page

    @property
    def url(self):
        return self.page.url

    async def cookies(self):
        """Return the cookies of the underlying browser context."""
        return await self.context.cookies()

@contextlib.asynccontextmanager
async def browser_session(
    headless: bool = False,
    locale: str = DEFAULT_LOCALE,
    timeout: Optional[float] = None
):
    """
    Launch Chromium and open a page in a fresh, cookie-less context.

    Args:
        headless: Whether to hide the browser window.
        locale: Locale for the browser context, e.g. "en-GB".
        timeout: Default timeout in milliseconds for page actions and waits.

    Yields:
        BrowserSession wrapping the browser, context and page.

    Raises:
        BrowserLaunchError: If the browser, context or page cannot be created.
    """
    async with async_playwright() as p:
        resources = {"browser": None, "context": None}
        cleanup_funcs = {
            "browser": lambda browser: browser.close(),
            "context": lambda context: context.close(),
        }

        async with async_resource_cleanup_context(resources, cleanup_funcs):
            try:
                logger.info(f"Launching Chromium (headless={headless}, locale={locale})...")
                resources["browser"] = await p.chromium.launch(headless=headless)
                resources["context"] = await resources["browser"].new_context(locale=locale)
                page = await resources["context"].new_page()
                await page.emulate_media(media=DEFAULT_MEDIA)
                if timeout is not None:
                    page.set_default_timeout(timeout)
            except PlaywrightError as e:
                add_error("browser_errors", f"Browser launch failed: {e}")
                raise BrowserLaunchError(f"Could not start the browser: {e}") from e

            yield BrowserSession(resources["browser"], resources["context"], page)
