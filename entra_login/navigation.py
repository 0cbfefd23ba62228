#!/usr/bin/env python3
"""
Page navigation and element wait helpers.

Every helper converts Playwright timeouts into LoginTimeoutError so callers
only deal with the application's own exception hierarchy.
"""
import asyncio
from typing import Dict, NamedTuple, Optional

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from entra_login import logger
from entra_login.constants import LOGIN_PATH
from entra_login.utils.error_utils import LoginTimeoutError, handle_errors

class FirstMatch(NamedTuple):
    """Result of wait_for_first: which candidate appeared, and its selector."""
    name: str
    selector: str

def login_url_for(portal_url: str) -> str:
    """Build the URL that forces the portal to show the sign-in page."""
    return f"{portal_url.rstrip('/')}{LOGIN_PATH}"

@handle_errors(error_category="navigation_errors")
async def open_login_page(page: Page, portal_url: str, timeout: Optional[float] = None) -> None:
    """Navigate to the portal's login URL."""
    url = login_url_for(portal_url)
    logger.info(f"Navigating to {url}...")
    try:
        await page.goto(url, timeout=timeout)
    except PlaywrightTimeoutError as e:
        raise LoginTimeoutError(f"Timed out loading {url}") from e

async def fill_field(page: Page, selector: str, value: str, timeout: Optional[float] = None) -> None:
    try:
        await page.fill(selector, value, timeout=timeout)
    except PlaywrightTimeoutError as e:
        raise LoginTimeoutError(f"Timed out waiting to fill {selector}") from e

async def click_element(page: Page, selector: str, timeout: Optional[float] = None) -> None:
    try:
        await page.click(selector, timeout=timeout)
    except PlaywrightTimeoutError as e:
        raise LoginTimeoutError(f"Timed out waiting to click {selector}") from e

async def wait_for_detached(page: Page, selector: str, timeout: Optional[float] = None) -> None:
    """
    Wait until no element matches ``selector``.

    The sign-in pages are animated and reuse selectors between steps, so the
    next step must not start until the previous input has left the DOM.
    """
    logger.debug(f"Waiting for {selector} to detach")
    try:
        await page.locator(selector).wait_for(state="detached", timeout=timeout)
    except PlaywrightTimeoutError as e:
        raise LoginTimeoutError(f"Timed out waiting for {selector} to detach") from e

async def wait_for_first(
    page: Page,
    candidates: Dict[str, str],
    timeout: Optional[float] = None
) -> FirstMatch:
    """
    Wait for whichever of several selectors becomes visible first.

    Args:
        page: The Playwright page object.
        candidates: Mapping of branch name to selector. Order matters: when
            several waits settle in the same loop iteration the earliest
            entry wins.
        timeout: Per-wait timeout in milliseconds (None uses the page default).

    Returns:
        FirstMatch naming the winning candidate.

    Raises:
        LoginTimeoutError: If none of the selectors appeared in time.
    """
    if not candidates:
        raise ValueError("wait_for_first needs at least one candidate")

    tasks = {
        name: asyncio.ensure_future(page.wait_for_selector(selector, state="visible", timeout=timeout))
        for name, selector in candidates.items()
    }
    try:
        await asyncio.wait(tasks.values(), return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [task for task in tasks.values() if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    settled = {
        name: task.exception()
        for name, task in tasks.items()
        if task.done() and not task.cancelled()
    }
    for name, error in settled.items():
        if error is None:
            logger.debug(f"First element to appear: {name} ({candidates[name]})")
            return FirstMatch(name, candidates[name])

    for error in settled.values():
        if isinstance(error, PlaywrightTimeoutError):
            raise LoginTimeoutError(
                f"Timed out waiting for any of: {', '.join(candidates.values())}"
            ) from error
        raise error

    # Only reachable if every task was cancelled from outside
    raise asyncio.CancelledError()
