"""
Orchestration logic for Entra Login.

- Opens the browser session, navigates to the portal and runs the sign-in.
- Holds the authenticated page open until the user dismisses it.
"""

from entra_login import logger
from entra_login.auth import login_to_portal
from entra_login.browser import browser_session
from entra_login.navigation import open_login_page
from entra_login.app.cli import wait_for_keypress
from entra_login.utils.error_utils import (
    error_screenshot_context, register_console_listener, unregister_console_listener
)

async def run_login(app, keypress=wait_for_keypress):
    async with browser_session(headless=app.headless, locale=app.locale, timeout=app.timeout) as session:
        app.set_session(session)
        page = session.page
        register_console_listener(page)

        try:
            async with error_screenshot_context(page, "login", "auth_errors", take_screenshot=app.enable_screenshots):
                await open_login_page(page, app.portal_url, app.timeout)
                await login_to_portal(page, app.credentials, app.selectors, app.timeout)

            # The page is now signed in and can be used to reach any
            # Microsoft 365 service the account has access to.
            logger.info(f"Authenticated page ready at {session.url}")
            await keypress()
        finally:
            unregister_console_listener(page)
            app.set_session(None)
