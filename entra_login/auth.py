#!/usr/bin/env python3
"""
Authentication module for the Entra Login application.
"""
from typing import Callable, Optional

from playwright.async_api import Page

from entra_login import logger
from entra_login.constants import MFA_BRANCH, KMSI_BRANCH
from entra_login.models import Credentials, LoginSelectors
from entra_login.navigation import (
    click_element,
    fill_field,
    wait_for_detached,
    wait_for_first,
)
from entra_login.otp import compute_otp, mask_otp
from entra_login.utils.error_utils import AuthenticationError, handle_errors

@handle_errors(error_category="auth_errors", error_class=AuthenticationError)
async def login_to_portal(
    page: Page,
    credentials: Credentials,
    selectors: Optional[LoginSelectors] = None,
    timeout: Optional[float] = None,
    otp_provider: Callable[[str], str] = compute_otp
) -> None:
    """
    Sign in to Microsoft Entra ID on a page already showing the login form.

    The page is expected to be freshly navigated in a context without cookies,
    so the username is never remembered from an earlier session.

    Args:
        page: The Playwright page object.
        credentials: Username, password and MFA secret.
        selectors: Selectors for the sign-in elements (defaults to the Microsoft ones).
        timeout: Per-step timeout in milliseconds (None uses the page default).
        otp_provider: Callable returning the current one-time code for a secret.

    Raises:
        LoginTimeoutError: If an expected element never appeared or detached.
        InvalidSecretError: If an OTP is requested and the secret is not base32.
    """
    selectors = selectors or LoginSelectors()

    # Enter username; the "Next" button shares the submit selector
    logger.info("Entering username...")
    await fill_field(page, selectors.username_input, credentials.username, timeout)
    await click_element(page, selectors.submit, timeout)
    await wait_for_detached(page, selectors.username_input, timeout)

    logger.info("Entering password...")
    await fill_field(page, selectors.password_input, credentials.password, timeout)
    await click_element(page, selectors.submit, timeout)
    await wait_for_detached(page, selectors.password_input, timeout)

    # Whichever shows up first decides whether MFA is required
    match = await wait_for_first(page, {
        MFA_BRANCH: selectors.otp_input,
        KMSI_BRANCH: selectors.kmsi_checkbox,
    }, timeout)

    if match.name == MFA_BRANCH:
        otp = otp_provider(credentials.mfa_secret)
        logger.info(f"Entering one-time code {mask_otp(otp)}...")
        await fill_field(page, selectors.otp_input, otp, timeout)
        await click_element(page, selectors.submit, timeout)
        await wait_for_detached(page, selectors.otp_input, timeout)
    else:
        logger.info("No MFA prompt detected, continuing...")

    # "Yes" on the "Stay signed in?" page
    logger.info("Confirming 'Stay signed in?' prompt...")
    await click_element(page, selectors.submit, timeout)
    logger.info("Successfully logged in!")
