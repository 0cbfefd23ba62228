#!/usr/bin/env python3
"""
Constants used by the Entra Login application.
"""

# URLs
PORTAL_URL = "https://www.microsoft365.com"
LOGIN_PATH = "/login"

# Browser defaults
DEFAULT_LOCALE = "en-GB"
DEFAULT_MEDIA = "screen"
DEFAULT_TIMEOUT_MS = 30000  # Playwright's own default for waits and actions

# CSS selectors used on the Microsoft sign-in pages. The submit selector is
# shared by the "Next", "Sign in", "Verify" and "Yes" buttons.
USERNAME_INPUT_SELECTOR = "input[type=email]"
PASSWORD_INPUT_SELECTOR = "input[type=password]"
SUBMIT_SELECTOR = "input[type=submit]"
OTP_INPUT_SELECTOR = "input[name=otc]"
KMSI_CHECKBOX_SELECTOR = "#KmsiCheckboxField"

# Branch names reported by the MFA / "Stay signed in?" race
MFA_BRANCH = "otp"
KMSI_BRANCH = "kmsi"

# RFC 6238 parameters
TOTP_INTERVAL = 30
TOTP_DIGITS = 6

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
