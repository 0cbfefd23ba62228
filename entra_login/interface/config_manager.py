"""
Configuration management for Entra Login.

- Validates CLI args and credentials before anything is launched.
- Prepares the config dictionary for the application.
"""

from pydantic import ValidationError

from entra_login import logger
from entra_login.models import Credentials, LoginSelectors
from entra_login.utils.error_utils import (
    ConfigurationError,
    CredentialsError,
    InvalidSecretError,
)

def load_credentials(username, password, mfa_secret):
    """
    Build the credential bundle, failing fast on unusable values.

    Raises:
        InvalidSecretError: If the MFA secret is not valid base32.
        CredentialsError: If the username or password is empty.
    """
    try:
        return Credentials(username=username, password=password, mfa_secret=mfa_secret)
    except ValidationError as e:
        # Report field names and messages only, never the rejected values
        problems = {err["loc"][0]: err["msg"] for err in e.errors()}
        if "mfa_secret" in problems or "mfaSecret" in problems:
            raise InvalidSecretError(problems.get("mfa_secret") or problems.get("mfaSecret")) from None
        details = "; ".join(f"{field}: {msg}" for field, msg in problems.items())
        raise CredentialsError(f"Invalid credentials ({details})") from None

def load_config(args):
    """
    Prepare and validate configuration based on CLI args.
    Returns a config dict with credentials, selectors and browser options.
    """
    if args.timeout is not None and args.timeout <= 0:
        raise ConfigurationError("--timeout must be a positive number of milliseconds")
    if not args.portal_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"--portal-url must be an http(s) URL, got {args.portal_url!r}")

    credentials = load_credentials(args.username, args.password, args.mfa_secret)
    logger.debug(f"Loaded credentials for {credentials.username}")

    config = {
        "args": args,
        "credentials": credentials,
        "selectors": LoginSelectors(),
        "portal_url": args.portal_url,
        "locale": args.locale,
        "timeout": args.timeout,
        "headless": False,
        "enable_screenshots": args.enable_screenshots,
    }

    return config
