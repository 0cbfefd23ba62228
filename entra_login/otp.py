#!/usr/bin/env python3
"""
Time-based one-time passwords for the MFA step.

Codes follow RFC 6238 (HMAC-SHA1, 30 second step, 6 digits) and are computed
with pyotp.
"""
import binascii
import re
from datetime import datetime
from typing import Optional, Union

import pyotp

from entra_login import logger, update_stats
from entra_login.constants import TOTP_DIGITS, TOTP_INTERVAL
from entra_login.utils.error_utils import InvalidSecretError

_WHITESPACE = re.compile(r"\s+")

def normalize_secret(secret: str) -> str:
    """
    Normalise a base32 MFA secret and make sure it decodes.

    Authenticator set-up pages show the secret in space separated groups and
    sometimes in lower case, so both are accepted.

    Raises:
        InvalidSecretError: If the secret is empty or not valid base32.
    """
    if not isinstance(secret, str):
        raise InvalidSecretError("MFA secret must be a string")

    cleaned = _WHITESPACE.sub("", secret).upper().rstrip("=")
    if not cleaned:
        raise InvalidSecretError("MFA secret is empty")

    try:
        pyotp.TOTP(cleaned).byte_secret()
    except (binascii.Error, ValueError) as e:
        raise InvalidSecretError(f"MFA secret is not valid base32: {e}") from e

    return cleaned

def compute_otp(secret: str, for_time: Optional[Union[int, float, datetime]] = None) -> str:
    """
    Compute the one-time password for ``secret``.

    Args:
        secret: Base32 encoded shared secret.
        for_time: Unix timestamp or datetime to compute the code for. Defaults to now.

    Returns:
        The 6-digit code as a string (leading zeros preserved).
    """
    totp = pyotp.TOTP(normalize_secret(secret), digits=TOTP_DIGITS, interval=TOTP_INTERVAL)
    code = totp.now() if for_time is None else totp.at(for_time)
    update_stats("otp_computed")
    logger.debug(f"Computed one-time password {mask_otp(code)}")
    return code

def mask_otp(code: str) -> str:
    """Mask all but the first two digits of a code for log output."""
    return f"{code[:2]}{'*' * (len(code) - 2)}"
