#!/usr/bin/env python3
"""
Data models for the Entra Login application.

This module defines Pydantic models for the credential bundle and the
selectors that identify each element of the sign-in pages.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from entra_login.constants import (
    USERNAME_INPUT_SELECTOR,
    PASSWORD_INPUT_SELECTOR,
    SUBMIT_SELECTOR,
    OTP_INPUT_SELECTOR,
    KMSI_CHECKBOX_SELECTOR,
)
from entra_login.otp import normalize_secret
from entra_login.utils.error_utils import InvalidSecretError

class Credentials(BaseModel):
    """Username, password and base32 MFA secret for a single sign-in."""
    username: str
    password: str = Field(..., repr=False)
    mfa_secret: str = Field(..., alias="mfaSecret", repr=False)

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "username": "user@contoso.onmicrosoft.com",
                "password": "********",
                "mfaSecret": "JBSWY3DPEHPK3PXP"
            }
        }
    )

    @field_validator("username", "password")
    @classmethod
    def validate_not_empty(cls, v, info):
        """Username and password must contain something other than whitespace."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("mfa_secret")
    @classmethod
    def validate_mfa_secret(cls, v):
        """Normalise the secret and reject anything that is not base32."""
        try:
            return normalize_secret(v)
        except InvalidSecretError as e:
            raise ValueError(str(e)) from e

class LoginSelectors(BaseModel):
    """Selectors for each logical element of the sign-in flow."""
    username_input: str = USERNAME_INPUT_SELECTOR
    password_input: str = PASSWORD_INPUT_SELECTOR
    submit: str = SUBMIT_SELECTOR
    otp_input: str = OTP_INPUT_SELECTOR
    kmsi_checkbox: str = KMSI_CHECKBOX_SELECTOR

    model_config = ConfigDict(frozen=True)
