#!/usr/bin/env python3
"""
Utility modules for the Entra Login application.
"""
from entra_login.utils.error_utils import (
    handle_errors,
    configure_error_handling,
    error_screenshot_context,
    async_resource_cleanup_context,
    register_console_listener,
    unregister_console_listener,
    default_console_listener,
    EntraLoginError,
    ConfigurationError,
    CredentialsError,
    InvalidSecretError,
    BrowserLaunchError,
    AuthenticationError,
    LoginTimeoutError
)
