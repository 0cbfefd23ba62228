#!/usr/bin/env python3
"""
Error handling utilities for the Entra Login application.
This module provides the exception hierarchy, decorators, context managers
and Playwright listeners used for consistent error handling throughout the
application.
"""
import functools
import contextlib
import inspect
import traceback
from typing import Any, Callable, Dict, Optional, Type, TypeVar, cast

from entra_login import logger, add_error, error_config

# Type definitions for better type hinting
F = TypeVar('F', bound=Callable[..., Any])

class EntraLoginError(Exception):
    """Base exception class for all Entra Login errors."""
    pass

class ConfigurationError(EntraLoginError):
    """Exception raised for invalid command-line or runtime configuration."""
    pass

class CredentialsError(ConfigurationError):
    """Exception raised when the supplied credentials are unusable."""
    pass

class InvalidSecretError(CredentialsError):
    """Exception raised when the MFA secret is not valid base32."""
    pass

class BrowserLaunchError(EntraLoginError):
    """Exception raised when the browser or its context cannot be created."""
    pass

class AuthenticationError(EntraLoginError):
    """Exception raised for failures during the sign-in sequence."""
    pass

class LoginTimeoutError(AuthenticationError):
    """Exception raised when an expected element never appeared or detached."""
    pass

# Global state management for console listener
_console_listener_registry = {
    'attached_pages': set(),
    'listeners': {}
}

def configure_error_handling(collect_details=False, collect_tracebacks=False, error_limit=100):
    """Configure error handling behavior"""
    error_config["collect_details"] = collect_details
    error_config["collect_tracebacks"] = collect_tracebacks
    error_config["error_limit"] = error_limit

def _record_failure(func, error, error_category, error_message, args, kwargs):
    module = inspect.getmodule(func)
    function_name = f"{module.__name__ if module else 'unknown'}.{func.__name__}"

    msg = error_message or f"Error in {function_name}: {str(error)}"
    formatted_msg = msg.format(error=str(error), function=function_name)

    logger.error(formatted_msg)
    # Arguments may carry credentials, so only their types are recorded
    add_error(error_category, formatted_msg, {
        "traceback": traceback.format_exc(),
        "function": function_name,
        "args": [type(arg).__name__ for arg in args],
        "kwargs": sorted(kwargs)
    })
    return formatted_msg

def handle_errors(
    error_category: str = "general_errors",
    error_class: Type[Exception] = EntraLoginError,
    error_message: Optional[str] = None
) -> Callable[[F], F]:
    """
    Decorator for handling errors in coroutine functions in a consistent way.

    Every failure is logged and recorded once, here. Exceptions that are
    already part of the EntraLoginError hierarchy are re-raised unchanged;
    anything else is wrapped in ``error_class``.

    Args:
        error_category: The category of the error for reporting purposes.
        error_class: The exception class to convert foreign exceptions to.
        error_message: A message template that will be formatted with the exception.

    Returns:
        The decorated function.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except EntraLoginError as e:
                _record_failure(func, e, error_category, error_message, args, kwargs)
                raise
            except Exception as e:
                formatted_msg = _record_failure(func, e, error_category, error_message, args, kwargs)
                raise error_class(formatted_msg) from e
        return cast(F, wrapper)
    return decorator

@contextlib.asynccontextmanager
async def async_resource_cleanup_context(
    resources: Dict[str, Any],
    cleanup_funcs: Dict[str, Callable[[Any], Any]]
):
    """
    Async context manager for resource cleanup.

    Resources are released in reverse order of insertion into ``resources``;
    cleanup functions may be plain callables or return awaitables.

    Args:
        resources: Dictionary of resources to be managed.
        cleanup_funcs: Dictionary of cleanup functions for each resource.

    Yields:
        The resources dictionary.
    """
    try:
        yield resources
    finally:
        # Clean up resources in reverse order of creation
        for name, resource in reversed(list(resources.items())):
            if name in cleanup_funcs and resource is not None:
                try:
                    result = cleanup_funcs[name](resource)
                    if inspect.isawaitable(result):
                        await result
                    logger.debug(f"Released resource: {name}")
                except Exception as e:
                    logger.error(f"Error cleaning up resource {name}: {e}")
                    add_error("browser_errors", f"Cleanup of {name} failed: {e}")

@contextlib.asynccontextmanager
async def error_screenshot_context(page, screenshot_name: str, error_type: str = "general_errors", take_screenshot: bool = False):
    """
    Context manager that optionally takes a screenshot when an exception occurs.

    Exceptions outside the EntraLoginError hierarchy are also logged and
    added to the error collection.

    Args:
        page: The Playwright page object.
        screenshot_name: The base name for the screenshot file.
        error_type: The category of the error for reporting purposes.
        take_screenshot: Whether to take a screenshot or not (default: False).

    Yields:
        None
    """
    try:
        yield
    except Exception as e:
        # EntraLoginErrors were logged and recorded where they were raised
        already_recorded = isinstance(e, EntraLoginError)
        if not already_recorded:
            logger.error(f"Error: {e}")

        screenshot_path = None
        if take_screenshot and page is not None:
            screenshot_path = f"error_{screenshot_name}.png"
            logger.warning(f"Taking a screenshot for debugging: {screenshot_path}")

            try:
                await page.screenshot(path=screenshot_path)
                logger.info(f"Screenshot saved to {screenshot_path}")
            except Exception as screenshot_error:
                logger.error(f"Failed to take screenshot: {screenshot_error}")
                screenshot_path = None

        if not already_recorded:
            # Add to error collection - only include screenshot if taken
            error_data = {"traceback": traceback.format_exc()}
            if screenshot_path:
                error_data["screenshot"] = screenshot_path
            add_error(error_type, str(e), error_data)

        # Re-raise the original exception
        raise

def register_console_listener(page, listener=None):
    """
    Ensure a console listener is attached to the page.
    Maintains global registry to avoid duplicate listeners.

    Args:
        page: The Playwright page object.
        listener: Custom console listener function. If None, the default listener is used.
    """
    page_id = id(page)

    if page_id in _console_listener_registry['attached_pages']:
        logger.debug(f"Console listener already attached to page {page_id}")
        return

    if listener is None:
        listener = default_console_listener

    _console_listener_registry['listeners'][page_id] = listener
    page.on("console", listener)
    _console_listener_registry['attached_pages'].add(page_id)
    logger.debug(f"Console listener attached to page {page_id}")

def default_console_listener(msg):
    """
    Default console message listener that logs console messages.

    Args:
        msg: The console message object.
    """
    message_type = msg.type
    text = msg.text

    if message_type == "error":
        logger.debug(f"Console error: {text}")
        add_error("console_errors", text)
    elif message_type == "warning":
        logger.debug(f"Console warning: {text}")
    else:
        logger.debug(f"Console {message_type}: {text}")

def unregister_console_listener(page):
    """
    Remove console listener from a page.

    Args:
        page: The Playwright page object.
    """
    page_id = id(page)

    if page_id not in _console_listener_registry['attached_pages']:
        return

    listener = _console_listener_registry['listeners'].get(page_id)
    if listener:
        page.remove_listener("console", listener)

    _console_listener_registry['attached_pages'].discard(page_id)
    _console_listener_registry['listeners'].pop(page_id, None)
    logger.debug(f"Console listener removed from page {page_id}")
