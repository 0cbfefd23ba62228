#!/usr/bin/env python3
# Package initialization
"""
Entra Login - automated Microsoft Entra ID sign-in with TOTP based MFA.

The package drives a Playwright browser through the Microsoft 365 login
pages and leaves an authenticated page open for further automation.
"""

__all__ = [
    "logger",
    "setup_logging",
    "add_error",
    "get_error_summary",
    "clear_errors",
    "update_stats",
]

__version__ = "1.0.0"

import logging

# Global error collection with configurable verbosity
error_collection = {
    "auth_errors": [],
    "navigation_errors": [],
    "browser_errors": [],
    "console_errors": [],
    "general_errors": []
}

# Global configuration for error handling
error_config = {
    "collect_details": False,  # Whether to collect detailed error information
    "collect_tracebacks": False,  # Whether to collect tracebacks
    "error_limit": 100  # Maximum number of errors to store per category
}

# Statistics tracking
stats = {
    "start_time": None,
    "end_time": None,
    "otp_computed": 0
}

LOG_FORMAT = '[%(asctime)s] %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class TqdmLoggingHandler(logging.Handler):
    """Console handler that writes through tqdm so progress bars stay intact."""

    def emit(self, record):
        try:
            msg = self.format(record)
            from tqdm import tqdm
            tqdm.write(msg)
        except Exception:
            self.handleError(record)


# Configure logging
def setup_logging(level=logging.INFO):
    """Configure logging for the application"""
    logger = logging.getLogger("entra_login")
    logger.setLevel(level)

    # Only add handler if none exist to avoid duplicate logs
    if not logger.handlers:
        console_handler = TqdmLoggingHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger

# Set up the logger when the module is imported
logger = setup_logging()

def add_error(error_type, message, details=None):
    """Add an error to the error collection with respect to configuration"""
    # Ensure the error type exists in the collection
    if error_type not in error_collection:
        error_collection[error_type] = []

    # Check if we've reached the error limit for this category
    if len(error_collection[error_type]) >= error_config["error_limit"]:
        return

    error_data = {"message": message}

    # Only include details if configured to do so
    if error_config["collect_details"] and details:
        # Filter out tracebacks if not configured to collect them
        if not error_config["collect_tracebacks"] and details.get("traceback"):
            details = {k: v for k, v in details.items() if k != "traceback"}
        error_data["details"] = details

    error_collection[error_type].append(error_data)

def get_error_summary():
    """Get a summary of all errors"""
    total_errors = sum(len(errors) for errors in error_collection.values())
    return {
        "total": total_errors,
        "by_type": {k: len(v) for k, v in error_collection.items() if len(v) > 0}
    }

def clear_errors():
    """Clear all errors"""
    for key in error_collection:
        error_collection[key] = []

def update_stats(key, value=1, increment=True):
    """Update statistics tracking"""
    if increment and key in stats and stats[key] is not None:
        stats[key] += value
    else:
        stats[key] = value
