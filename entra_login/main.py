#!/usr/bin/env python3
"""
Main entry point for the Entra Login application.
"""
import asyncio
import logging
import sys
import time

from entra_login import (
    logger, stats, update_stats, get_error_summary, clear_errors, LOG_FORMAT, LOG_DATE_FORMAT
)
from entra_login.app.application import Application
from entra_login.app.cli import parse_args
from entra_login.app.orchestrator import run_login
from entra_login.interface.config_manager import load_config
from entra_login.utils.error_utils import EntraLoginError, configure_error_handling

def configure_logging(level_name, log_file=None):
    """
    Apply the requested log level and optional log file to the package logger.
    Returns the file handler, if one was added, so the caller can remove it.
    """
    log_level = getattr(logging, level_name)
    file_handler = None
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)
    return file_handler

async def main(argv=None):
    """
    Main entry point for the Entra Login application.
    """
    clear_errors()  # Clear any errors from previous runs
    update_stats("start_time", time.time(), increment=False)
    update_stats("otp_computed", 0, increment=False)

    args = parse_args(argv)
    file_handler = configure_logging(args.log_level, args.log_file)

    # Configure error handling based on command-line arguments
    configure_error_handling(
        collect_details=args.collect_error_details,
        collect_tracebacks=args.collect_tracebacks,
        error_limit=args.error_limit
    )

    try:
        config = load_config(args)
        app = Application(config)
        app.set_logger(logger)
        await run_login(app)
    finally:
        update_stats("end_time", time.time(), increment=False)
        elapsed_time = stats["end_time"] - stats["start_time"]
        logger.info(f"Execution completed in {elapsed_time:.2f} seconds "
                    f"({stats['otp_computed']} one-time code(s) computed)")

        summary = get_error_summary()
        if summary["total"]:
            logger.warning(f"Errors recorded during run: {summary['by_type']}")

        if file_handler is not None:
            logger.removeHandler(file_handler)
            file_handler.close()

def run(argv=None):
    """Console script entry point; exits non-zero on any login failure."""
    try:
        asyncio.run(main(argv))
    except EntraLoginError as e:
        logger.error(f"Login failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        sys.exit(130)

if __name__ == "__main__":
    run()
