"""
CLI parsing and interactive prompts for Entra Login.

- Defines parse_args() to handle command-line arguments.
- Defines wait_for_keypress() to hold the authenticated page open.
"""

import argparse
import asyncio
import threading

from entra_login.constants import DEFAULT_LOCALE, LOG_LEVELS, PORTAL_URL

def build_parser():
    parser = argparse.ArgumentParser(
        prog='entra-login',
        description='Sign in to Microsoft Entra ID with a password and TOTP based MFA',
        epilog='Only the three positional arguments are required; every option has a default.'
    )
    parser.add_argument('username', help='Account to sign in with, e.g. user@contoso.com')
    parser.add_argument('password', help='Password for the account')
    parser.add_argument('mfa_secret', help='Base32 encoded secret of the authenticator app registration')

    options = parser.add_argument_group('optional settings')
    options.add_argument('--portal-url', type=str, default=PORTAL_URL, help='Portal to sign in to (default: %(default)s)')
    options.add_argument('--locale', type=str, default=DEFAULT_LOCALE, help='Browser locale (default: %(default)s)')
    options.add_argument('--timeout', type=float, default=None,
                         help='Timeout in milliseconds for each wait (default: Playwright default)')
    options.add_argument('--log-level', type=str, choices=LOG_LEVELS,
                         default='INFO', help='Set the logging level')
    options.add_argument('--log-file', type=str, help='Also write log output to this file')
    options.add_argument('--collect-error-details', action='store_true', help='Collect detailed error information')
    options.add_argument('--collect-tracebacks', action='store_true', help='Collect tracebacks for errors')
    options.add_argument('--error-limit', type=int, default=100, help='Maximum number of errors to store per category')
    options.add_argument('--enable-screenshots', action='store_true', help='Save a screenshot if the login fails')
    return parser

def parse_args(argv=None):
    return build_parser().parse_args(argv)

async def wait_for_keypress(prompt="Press Enter to quit."):
    """
    Block until the user presses Enter, without blocking the event loop.

    stdin is read on a daemon thread so an interrupt at the prompt does not
    wait for the read to finish. A closed stdin counts as a keypress.
    """
    loop = asyncio.get_running_loop()
    pressed = loop.create_future()

    def _resolve():
        if not pressed.done():
            pressed.set_result(None)

    def _read():
        try:
            input(prompt)
        except EOFError:
            pass
        finally:
            try:
                loop.call_soon_threadsafe(_resolve)
            except RuntimeError:
                # Loop already closed after an interrupt
                pass

    threading.Thread(target=_read, name="keypress", daemon=True).start()
    await pressed
