import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from entra_login import clear_errors, error_config
from entra_login.constants import (
    USERNAME_INPUT_SELECTOR as EMAIL,
    PASSWORD_INPUT_SELECTOR as PASSWORD,
    SUBMIT_SELECTOR as SUBMIT,
    OTP_INPUT_SELECTOR as OTP,
    KMSI_CHECKBOX_SELECTOR as KMSI,
)
from entra_login.models import Credentials

# Fallback for waits issued without an explicit timeout
DEFAULT_WAIT_MS = 500

NO_MFA_FLOW = [{EMAIL, SUBMIT}, {PASSWORD, SUBMIT}, {KMSI, SUBMIT}, set()]
MFA_FLOW = [{EMAIL, SUBMIT}, {PASSWORD, SUBMIT}, {OTP, SUBMIT}, {KMSI, SUBMIT}, set()]

class FakeLocator:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    async def wait_for(self, state="visible", timeout=None):
        await self.page._wait(self.selector, state, timeout)

class FakePage:
    """
    Scripted stand-in for a Playwright page.

    ``stages`` lists the selectors rendered on each screen. Clicking the
    ``submit`` control moves to the next screen after ``transition_delay``
    seconds, except on ``stuck_stage`` where the click has no effect.
    Interactions are appended to ``events`` in the order they happen.
    """

    def __init__(self, stages, transition_delay=0.01, stuck_stage=None, submit=SUBMIT):
        self.stages = [set(stage) for stage in stages]
        self.index = 0
        self.transition_delay = transition_delay
        self.stuck_stage = stuck_stage
        self.submit = submit
        self.events = []
        self.url = "about:blank"
        self.listeners = {}
        self._transitioning = False

    @property
    def rendered(self):
        return self.stages[self.index]

    def _advance(self):
        self.index += 1
        self._transitioning = False

    async def _wait(self, selector, state, timeout):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + (timeout if timeout is not None else DEFAULT_WAIT_MS) / 1000

        def settled():
            present = selector in self.rendered
            return not present if state == "detached" else present

        try:
            while not settled():
                if loop.time() >= deadline:
                    raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector} ({state})")
                await asyncio.sleep(0.001)
        except asyncio.CancelledError:
            self.events.append(("cancelled", selector))
            raise
        self.events.append((state, selector))

    async def goto(self, url, timeout=None):
        self.events.append(("goto", url))
        self.url = url

    async def fill(self, selector, value, timeout=None):
        if selector not in self.rendered:
            raise PlaywrightError(f"fill: no element matches {selector}")
        self.events.append(("fill", selector, value))

    async def click(self, selector, timeout=None):
        if selector not in self.rendered:
            raise PlaywrightError(f"click: no element matches {selector}")
        self.events.append(("click", selector))
        if selector != self.submit or self._transitioning:
            return
        if self.index == self.stuck_stage or self.index == len(self.stages) - 1:
            return
        self._transitioning = True
        asyncio.get_running_loop().call_later(self.transition_delay, self._advance)

    async def wait_for_selector(self, selector, state="visible", timeout=None):
        await self._wait(selector, state, timeout)
        return selector

    def locator(self, selector):
        return FakeLocator(self, selector)

    async def screenshot(self, path=None):
        self.events.append(("screenshot", path))

    def on(self, event, listener):
        self.listeners[event] = listener

    def remove_listener(self, event, listener):
        self.listeners.pop(event, None)

    def actions(self):
        """Fill and click events only."""
        return [e for e in self.events if e[0] in ("fill", "click")]

class RecordingOtpProvider:
    def __init__(self, code="123456"):
        self.code = code
        self.calls = []

    def __call__(self, secret):
        self.calls.append(secret)
        return self.code

@pytest.fixture(autouse=True)
def reset_error_state():
    clear_errors()
    saved = dict(error_config)
    yield
    error_config.update(saved)
    clear_errors()

@pytest.fixture
def credentials():
    return Credentials(username="user@contoso.com", password="hunter2", mfa_secret="JBSWY3DPEHPK3PXP")

@pytest.fixture
def otp_provider():
    return RecordingOtpProvider()
