import contextlib
from unittest.mock import AsyncMock, MagicMock

import pytest

import entra_login.app.orchestrator as orchestrator
from conftest import FakePage, MFA_FLOW, NO_MFA_FLOW
from entra_login import get_error_summary
from entra_login.app.application import Application
from entra_login.app.cli import parse_args
from entra_login.browser import BrowserSession
from entra_login.interface.config_manager import load_config
from entra_login.utils.error_utils import LoginTimeoutError

def make_app(*extra):
    args = parse_args(["user@contoso.com", "hunter2", "JBSWY3DPEHPK3PXP", "--timeout", "200", *extra])
    return Application(load_config(args))

def patch_browser(monkeypatch, page):
    launches = []

    @contextlib.asynccontextmanager
    async def fake_browser_session(**kwargs):
        launches.append(kwargs)
        yield BrowserSession(MagicMock(name="browser"), MagicMock(name="context"), page)

    monkeypatch.setattr(orchestrator, "browser_session", fake_browser_session)
    return launches

@pytest.mark.asyncio
async def test_run_login_signs_in_and_waits_for_keypress(monkeypatch):
    page = FakePage(NO_MFA_FLOW)
    launches = patch_browser(monkeypatch, page)
    keypress = AsyncMock()
    app = make_app()

    await orchestrator.run_login(app, keypress=keypress)

    assert launches == [{"headless": False, "locale": "en-GB", "timeout": 200}]
    assert page.events[0] == ("goto", "https://www.microsoft365.com/login")
    keypress.assert_awaited_once()
    assert app.session is None
    assert page.listeners == {}

@pytest.mark.asyncio
async def test_run_login_mfa(monkeypatch):
    page = FakePage(MFA_FLOW)
    patch_browser(monkeypatch, page)
    app = make_app()

    await orchestrator.run_login(app, keypress=AsyncMock())

    otp_fills = [event for event in page.events if event[0] == "fill" and event[1] == "input[name=otc]"]
    assert len(otp_fills) == 1
    assert len(otp_fills[0][2]) == 6 and otp_fills[0][2].isdigit()
    assert page.actions()[-1] == ("click", "input[type=submit]")

@pytest.mark.asyncio
async def test_run_login_failure_takes_screenshot(monkeypatch):
    page = FakePage(NO_MFA_FLOW, stuck_stage=1)
    patch_browser(monkeypatch, page)
    keypress = AsyncMock()
    app = make_app("--enable-screenshots")

    with pytest.raises(LoginTimeoutError):
        await orchestrator.run_login(app, keypress=keypress)

    keypress.assert_not_awaited()
    assert ("screenshot", "error_login.png") in page.events
    assert app.session is None

@pytest.mark.asyncio
async def test_run_login_failure_recorded_once(monkeypatch):
    page = FakePage(NO_MFA_FLOW, stuck_stage=1)
    patch_browser(monkeypatch, page)
    app = make_app("--timeout", "50")

    with pytest.raises(LoginTimeoutError):
        await orchestrator.run_login(app, keypress=AsyncMock())

    assert get_error_summary() == {"total": 1, "by_type": {"auth_errors": 1}}
