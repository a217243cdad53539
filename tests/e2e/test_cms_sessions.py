"""
CMS SESSIONS - Browser, Live Environment, Read Only

Run: RUN_LIVE=1 ECMS_USERNAME=... PCMS_USERNAME=... pytest tests/e2e/test_cms_sessions.py

Each back office is signed in to once per run (see conftest.py). A fresh
context loaded from the saved session must land on the dashboard without
seeing the login form again.
"""

import pytest

from cms_uat.pages import EcmsSignInPage, PcmsSignInPage

pytestmark = [pytest.mark.e2e, pytest.mark.cms, pytest.mark.inw]


@pytest.mark.parametrize("sign_in_class,state_fixture", [
    (EcmsSignInPage, "ecms_storage_state"),
    (PcmsSignInPage, "pcms_storage_state"),
], ids=["editorial", "product"])
def test_saved_session_skips_login(browser, browser_context_args, live_environment, request,
                                   sign_in_class, state_fixture):
    storage_state = request.getfixturevalue(state_fixture)

    context = browser.new_context(**{**browser_context_args, "storage_state": storage_state})
    try:
        page = context.new_page()
        page.set_default_timeout(60000)
        sign_in = sign_in_class.for_environment(page, live_environment)
        sign_in.open_dashboard()
        sign_in.expect_signed_in()
    finally:
        context.close()
