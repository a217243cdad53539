"""
Back-office sessions for the browser journeys.

Each CMS is signed in to once per run and the session is saved under .auth/.
Modules that edit the editorial CMS load it through browser_context_args, so
their tests start already signed in.
"""

from pathlib import Path

import pytest

from cms_uat.config import load_credentials
from cms_uat.exceptions import ConfigError
from cms_uat.pages import EcmsSignInPage, PcmsSignInPage
from cms_uat.pages.sign_in_page import storage_state_path

PROJECT_ROOT = Path(__file__).parent.parent.parent
SIGN_IN_TIMEOUT_MS = 60000


def sign_in_once(browser, environment, sign_in_class) -> str:
    """Log in on a throwaway context and return the saved storage state path."""
    try:
        credentials = load_credentials(sign_in_class.CREDENTIALS_PREFIX)
    except ConfigError as e:
        pytest.skip(str(e))

    context = browser.new_context(ignore_https_errors=True)
    try:
        page = context.new_page()
        page.set_default_timeout(SIGN_IN_TIMEOUT_MS)
        sign_in = sign_in_class.for_environment(page, environment)
        sign_in.open()
        sign_in.login(credentials)
        return sign_in.save_storage_state(
            storage_state_path(sign_in_class.CREDENTIALS_PREFIX, str(PROJECT_ROOT))
        )
    finally:
        context.close()


@pytest.fixture(scope="session")
def ecms_storage_state(browser, live_environment) -> str:
    return sign_in_once(browser, live_environment, EcmsSignInPage)


@pytest.fixture(scope="session")
def pcms_storage_state(browser, live_environment) -> str:
    return sign_in_once(browser, live_environment, PcmsSignInPage)
