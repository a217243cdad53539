"""
1.0 CMS Sign-in Pages
Both back offices run the same Umbraco login screen; only the base URL differs.
"""

import logging
import os

from playwright.sync_api import Page, expect

from cms_uat.config import Credentials, Environment
from cms_uat.pages.base_page import BasePage, DEFAULT_TIMEOUT_MS, LONG_TIMEOUT_MS

logger = logging.getLogger(__name__)

LOGIN_PATH = "/umbraco/login"
STORAGE_STATE_DIR = ".auth"
# Umbraco shows the tour prompt a few seconds after the dashboard renders
TOUR_SETTLE_MS = 10000


def storage_state_path(prefix: str, base_dir: str = ".") -> str:
    """'ecms' -> .auth/ecms.json under base_dir."""
    return os.path.join(base_dir, STORAGE_STATE_DIR, f"{prefix}.json")


class CmsSignInPage(BasePage):
    """
    2.0 Umbraco back-office login.

    Subclasses name the credential prefix (ECMS_USERNAME, ...) and the
    environment key of their back office.
    """

    CREDENTIALS_PREFIX = ""
    SITE_KEY = ""

    def __init__(self, page: Page, base_url: str):
        super().__init__(page)
        self.base_url = base_url.rstrip("/")
        self.email_field = page.get_by_label("Email")
        self.password_field = page.get_by_label("Password")
        self.login_button = page.get_by_label("Login")
        self.start_tour_button = page.get_by_role("button", name="Start tour")
        self.close_tour_button = page.get_by_role("button", name="Close", exact=True)
        self.welcome_heading = page.get_by_role("heading", name="Welcome to Umbraco")

    @classmethod
    def for_environment(cls, page: Page, environment: Environment) -> "CmsSignInPage":
        return cls(page, getattr(environment, cls.SITE_KEY))

    def open(self) -> None:
        self.goto(f"{self.base_url}{LOGIN_PATH}")

    def login(self, credentials: Credentials) -> None:
        """
        2.1 Sign in and land on the dashboard.

        Closes the first-run tour when it appears, then waits for the
        welcome heading.
        """
        self.email_field.wait_for(state="visible", timeout=DEFAULT_TIMEOUT_MS)
        self.email_field.fill(credentials.username)
        self.password_field.wait_for(state="visible", timeout=DEFAULT_TIMEOUT_MS)
        self.password_field.fill(credentials.password)
        self.click_when_visible(self.login_button)

        self.wait_for_load()
        self.page.wait_for_timeout(TOUR_SETTLE_MS)

        self.close_popup_if_visible(self.start_tour_button, self.close_tour_button)
        self.expect_signed_in()
        logger.info(f"Signed in to {self.base_url} as {credentials.username}")

    def open_dashboard(self) -> None:
        self.goto(f"{self.base_url}/umbraco")

    def expect_signed_in(self) -> None:
        """Dashboard heading shown and no login form."""
        expect(self.welcome_heading).to_be_visible(timeout=LONG_TIMEOUT_MS)
        expect(self.email_field).to_be_hidden()

    def save_storage_state(self, path: str) -> str:
        """2.2 Persist cookies so later tests skip the login screen."""
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        self.page.context.storage_state(path=path)
        logger.info(f"Saved session to {path}")
        return path


class EcmsSignInPage(CmsSignInPage):
    CREDENTIALS_PREFIX = "ecms"
    SITE_KEY = "e_cms"


class PcmsSignInPage(CmsSignInPage):
    CREDENTIALS_PREFIX = "pcms"
    SITE_KEY = "p_cms"
