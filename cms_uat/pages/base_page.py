import logging
from typing import Optional

from playwright.sync_api import Locator, Page, Response

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 10000
LONG_TIMEOUT_MS = 30000


class BasePage:
    """Holds the Playwright page and the waits every page object needs."""

    def __init__(self, page: Page):
        self.page = page

    def goto(self, url: str, wait_until: str = "domcontentloaded") -> Optional[Response]:
        logger.info(f"Opening {url}")
        return self.page.goto(url, wait_until=wait_until)

    def wait_for_load(self) -> None:
        self.page.wait_for_load_state("domcontentloaded")
        self.page.wait_for_load_state("load")

    def click_when_visible(self, locator: Locator, timeout: int = DEFAULT_TIMEOUT_MS) -> None:
        locator.wait_for(state="visible", timeout=timeout)
        locator.hover()
        locator.click()

    def close_popup_if_visible(self, trigger: Locator, close_button: Locator) -> bool:
        """Dismiss an optional overlay (tours, cookie banners). Returns True if one was closed."""
        if trigger.is_visible():
            self.click_when_visible(close_button)
            logger.info("Closed popup")
            return True
        return False
