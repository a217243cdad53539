import logging
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger(__name__)

# Listings use several pagination widgets; the first visible one wins
PAGINATION_SELECTORS = [
    ".pagination",
    ".c-pagination",
    '[data-testid*="pagination"]',
    ".pager",
    ".page-navigation",
    'nav[aria-label*="pagination"]',
    'nav[aria-label*="Page"]',
    ".load-more",
    ".show-more",
    'button:has-text("Load more")',
    'button:has-text("Show more")',
    'button:has-text("Next")',
    'a:has-text("Next")',
]

NEXT_SELECTORS = [
    'nav[aria-label*="Pagination"] button:last-child',
    ".pagination button:last-child",
    ".c-pagination button:last-child",
    'button:has-text("Next")',
    'a:has-text("Next")',
    ".next-page",
    ".pagination-next",
    '[aria-label*="next"]',
    '[aria-label*="Next"]',
]

CURRENT_PAGE_SELECTOR = ".pagination .active, .pagination .current, .page-numbers .current"

# Footer links that match the "Next" selectors but are not pagination
EXCLUDED_HREF_FRAGMENTS = ["pre-registration"]


def parse_page_number(text: Optional[str], default: int = 1) -> int:
    try:
        return int((text or "").strip())
    except ValueError:
        return default


class PaginationHelper:
    """Detects and drives pagination on search and listing pages."""

    def __init__(self, page: Page):
        self.page = page

    def has_pagination(self) -> bool:
        for selector in PAGINATION_SELECTORS:
            if self.page.locator(selector).first.is_visible():
                logger.info(f"Pagination found: {selector}")
                return True
        return False

    def current_page_number(self) -> int:
        """Active page from the pagination widget, 1 when it cannot be read."""
        try:
            text = self.page.locator(CURRENT_PAGE_SELECTOR).first.text_content(timeout=5000)
        except PlaywrightTimeoutError:
            logger.info("Could not determine current page number, assuming page 1")
            return 1
        return parse_page_number(text)

    def go_to_next_page(self) -> bool:
        """Click the first enabled next control. Returns False when there is none."""
        for selector in NEXT_SELECTORS:
            button = self.page.locator(selector).first
            if not button.is_visible() or button.is_disabled():
                continue
            href = button.get_attribute("href") or ""
            if any(fragment in href for fragment in EXCLUDED_HREF_FRAGMENTS):
                continue
            try:
                button.click()
            except PlaywrightError as e:
                logger.warning(f"Next control {selector} failed: {e}")
                continue
            try:
                self.page.wait_for_load_state("networkidle", timeout=10000)
            except PlaywrightTimeoutError:
                logger.info("Network idle timeout after next click")
            logger.info(f"Moved to next page via {selector}")
            return True
        logger.info("No clickable next control found")
        return False
