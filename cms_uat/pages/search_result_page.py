"""
1.0 Search Result Page
Search widget on the public site and the result listing it leads to.

Key features:
- Product tab selection with fallbacks for slow or mobile layouts
- Destination picker ("Take me anywhere" or a typed location)
- Criteria bar guest count check ("2 adults , 1 child")
- Accommodation card count with a "no results" escape hatch
- Filter bar checks (Ratings, Best For, ...) and the resort view rating filter
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page, TimeoutError as PlaywrightTimeoutError, expect

from cms_uat.pages.base_page import BasePage, DEFAULT_TIMEOUT_MS, LONG_TIMEOUT_MS

logger = logging.getLogger(__name__)

SEARCH_RESULTS_URL = re.compile(r".*search-results")
ANYWHERE = "anywhere"

CARD_SELECTORS = (
    '[data-testid="accommodation-card"], .c-search-card, .accommodation-card, '
    '.search-card, [class*="search-card"]'
)
CARD_IMAGE_SELECTORS = (
    '[data-testid="accommodation-image"], [aria-labelledby*="accommodation"], '
    '[aria-labelledby*="accomodation"], .accommodation-image, .search-card img'
)
NO_RESULTS_MESSAGES = [
    "No results matching your",
    "No accommodations found",
    "No holidays found",
    "Sorry, no results",
    "No results found",
]
NO_RESULTS_CLASS = ".no-results"

# 1.1 Filter bar buttons on the result listing
EXPECTED_FILTERS = [
    "Ratings",
    "Best For",
    "Board Basis",
    "Facilities",
    "Holiday Types",
    "Duration",
    "Budget",
    "All filters",
    "Sort by",
]
MIN_VISIBLE_FILTERS = 7
MODAL_SELECTORS = [".c-modal", ".modal", '[role="dialog"]', '[data-testid*="modal"]']

_ADULTS_RE = re.compile(r"(\d+)\s+adults?")
_CHILDREN_RE = re.compile(r"(\d+)\s+child(?:ren)?")


def parse_guest_criteria(content: str) -> Tuple[Optional[int], Optional[int]]:
    """
    2.0 Read adult and child counts from criteria text.

    '5 adults , 3 child' -> (5, 3); 'Any date (7 nights)' -> (None, None)
    """
    parts = content.split(" , ")
    adults = _ADULTS_RE.search(parts[0]) if parts else None
    children = _CHILDREN_RE.search(parts[1]) if len(parts) > 1 else None
    return (
        int(adults.group(1)) if adults else None,
        int(children.group(1)) if children else None,
    )


def capitalise_location(location: str) -> str:
    """'austria/st anton' -> 'Austria/St Anton', as the picker lists it."""
    return "/".join(
        " ".join(word[:1].upper() + word[1:] for word in part.split(" "))
        for part in location.split("/")
    )


def no_results_locator(page: Page) -> Locator:
    """
    2.1 Any of the "no results" messages, or the .no-results block.

    A text= selector takes the rest of a comma list as its body, so each
    message is its own get_by_text joined with Locator.or_().
    """
    locator = page.locator(NO_RESULTS_CLASS)
    for message in NO_RESULTS_MESSAGES:
        locator = locator.or_(page.get_by_text(message))
    return locator.first


def rating_label_pattern(rating: str) -> re.Pattern:
    """'4' -> a pattern matching a label reading exactly '4' (not '4+' or '14')."""
    return re.compile(rf"^{re.escape(str(rating).strip())}$")


def universal_filters(filters_by_product: Dict[str, List[str]]) -> List[str]:
    """
    2.2 Filters shown for every product, in the first product's order.

    {'Ski': ['Ratings', 'Budget'], 'Walking': ['Ratings']} -> ['Ratings']
    """
    if not filters_by_product:
        return []
    lists = list(filters_by_product.values())
    return [name for name in lists[0] if all(name in other for other in lists[1:])]


class SearchResultPage(BasePage):
    """
    3.0 SearchResultPage Class
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.search_bar = page.locator(".c-search-criteria-bar")
        self.criteria_bar_price_basis = page.locator('//div[@class="c-search-criteria-bar__price-basis"]')
        self.search_holidays_button = page.get_by_role("button", name="Search holidays")
        self.anywhere_button = page.get_by_role("button", name="Anywhere")
        self.where_to_go_field = page.get_by_role("textbox", name="Start typing..")
        self.take_me_anywhere = page.get_by_text("Take me anywhere")
        self.accommodation_cards = page.locator(CARD_SELECTORS)
        self.accommodation_card_images = page.locator(CARD_IMAGE_SELECTORS)
        self.no_results = no_results_locator(page)
        self.resort_view_toggle = page.locator('text="View results by resort"')
        self.confirm_filter_button = page.get_by_role("button", name="Confirm")
        self.accept_cookies_button = page.get_by_role("button", name="Accept All Cookies")

    def product_tab(self, product: str):
        return self.page.get_by_role("button", name=product)

    def location_result(self, location: str):
        return self.page.locator(f'[data-testid="location-result"]:has-text("{location}")').first

    def location_list_item(self, location: str):
        return self.page.locator("li").filter(has_text=location).first

    # =========================================================================
    # 4.0 SEARCH ACTIONS
    # =========================================================================

    def click_product_tab(self, product: str = "Ski") -> None:
        """
        4.1 Select the product tab in the search widget.

        Tries a normal click, then a forced click, then looser locators.
        Raises the last Playwright error when every strategy fails.
        """
        self.page.wait_for_load_state("domcontentloaded")
        tab = self.product_tab(product)
        try:
            tab.wait_for(state="visible", timeout=15000)
            tab.click()
            logger.info(f"Clicked {product} tab")
            return
        except PlaywrightTimeoutError as e:
            logger.warning(f"Standard click failed for {product}: {e}")

        try:
            tab.click(force=True, timeout=DEFAULT_TIMEOUT_MS)
            logger.info(f"Force-clicked {product} tab")
            return
        except PlaywrightError as e:
            logger.warning(f"Force click failed for {product}: {e}")

        alternatives = [
            self.page.locator(f'button:has-text("{product}")'),
            self.page.locator(f'[aria-label*="{product}"]'),
            self.page.locator(f'[data-testid*="{product.lower()}"]'),
        ]
        for locator in alternatives:
            if locator.first.is_visible():
                locator.first.click(force=True)
                logger.info(f"Clicked {product} tab using alternative locator")
                return
        raise PlaywrightError(f"All strategies failed to click {product} product tab")

    def search_anywhere(self, location: str = ANYWHERE) -> None:
        """
        4.2 Choose a destination. Falls back to "Take me anywhere" when the
        typed location has no match.
        """
        self.click_when_visible(self.anywhere_button)
        if not location or location.lower() == ANYWHERE:
            self.click_when_visible(self.take_me_anywhere, timeout=5000)
            logger.info("Selected 'Take me anywhere'")
            return

        expect(self.where_to_go_field).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        self.where_to_go_field.fill(location)
        wanted = capitalise_location(location)

        for candidate in (self.location_result(wanted), self.location_list_item(wanted),
                          self.location_list_item(location)):
            try:
                candidate.wait_for(state="visible", timeout=5000)
                candidate.click()
                logger.info(f"Selected location: {wanted}")
                return
            except PlaywrightTimeoutError:
                continue

        logger.warning(f"No match for {location}, using 'Take me anywhere'")
        self.click_when_visible(self.take_me_anywhere, timeout=3000)

    def close_blocking_modals(self) -> None:
        for selector in MODAL_SELECTORS:
            modal = self.page.locator(selector).first
            if modal.is_visible():
                logger.info(f"Closing modal {selector}")
                self.page.keyboard.press("Escape")

    def click_search_holidays(self) -> None:
        self.page.wait_for_load_state("domcontentloaded")
        self.close_blocking_modals()
        self.click_when_visible(self.search_holidays_button)

    # =========================================================================
    # 5.0 RESULT ASSERTIONS
    # =========================================================================

    def expect_search_results_url(self) -> None:
        self.page.wait_for_load_state("domcontentloaded")
        expect(self.page).to_have_url(SEARCH_RESULTS_URL)

    def check_criteria_bar(self, content: str) -> str:
        """5.1 Criteria bar shows the guest counts in content; returns the bar text."""
        self.wait_for_load()
        expect(self.criteria_bar_price_basis).to_be_visible(timeout=LONG_TIMEOUT_MS)
        text = self.criteria_bar_price_basis.text_content() or ""
        logger.info(f"Criteria bar text: {text!r}")

        adults, children = parse_guest_criteria(content)
        if adults is not None:
            assert f"{adults} adult" in text, f"Expected {adults} adult(s) in {text!r}"
        if children is not None:
            assert re.search(rf"{children}\s+child(?:ren)?", text), f"Expected {children} child in {text!r}"
        return text

    def count_accommodation_cards(self) -> int:
        """
        5.2 Count result cards.

        Returns 0 when the page says there are no results; raises when
        neither cards nor a no-results message appear.
        """
        self.page.wait_for_load_state("domcontentloaded")
        try:
            self.accommodation_cards.first.wait_for(state="attached", timeout=15000)
        except PlaywrightTimeoutError:
            if self.has_no_results():
                logger.warning("No search results found on page")
                return 0
            raise AssertionError("No accommodation cards found and no 'no results' message")

        count = self.accommodation_cards.count()
        logger.info(f"Accommodation cards: {count}")
        assert count > 0, "Search returned no accommodation cards"

        if not self.accommodation_card_images.first.is_visible():
            logger.warning("Accommodation card images not visible, but cards are present")
        return count

    def has_no_results(self, timeout: int = 3000) -> bool:
        """5.3 True when a "no results" message is showing."""
        try:
            self.no_results.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            return False
        return True

    # =========================================================================
    # 6.0 FILTERS
    # =========================================================================

    def filter_button(self, name: str) -> Locator:
        return self.page.get_by_role("button", name=name)

    def accept_cookies(self) -> bool:
        if self.accept_cookies_button.is_visible():
            self.accept_cookies_button.click()
            logger.info("Accepted cookies")
            return True
        return False

    def visible_filters(self, expected: Optional[List[str]] = None, timeout: int = 3000) -> List[str]:
        """
        6.1 Which of the expected filter buttons are on the listing.

        Missing filters are logged, not raised; some only show for one product.
        """
        visible = []
        for name in expected or EXPECTED_FILTERS:
            try:
                self.filter_button(name).first.wait_for(state="visible", timeout=timeout)
                visible.append(name)
            except PlaywrightTimeoutError:
                logger.info(f"Filter not visible: {name}")
        logger.info(f"Visible filters: {', '.join(visible)}")
        return visible

    def open_filter(self, name: str) -> None:
        """6.2 Dismiss overlays, then open a filter panel by its button text."""
        self.page.keyboard.press("Escape")
        self.close_blocking_modals()
        button = self.filter_button(name)
        expect(button).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        button.click()
        logger.info(f"Opened {name} filter")

    def apply_filter(self) -> None:
        expect(self.confirm_filter_button).to_be_visible(timeout=5000)
        self.confirm_filter_button.click()
        self.page.wait_for_load_state("domcontentloaded")

    def enable_resort_view(self) -> bool:
        """
        6.3 Switch the listing to "View results by resort".

        Returns False when the toggle is not offered (already in resort view).
        """
        if self.resort_view_toggle.count() == 0:
            logger.warning("Resort view toggle not found")
            return False
        self.resort_view_toggle.first.click()
        self.page.wait_for_load_state("networkidle")
        logger.info("Enabled resort view")
        return True

    def select_rating(self, rating: str) -> None:
        """6.4 Open Ratings, tick the exact rating label and confirm."""
        self.open_filter("Ratings")
        label = self.page.locator("label").filter(has_text=rating_label_pattern(rating))
        expect(label).to_be_visible(timeout=5000)
        label.click()
        self.apply_filter()
        logger.info(f"Applied {rating} rating filter")
