import logging
import random
from typing import Optional

from playwright.sync_api import Page, expect

from cms_uat.pages.base_page import BasePage

logger = logging.getLogger(__name__)

# Editorial CMS page the component journeys add their blocks to
GENERIC_CONTENT_PAGE = "vi anne ski components"
TEST_LINK = "https://www.google.com"

_ADJECTIVES = ["Bright", "Quiet", "Alpine", "Snowy", "Golden", "Crisp", "Frosty", "Sunny"]
_NOUNS = ["summit", "valley", "chalet", "lake", "forest", "glacier", "meadow", "trail"]


def automation_text(kind: str) -> str:
    """'Pills' -> 'Snowy lake Pills Automation 417'; unique enough to find on the page."""
    return f"{random.choice(_ADJECTIVES)} {random.choice(_NOUNS)} {kind} Automation {random.randint(50, 1000)}"


def automation_paragraph(sentences: int = 3) -> str:
    return " ".join(
        f"{random.choice(_ADJECTIVES)} {random.choice(_NOUNS)} near the {random.choice(_NOUNS)}."
        for _ in range(sentences)
    )


class SharedSteps(BasePage):
    """Back-office steps reused by the component journeys."""

    def __init__(self, page: Page):
        super().__init__(page)
        self.global_search = page.locator("//*[@data-element='global-search']")
        self.global_search_input = page.get_by_placeholder("Type to search...")
        self.global_search_first_result = page.locator(".umb-search-item").first
        self.add_content_button = page.get_by_role("button", name="Add content")
        self.component_search_field = page.locator("#block-search")
        self.component_result = page.locator("umb-block-card")
        self.content_tab = page.get_by_role("tab", name="Content", exact=True)
        self.create_component_button = page.locator(".btn-primary")
        self.save_and_publish_button = page.locator('[data-element="button-saveAndPublish"]')
        self.info_tab = page.locator('[data-element="sub-view-umbInfo"]')
        self.page_link = page.locator('[icon="icon-out"]')
        self.publish_notification = page.locator(".umb-notifications__notifications > li")

        # Link and icon pickers shared by the component editors
        self.link_picker_button = page.locator('button[ng-click="openLinkPicker()"]')
        self.link_url_field = page.locator("#urlLinkPicker")
        self.link_title_field = page.locator("#nodeNameLinkPicker")
        self.link_submit_button = page.locator(".btn-success").last
        self.icon_picker_button = page.locator(".add-link")
        self.icon_picker_items = page.locator(".umb-iconpicker-item")

    def rich_text_body(self, index: int = 0):
        return self.page.frame_locator("iframe").nth(index).locator("#tinymce")

    def search_and_open(self, query: str) -> None:
        """Global search, then open the first hit."""
        self.click_when_visible(self.global_search)
        self.global_search_input.fill(query)
        self.global_search_input.press("Enter")
        expect(self.global_search_first_result).to_be_visible()
        self.global_search_first_result.click()

    def search_and_select_generic_content_page(self) -> None:
        self.search_and_open(GENERIC_CONTENT_PAGE)

    def open_content_tab(self) -> None:
        self.click_when_visible(self.content_tab)

    def add_component(self, component: str) -> None:
        """Add content, search for the component and open its editor. Fill it in, then click_create."""
        self.click_when_visible(self.add_content_button)
        self.component_search_field.press_sequentially(component)
        self.click_when_visible(self.component_result)
        logger.info(f"Opened component editor: {component}")

    def click_create(self, index: int = 0) -> None:
        """index 1 when a nested item editor left a second Create button behind."""
        self.click_when_visible(self.create_component_button.nth(index))

    def pick_component_link(self, kind: str, picker_index: int = 0) -> str:
        """
        Fill the link picker with the test link and a generated title.

        Returns:
            The link title, as it should appear on the site
        """
        title = automation_text(f"{kind} Link")
        self.click_when_visible(self.link_picker_button.nth(picker_index))
        self.link_url_field.wait_for(state="visible")
        self.link_url_field.fill(TEST_LINK)
        self.link_title_field.fill(title)
        self.link_submit_button.click()
        logger.info(f"Picked link {TEST_LINK} titled {title!r}")
        return title

    def select_component_icon(self) -> Optional[str]:
        """Pick a random icon; returns its title attribute."""
        self.click_when_visible(self.icon_picker_button)
        expect(self.icon_picker_items.first).to_be_visible()
        item = self.icon_picker_items.nth(random.randrange(self.icon_picker_items.count()))
        icon = item.locator("a").get_attribute("title")
        item.click()
        logger.info(f"Picked icon {icon}")
        return icon

    def fill_rich_text(self, text: str, index: int = 0) -> str:
        body = self.rich_text_body(index)
        body.wait_for(state="visible")
        body.fill(text)
        return text

    def save_and_publish(self) -> None:
        self.click_when_visible(self.save_and_publish_button)
        self.publish_notification.wait_for(state="visible")
        expect(self.publish_notification).to_have_count(1)

    def open_info_tab(self) -> None:
        self.click_when_visible(self.info_tab)

    def open_page_link(self) -> Page:
        """Open the published page from the Info tab; returns the new tab."""
        with self.page.context.expect_page() as new_page_info:
            self.page_link.click()
        new_page = new_page_info.value
        new_page.wait_for_load_state("domcontentloaded")
        new_page.bring_to_front()
        logger.info(f"Opened published page {new_page.url}")
        return new_page
