"""
1.0 Editorial CMS Main Page
Content tree navigation and the page edits used as test setup.

Key features:
- Expands Home > product > resort folder > country > region > resort
- Hero banner layout, alignment and media replacement
- Default program (shared header/footer) add and remove on the Search tab
- Accordion rebuild with a rich text item and an image carousel item
"""

import logging
from typing import List, Optional

from playwright.sync_api import Locator, Page, expect

from cms_uat.pages.base_page import BasePage, DEFAULT_TIMEOUT_MS, LONG_TIMEOUT_MS

logger = logging.getLogger(__name__)

# 1.1 Folder under each product that holds the destination tree
RESORT_FOLDERS = ["Resorts", "Destinations", "Ski Resorts"]

RTE_ITEM_TITLE = "RTE Test Accordion Item"
RTE_ITEM_TEXT = "RTE Test Accordion Item Content: The quick brown fox jumps over the lazy dog."
CAROUSEL_ITEM_TITLE = "Image Carousel Test Accordion Item"


class EcmsMainPage(BasePage):
    """
    2.0 EcmsMainPage Class
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.content_fields = page.get_by_label("Content Fields")
        self.content_tab = page.get_by_role("tab", name="Content", exact=True)
        self.secondary_resort_arrow = page.get_by_role("button", name="Expand child items for Resorts").nth(1)

        # 2.1 Hero banner
        self.banner_item = page.locator(
            '//button[@class = "btn-reset umb-outline blockelement-labelblock-editor blockelement__draggable-element"]'
        )
        self.add_banner_button = page.get_by_role("button", name="Add Banner")
        self.banner_layout = page.locator('//option[contains(text(),"Full Bleed")]//parent::select')
        self.banner_vertical_alignment = page.locator('//option[text()="Top"]//parent::select')
        self.banner_horizontal_alignment = page.locator('//option[text()="Full"]//parent::select')
        self.media_tab = page.get_by_role("tab", name="Media")
        self.add_media_button = page.get_by_role("button", name="Add", exact=True)
        self.existing_media = page.locator('//ng-form[@name = "vm.mediaCardForm"]')
        self.remove_media_button = page.get_by_role("button", name="Remove")
        self.select_media_button = page.get_by_role("button", name="Select", exact=True)
        self.submit_button = page.get_by_role("button", name="Submit")
        self.create_button = page.get_by_role("button", name="Create", exact=True)

        # 2.2 Content areas and accordion editor
        self.property_actions = page.get_by_role("button", name="Open Property Actions")
        self.add_content_buttons = page.get_by_role("button", name="Add content")
        self.close_property_actions = page.get_by_role("button", name="Close Property Actions")
        self.remove_all_items_button = page.get_by_role("button", name="Remove all items")
        self.delete_button = page.get_by_label("Delete").get_by_role("button", name="Delete")
        self.add_accordion_item_button = page.get_by_role("button", name="Add Accordion Item")
        self.accordion_item_title = page.get_by_label("Title*")
        self.add_image_carousel_item_button = page.get_by_role("button", name="Add Image Carousel Item")
        self.select_image_or_video = page.get_by_role("link", name="Select Image Or Video")
        self.rich_text_body = page.frame_locator('[title="Rich Text Area"]').locator("#tinymce")

        # 2.3 Publishing
        self.save_and_publish_button = page.get_by_role("button", name="Save and publish")
        self.published_message = page.get_by_text("Content published: and visible on the website")

        # 2.4 Search tab (default program)
        self.search_tab = page.get_by_role("tab", name="Search")
        self.add_default_program = page.get_by_label("Default Program: Add")
        self.remove_default_program = page.locator('//button[@ng-click="onRemove()"]')

    def expansion_arrow(self, target: str) -> Locator:
        return self.page.locator(f'//a[text()="{target}"]//preceding-sibling::button')

    def tree_link(self, target: str) -> Locator:
        return self.page.locator(f'//a[text()="{target}"]')

    def media_tile(self, media: str) -> Locator:
        return self.page.locator(f'//div[@title = "{media}"]')

    def component_card(self, component: str) -> Locator:
        return self.page.locator(f'//div[text()="{component}"]')

    def current_default_program(self, program: str) -> Locator:
        return self.page.locator(f'//div[@class="umb-node-preview__content"]//div[text()="{program}"]')

    def default_program_option(self, program: str) -> Locator:
        return self.page.locator(f'//div[contains(@ng-hide,"Search")]//li[@data-element="tree-item-{program}"]')

    # =========================================================================
    # 3.0 TREE NAVIGATION
    # =========================================================================

    def expand_tree(
        self,
        product: str,
        country: Optional[str] = None,
        region: Optional[str] = None,
        resort: Optional[str] = None,
        *,
        secondary_product: Optional[str] = None,
    ) -> None:
        """
        3.1 Expand the content tree down to the deepest node given.

        Args:
            product: Product node under Home, e.g. "Walking"
            country, region, resort: Node names to expand in order
            secondary_product: Sub-product sharing the tree, e.g. "Santa Breaks"
                under Lapland. Keyword only.
        """
        self.wait_for_load()
        self.click_when_visible(self.expansion_arrow("Home"))
        self.click_when_visible(self.expansion_arrow(product))
        self.page.wait_for_timeout(500)

        for folder in RESORT_FOLDERS:
            # Lapland's secondary products have their own Resorts folder
            if folder == "Resorts" and secondary_product is not None:
                continue
            if self.expansion_arrow(folder).is_visible():
                self.click_when_visible(self.expansion_arrow(folder))
                break

        if secondary_product is not None:
            self.click_when_visible(self.expansion_arrow(secondary_product))
            self.click_when_visible(self.secondary_resort_arrow)

        for node in (country, region, resort):
            if node is not None:
                self.click_when_visible(self.expansion_arrow(node))
        logger.info(f"Expanded tree: {product} / {secondary_product} / {country} / {region} / {resort}")

    def select_target_page(self, target: str) -> None:
        self.click_when_visible(self.tree_link(target))
        expect(self.content_fields).to_be_visible(timeout=LONG_TIMEOUT_MS)

    def save_and_publish(self) -> None:
        self.click_when_visible(self.save_and_publish_button)
        expect(self.published_message).to_be_visible(timeout=LONG_TIMEOUT_MS)
        logger.info("Content published")

    # =========================================================================
    # 4.0 PAGE EDITS
    # =========================================================================

    def _pick_media(self, media: str) -> None:
        self.click_when_visible(self.media_tile(media))
        expect(self.select_media_button).to_be_enabled(timeout=DEFAULT_TIMEOUT_MS)
        self.select_media_button.hover(timeout=DEFAULT_TIMEOUT_MS)
        self.select_media_button.click(timeout=DEFAULT_TIMEOUT_MS)

    def modify_hero_banner(
        self,
        media: str,
        layout: str = "Full Bleed",
        vertical: str = "Top",
        horizontal: str = "Full",
    ) -> None:
        """
        4.1 Open (or add) the hero banner, set its layout and swap the media.
        """
        self.click_when_visible(self.content_tab)
        if self.banner_item.is_visible():
            self.click_when_visible(self.banner_item)
        else:
            self.click_when_visible(self.add_banner_button)

        self.banner_layout.select_option(label=layout)
        self.banner_vertical_alignment.select_option(label=vertical)
        self.banner_horizontal_alignment.select_option(label=horizontal)

        self.click_when_visible(self.media_tab)
        if self.existing_media.is_visible():
            self.click_when_visible(self.remove_media_button)
        self.click_when_visible(self.add_media_button)
        self._pick_media(media)

        # Existing banners submit, new ones create
        if self.submit_button.is_visible():
            self.click_when_visible(self.submit_button)
        else:
            self.click_when_visible(self.create_button)
        logger.info(f"Hero banner set to {media} ({layout}, {vertical}, {horizontal})")

    def add_default_program_header_footer(self, program: str) -> None:
        """4.2 Point the page's default program at the given site program."""
        self.click_when_visible(self.search_tab)
        if not self.add_default_program.is_visible():
            self.click_when_visible(self.remove_default_program)
            expect(self.current_default_program(program)).not_to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
            expect(self.add_default_program).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        self.click_when_visible(self.add_default_program)
        self.click_when_visible(self.default_program_option(program))
        expect(self.current_default_program(program)).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)

    def remove_default_program_header_footer(self) -> None:
        self.click_when_visible(self.search_tab)
        if self.add_default_program.is_hidden():
            self.click_when_visible(self.remove_default_program)
            expect(self.add_default_program).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)

    def _clear_content_area(self, index: int) -> None:
        self.property_actions.nth(index).click(timeout=DEFAULT_TIMEOUT_MS)
        if self.remove_all_items_button.is_enabled():
            self.click_when_visible(self.remove_all_items_button)
            self.click_when_visible(self.delete_button)
        else:
            self.close_property_actions.click(timeout=DEFAULT_TIMEOUT_MS)

    def modify_accordions(self, carousel_media: List[str]) -> None:
        """
        4.3 Replace the page content with one accordion of two items.

        Item 1 holds a rich text editor, item 2 an image carousel built from
        carousel_media. Both content areas are emptied first.
        """
        self.click_when_visible(self.content_tab)
        self._clear_content_area(1)
        self._clear_content_area(2)

        self.click_when_visible(self.add_content_buttons.first)
        self.click_when_visible(self.component_card("Accordion"))

        # Rich text item
        self.click_when_visible(self.add_accordion_item_button)
        self.accordion_item_title.fill(RTE_ITEM_TITLE)
        self.click_when_visible(self.add_content_buttons.nth(2))
        self.click_when_visible(self.component_card("Rich Text Editor"))
        self.rich_text_body.fill(RTE_ITEM_TEXT)
        self.click_when_visible(self.create_button.nth(2))
        self.click_when_visible(self.create_button.nth(1))

        # Image carousel item
        self.click_when_visible(self.add_accordion_item_button)
        self.accordion_item_title.fill(CAROUSEL_ITEM_TITLE)
        self.click_when_visible(self.add_content_buttons.nth(2))
        self.click_when_visible(self.component_card("Image Carousel"))
        for media in carousel_media:
            self.click_when_visible(self.add_image_carousel_item_button)
            self.click_when_visible(self.select_image_or_video)
            self._pick_media(media)
            self.click_when_visible(self.create_button.nth(3))

        self.click_when_visible(self.create_button.nth(2))
        self.click_when_visible(self.create_button.nth(1))
        self.click_when_visible(self.create_button.first)
        logger.info(f"Accordion rebuilt with {len(carousel_media)} carousel images")
