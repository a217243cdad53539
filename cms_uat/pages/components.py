"""
1.0 Content Components
Block editors for the components an editor can add to a generic content page,
and the checks that the published page shows them.

Each component fills its editor with generated text (see
shared_steps.automation_text) and keeps what it entered, so the site check
can look for exactly that text.

Components:
- CtaButtonComponent: theme, horizontal position, link and icon
- PillsComponent: link style, title, a pill link with icon, description
- HeadlineComponent: headline text and two layout dropdowns
- GreyBoxComponent: Grey / Primary / Secondary highlighted section
- GoodToKnowComponent: title, description and one icon-text item
- CtbComponent: title, phone number, layout and description
- RichTextComponent: a rich text editor block
"""

import logging
import random
from typing import List, Optional

from playwright.sync_api import Locator, Page, expect

from cms_uat.pages.base_page import BasePage, LONG_TIMEOUT_MS
from cms_uat.pages.shared_steps import SharedSteps, automation_paragraph, automation_text

logger = logging.getLogger(__name__)

# 1.1 Dropdown sizes in the block editors
CTA_THEME_COUNT = 3
CTA_POSITION_COUNT = 4
GREY_BOX_THEMES = ["Grey", "Primary", "Secondary"]

DROPDOWN_LIST = 'select[name="dropDownList"]'


def grey_box_xpath(theme: str) -> str:
    """'Primary' -> xpath of the highlighted section rendered for that theme."""
    return f'//div[contains(@class,"highlighted-section--{theme.lower()}")]'


def random_phone_number() -> str:
    """National-style UK number, e.g. '01632 960123'."""
    return f"0{random.randint(1000, 9999)} {random.randint(100000, 999999)}"


class ComponentEditor(BasePage):
    """Shared parts of a block editor and its published-page check."""

    def __init__(self, page: Page):
        super().__init__(page)
        self.dropdowns = page.locator(DROPDOWN_LIST)
        self.title_field = page.locator("#title")
        self.item_submit_button = page.locator(".btn-primary").last

    @staticmethod
    def site_body(site_page: Page) -> Locator:
        return site_page.locator("body")

    def check_text_on_site(self, site_page: Page, texts: List[str]) -> None:
        body = self.site_body(site_page)
        for text in texts:
            expect(body).to_contain_text(text, timeout=LONG_TIMEOUT_MS)


class CtaButtonComponent(ComponentEditor):
    """
    2.0 CTA button: random theme and position, a link and an icon.
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.theme_dropdown = page.locator("#theme")
        self.position_dropdown = page.locator("#positionHorizontal")
        self.theme: Optional[List[str]] = None
        self.position: Optional[List[str]] = None
        self.title: Optional[str] = None
        self.icon: Optional[str] = None

    def select_theme(self) -> List[str]:
        self.theme_dropdown.click()
        self.theme = self.theme_dropdown.select_option(index=random.randrange(CTA_THEME_COUNT))
        return self.theme

    def select_position(self) -> List[str]:
        self.position_dropdown.click()
        self.position = self.position_dropdown.select_option(index=random.randrange(CTA_POSITION_COUNT))
        return self.position

    def setup(self, steps: SharedSteps) -> None:
        """2.1 Theme, position, link, icon; the editor is left open for Create."""
        self.select_theme()
        self.select_position()
        self.title = steps.pick_component_link("CTA Button")
        self.icon = steps.select_component_icon()
        logger.info(f"CTA button: theme={self.theme} position={self.position} title={self.title!r}")

    def check_on_site(self, site_page: Page) -> None:
        self.check_text_on_site(site_page, [self.title])


class PillsComponent(ComponentEditor):
    """
    3.0 Pills: link style, title, one pill link (icon + URL), description.
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.link_style_dropdown = self.dropdowns.nth(2)
        self.pill_link_button = page.locator("#button_links")
        self.title: Optional[str] = None
        self.link_title: Optional[str] = None
        self.icon: Optional[str] = None
        self.description: Optional[str] = None

    def select_link_style(self) -> List[str]:
        self.link_style_dropdown.wait_for(state="visible")
        return self.link_style_dropdown.select_option(index=random.randint(1, 2))

    def fill_title(self) -> str:
        self.title = automation_text("Pills")
        self.title_field.fill(self.title)
        return self.title

    def add_pill_link(self, steps: SharedSteps) -> None:
        """3.1 Icon and link live in a nested item editor, submitted on its own."""
        self.click_when_visible(self.pill_link_button)
        self.icon = steps.select_component_icon()
        self.link_title = steps.pick_component_link("Pills", picker_index=1)
        self.item_submit_button.click()

    def setup(self, steps: SharedSteps) -> None:
        self.select_link_style()
        self.fill_title()
        self.add_pill_link(steps)
        self.description = steps.fill_rich_text(automation_paragraph())

    def check_on_site(self, site_page: Page) -> None:
        self.check_text_on_site(site_page, [self.title])


class HeadlineComponent(ComponentEditor):
    """
    4.0 Headline text plus the second layout option in both dropdowns.
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.headline_field = page.get_by_role("textbox", name="Property alias:")
        self.text = f"Automation Headline {random.randint(50, 1000)}"

    def setup(self) -> None:
        self.headline_field.wait_for(state="visible")
        self.headline_field.fill(self.text)
        for index in (2, 3):
            dropdown = self.dropdowns.nth(index)
            dropdown.click()
            dropdown.select_option(index=1)
        logger.info(f"Headline: {self.text!r}")

    def check_on_site(self, site_page: Page) -> None:
        self.check_text_on_site(site_page, [self.text])


class GreyBoxComponent(ComponentEditor):
    """
    5.0 Grey box with a random theme. The site renders it as a
    highlighted-section--<theme> block.
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.theme_dropdown = page.get_by_role("combobox")
        self.theme: Optional[str] = None

    def setup(self) -> str:
        self.theme = random.choice(GREY_BOX_THEMES)
        self.theme_dropdown.wait_for(state="visible")
        self.theme_dropdown.select_option(label=self.theme)
        logger.info(f"Grey box theme: {self.theme}")
        return self.theme

    def check_on_site(self, site_page: Page) -> None:
        expect(site_page.locator(grey_box_xpath(self.theme))).to_be_visible(timeout=LONG_TIMEOUT_MS)


class GoodToKnowComponent(ComponentEditor):
    """
    6.0 Good to know: a title and description, plus one icon-text item with
    its own title, description, icon and link.
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.add_item_button = page.locator("#button_iconText")
        self.title = automation_text("Good to know")
        self.description = automation_paragraph()
        self.item_title: Optional[str] = None
        self.item_icon: Optional[str] = None
        self.item_link: Optional[str] = None

    def setup(self, steps: SharedSteps) -> None:
        self.title_field.wait_for(state="visible")
        self.title_field.fill(self.title)
        steps.fill_rich_text(self.description)

        self.click_when_visible(self.add_item_button)
        self.item_title = automation_text("Good to know Item")
        self.title_field.nth(1).wait_for(state="visible")
        self.title_field.nth(1).fill(self.item_title)
        steps.fill_rich_text(automation_text("Item Description"), index=1)
        self.item_icon = steps.select_component_icon()
        self.item_link = steps.pick_component_link("Good to know")
        self.item_submit_button.click()

    def check_on_site(self, site_page: Page) -> None:
        self.check_text_on_site(site_page, [self.title, self.description])


class CtbComponent(ComponentEditor):
    """
    7.0 Call to book: title, phone number, random layout and description.
    """

    def __init__(self, page: Page):
        super().__init__(page)
        self.phone_number_field = page.locator("#phoneNumber")
        self.layout_dropdown = self.dropdowns.nth(2)
        self.title = automation_text("CTB")
        self.phone_number = random_phone_number()
        self.description = automation_paragraph()
        self.layout: Optional[List[str]] = None

    def setup(self, steps: SharedSteps) -> None:
        self.title_field.wait_for(state="visible")
        self.title_field.fill(self.title)
        self.phone_number_field.fill(self.phone_number)
        self.layout_dropdown.click()
        self.layout = self.layout_dropdown.select_option(index=random.randint(1, 2))
        steps.fill_rich_text(self.description)
        logger.info(f"CTB: {self.title!r} {self.phone_number} layout={self.layout}")

    def check_on_site(self, site_page: Page) -> None:
        self.check_text_on_site(site_page, [self.title, self.phone_number])


class RichTextComponent(ComponentEditor):

    def __init__(self, page: Page):
        super().__init__(page)
        self.text = automation_paragraph()

    def setup(self, steps: SharedSteps) -> None:
        steps.fill_rich_text(self.text)

    def check_on_site(self, site_page: Page) -> None:
        self.check_text_on_site(site_page, [self.text])
