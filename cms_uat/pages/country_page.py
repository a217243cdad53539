"""
1.0 Country Page
Public-site checks for a product country page.

The header navigation and footer links differ per product; the tables below
hold the text each product must show. The "not visible" checks are used after
the default program has been removed from a page in the editorial CMS: the
navigation and socials disappear and the product links drop out of the footer.
"""

import logging
from typing import Dict, List, Optional

from playwright.sync_api import Page, expect

from cms_uat.pages.base_page import BasePage, DEFAULT_TIMEOUT_MS, LONG_TIMEOUT_MS
from cms_uat.pages.ecms_main_page import CAROUSEL_ITEM_TITLE, RTE_ITEM_TEXT, RTE_ITEM_TITLE
from cms_uat.source_paths import PRODUCT_LAPLAND, PRODUCT_SANTA, PRODUCT_SKI, PRODUCT_WALKING

logger = logging.getLogger(__name__)

# 1.1 Header label and navigation per product
PRODUCT_LABELS: Dict[str, str] = {
    PRODUCT_WALKING: "WALKING",
    PRODUCT_SKI: "SKI",
    PRODUCT_LAPLAND: "LAPLAND",
    PRODUCT_SANTA: "LAPLAND",
}

HEADER_NAVIGATION: Dict[str, List[str]] = {
    PRODUCT_WALKING: [
        "Destinations",
        "Holiday Types",
        "Lakes and Mountains",
        "Holiday by Train",
        "Inspire Me",
        "Deals and Offers",
    ],
    PRODUCT_SKI: ["Destinations", "Holiday Types", "Ski Chalets", "Late Ski Deals"],
    PRODUCT_LAPLAND: [
        "Destinations",
        "Excursions",
        "Santa Breaks",
        "Lapland deals & offers",
        "Insider Guides",
        "Lapland late Deals",
    ],
}
HEADER_NAVIGATION[PRODUCT_SANTA] = HEADER_NAVIGATION[PRODUCT_LAPLAND]

# 1.2 Footer
COMMON_FOOTER_LINKS = ["Manage my booking", "Agent login", "Help and FAQs", "Contact us", "About Us"]

PRODUCT_FOOTER_LINKS: Dict[str, List[str]] = {
    PRODUCT_WALKING: ["Walking With Inghams", "Walking Deals & offers"],
    PRODUCT_SKI: ["Ski Holidays", "Ski deals & offers"],
    PRODUCT_LAPLAND: ["Lapland Excursions", "Lapland deals & offers"],
}
PRODUCT_FOOTER_LINKS[PRODUCT_SANTA] = PRODUCT_FOOTER_LINKS[PRODUCT_LAPLAND]

SOCIALS_LABEL = {
    PRODUCT_WALKING: "Walking",
    PRODUCT_SKI: "Ski",
    PRODUCT_LAPLAND: "Lapland",
    PRODUCT_SANTA: "Lapland",
}

BRANDS = ["Ski", "Walking", "Lapland"]

CONTENT_LINKS = [
    "Terms and conditions",
    "Privacy policy",
    "Modern Slavery statement",
    "Accessibility",
    "Sitemap",
    "Cookie settings",
]

BRAND_DETAILS = "Inghams is a brand of Hotelplan Limited"


class CountryPage(BasePage):
    """
    2.0 CountryPage Class
    """

    def __init__(self, page: Page):
        super().__init__(page)
        # 2.1 Header
        self.header_home_icon = page.locator('//div[@class="c-home-menu-wrapper"]')
        self.header_logo = page.locator('//a[@class="c-brand__logo"]')
        self.header_product = page.locator('//span[@class="c-brand__product"]')
        self.header_navigation = page.locator('//nav[@data-module="navigation"]')
        self.header_contact = page.locator('//div[@class="c-brand-contact"]')
        self.header_user = page.locator('//span[@class="c-user"]')

        # 2.2 Footer
        footer = '//footer[contains(@class,"c-footer")]//div[@class="container"]'
        brands = '//div[contains(@class,"c-footer__brand u-margin-top u-margin-bottom")]'
        self.footer_links = page.locator(f'{footer}//div[contains(@class,"c-footer__links")]')
        self.footer_socials = page.locator(f'{footer}//div[contains(@class,"c-footer__socials")]')
        self.footer_brands = page.locator(brands)
        self.footer_brand_symbols = {
            brand: page.locator(f'{brands}//span[@class="s-symbol s-{brand.lower()}"]') for brand in BRANDS
        }
        self.footer_content_links = page.locator('//div[@class="c-footer__content-links"]')
        self.footer_brand_details = page.locator('//div[@class="c-footer__content"]//p[contains(text(),"Inghams")]')

        # 2.3 Body
        self.hero_banner = page.locator('//div[contains(@class,"c-hero ")]')
        self.at_a_glance = page.locator('//div[@class="c-geography-context__glance"]')
        self.at_a_glance_content = page.locator('//div[contains(@class,"glance-content")]')
        self.at_a_glance_more_info = page.locator('//a[contains(@class,"more-info")]')
        self.accordion = page.locator('//div[@class="c-accordion"]')

    # =========================================================================
    # 3.0 HEADER AND FOOTER
    # =========================================================================

    def check_header(self, product: str, program_visible: bool = True) -> None:
        """
        3.1 Header chrome and product navigation.

        Args:
            product: walking, ski, lapland or santa
            program_visible: False after the default program was removed
        """
        for locator in (self.header_home_icon, self.header_logo, self.header_product,
                        self.header_contact, self.header_user):
            expect(locator).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        expect(self.header_product).to_contain_text(PRODUCT_LABELS[product])

        if program_visible:
            expect(self.header_navigation).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
            for item in HEADER_NAVIGATION[product]:
                expect(self.header_navigation).to_contain_text(item)
        else:
            expect(self.header_navigation).to_be_hidden(timeout=DEFAULT_TIMEOUT_MS)
            for item in HEADER_NAVIGATION[product]:
                expect(self.header_navigation).not_to_contain_text(item)

    def check_footer(self, product: str, program_visible: bool = True) -> None:
        """3.2 Footer links, brands and legal details."""
        expect(self.footer_links).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        expect(self.footer_brands).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        for symbol in self.footer_brand_symbols.values():
            expect(symbol).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        expect(self.footer_content_links).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
        expect(self.footer_brand_details).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)

        for link in COMMON_FOOTER_LINKS:
            expect(self.footer_links).to_contain_text(link)

        if program_visible:
            expect(self.footer_socials).to_be_visible(timeout=DEFAULT_TIMEOUT_MS)
            expect(self.footer_socials).to_contain_text(SOCIALS_LABEL[product])
            for link in PRODUCT_FOOTER_LINKS[product]:
                expect(self.footer_links).to_contain_text(link)
        else:
            expect(self.footer_socials).to_be_hidden(timeout=DEFAULT_TIMEOUT_MS)
            for link in PRODUCT_FOOTER_LINKS[product]:
                expect(self.footer_links).not_to_contain_text(link)

        for brand in BRANDS:
            expect(self.footer_brands).to_contain_text(brand)
        for link in CONTENT_LINKS:
            expect(self.footer_content_links).to_contain_text(link)
        expect(self.footer_brand_details).to_contain_text(BRAND_DETAILS)

    # =========================================================================
    # 4.0 BODY COMPONENTS
    # =========================================================================

    def check_hero_banner(
        self,
        media: str,
        vertical: Optional[str] = None,
        horizontal: Optional[str] = None,
    ) -> None:
        """
        4.1 The banner background comes from the chosen media and the
        alignment shows up as CSS classes.
        """
        expect(self.hero_banner).to_be_visible(timeout=LONG_TIMEOUT_MS)
        class_attribute = self.hero_banner.get_attribute("class") or ""
        style = self.hero_banner.get_attribute("style") or ""
        logger.info(f"Hero banner class='{class_attribute}' style='{style}'")

        assert media.lower() in style, f"Hero banner style does not reference {media!r}: {style}"
        if vertical:
            expected = f"alignment-vertical-{vertical.lower()}"
            assert expected in class_attribute, f"{expected} missing from {class_attribute!r}"
        if horizontal:
            expected = f"alignment-horizontal-{horizontal.lower()}"
            assert expected in class_attribute, f"{expected} missing from {class_attribute!r}"

    def check_at_a_glance(self, language: str, currency: str, timezone: str, target: Optional[str] = None) -> None:
        """4.2 At-a-glance panel shows the CMS values and links to more info."""
        expect(self.at_a_glance).to_be_visible(timeout=LONG_TIMEOUT_MS)
        if target and target not in (self.at_a_glance.text_content() or ""):
            logger.warning(f"At a glance panel does not mention {target}")

        expect(self.at_a_glance_content).to_be_visible(timeout=LONG_TIMEOUT_MS)
        for value in (language, currency, timezone):
            expect(self.at_a_glance_content).to_contain_text(value)

        expect(self.at_a_glance_more_info).to_be_visible(timeout=LONG_TIMEOUT_MS)
        expect(self.at_a_glance_more_info).to_be_enabled()
        assert self.at_a_glance_more_info.get_attribute("href") is not None, "More info link has no href"

    def accordion_attribute_values(self) -> List[str]:
        return self.accordion.evaluate(
            "el => Array.from(el.querySelectorAll('*'))"
            ".flatMap(e => Array.from(e.attributes).map(a => a.value))"
        )

    def check_accordions(self, carousel_media: List[str]) -> None:
        """4.3 Accordion built by EcmsMainPage.modify_accordions is rendered."""
        expect(self.accordion).to_be_visible(timeout=LONG_TIMEOUT_MS)
        for text in (RTE_ITEM_TITLE, CAROUSEL_ITEM_TITLE, RTE_ITEM_TEXT):
            expect(self.accordion).to_contain_text(text)

        values = self.accordion_attribute_values()
        for media in carousel_media:
            assert any(media in value for value in values), f"Carousel image {media!r} not found in accordion"
