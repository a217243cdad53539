"""
1.0 Region Page
Region pages share the country page chrome and body components. Only the
at-a-glance "more info" link differs: a region page can carry several
more-info links, so it is scoped to the glance panel.
"""

from playwright.sync_api import Page

from cms_uat.pages.country_page import CountryPage

AT_A_GLANCE_MORE_INFO = '//div[contains(@class,"glance")]//a[contains(@class,"more-info")]'


class RegionPage(CountryPage):

    def __init__(self, page: Page):
        super().__init__(page)
        self.at_a_glance_more_info = page.locator(AT_A_GLANCE_MORE_INFO)
