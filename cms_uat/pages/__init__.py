"""
Playwright page objects (sync API)

Modules:
- base_page: Shared navigation and wait helpers
- sign_in_page: Editorial and product CMS back-office login
- ecms_main_page: Content tree, hero banner, default program and accordion editing
- shared_steps: Back-office steps reused across component journeys
- components: CTA button, pills, headline, grey box, good to know, CTB and rich text editors
- country_page: Public country page header, footer, hero banner and at-a-glance checks
- region_page: Public region page (country page checks, region more-info link)
- search_result_page: Search widget, search results, filters and ratings
- pagination: Pagination detection on result listings
"""

from cms_uat.pages.base_page import BasePage
from cms_uat.pages.components import (
    CtaButtonComponent,
    CtbComponent,
    GoodToKnowComponent,
    GreyBoxComponent,
    HeadlineComponent,
    PillsComponent,
    RichTextComponent,
)
from cms_uat.pages.country_page import CountryPage
from cms_uat.pages.ecms_main_page import EcmsMainPage
from cms_uat.pages.pagination import PaginationHelper
from cms_uat.pages.region_page import RegionPage
from cms_uat.pages.search_result_page import SearchResultPage
from cms_uat.pages.shared_steps import SharedSteps
from cms_uat.pages.sign_in_page import EcmsSignInPage, PcmsSignInPage

__all__ = [
    "BasePage",
    "CountryPage",
    "CtaButtonComponent",
    "CtbComponent",
    "EcmsMainPage",
    "EcmsSignInPage",
    "GoodToKnowComponent",
    "GreyBoxComponent",
    "HeadlineComponent",
    "PaginationHelper",
    "PcmsSignInPage",
    "PillsComponent",
    "RegionPage",
    "RichTextComponent",
    "SearchResultPage",
    "SharedSteps",
]
