"""
COUNTRY PAGE - Browser, Live Environment, Read Only

Run: RUN_LIVE=1 pytest tests/e2e/test_country_page.py

Opens the first migrated country page of each product on the public site and
checks the shared header and footer chrome.
"""

import pytest

from cms_uat.config import get_api_key
from cms_uat.delivery_api import DeliveryApiClient
from cms_uat.exceptions import ConfigError
from cms_uat.migration_data import LEVEL_COUNTRY, LEVEL_REGION
from cms_uat.pages import CountryPage, RegionPage
from cms_uat.source_paths import PRODUCTS, build_target_url, target_name

pytestmark = [pytest.mark.e2e, pytest.mark.regression, pytest.mark.inw]


def country_url(environment, migration_data, product: str) -> str:
    row = next(migration_data.iter_rows(product, level=LEVEL_COUNTRY), None)
    if row is None:
        pytest.skip(f"No country rows for {product}")
    return build_target_url(environment.e_cms, product, row.source_path)


@pytest.mark.parametrize("product", PRODUCTS)
def test_country_page_header(page, live_environment, live_migration_data, product):
    country_page = CountryPage(page)
    country_page.goto(country_url(live_environment, live_migration_data, product))
    country_page.check_header(product)


@pytest.mark.parametrize("product", PRODUCTS)
def test_country_page_footer(page, live_environment, live_migration_data, product):
    country_page = CountryPage(page)
    country_page.goto(country_url(live_environment, live_migration_data, product))
    country_page.check_footer(product)


def test_walking_country_hero_banner_present(page, live_environment, live_migration_data):
    country_page = CountryPage(page)
    country_page.goto(country_url(live_environment, live_migration_data, "walking"))
    assert country_page.hero_banner.count() > 0, "Walking country page has no hero banner"


GLANCE_PROPERTIES = ("language", "currency", "timeZone")


@pytest.mark.uat
@pytest.mark.parametrize("product", PRODUCTS)
def test_country_at_a_glance_matches_api(page, live_config, live_environment, live_migration_data, product):
    """At-a-glance panel shows the locale held on the product CMS country item."""
    try:
        api_key = get_api_key()
    except ConfigError as e:
        pytest.skip(str(e))

    row = next(live_migration_data.iter_rows(product, level=LEVEL_COUNTRY), None)
    code = live_migration_data.country_code(product, row) if row else None
    if not code:
        pytest.skip(f"No country code for {product}")

    client = DeliveryApiClient(live_environment.p_cms, api_key, config=live_config)
    try:
        item = client.check_code(product, LEVEL_COUNTRY, code)
    finally:
        client.close()

    properties = item.get("properties") or {}
    values = [properties.get(key) for key in GLANCE_PROPERTIES]
    if not all(isinstance(value, str) and value for value in values):
        pytest.skip(f"{item.get('name')} has no locale properties")

    country_page = CountryPage(page)
    country_page.goto(build_target_url(live_environment.e_cms, product, row.source_path))
    country_page.check_at_a_glance(*values, target=target_name(row.source_path))


@pytest.mark.uat
def test_walking_region_at_a_glance_matches_api(page, live_config, live_environment, live_migration_data):
    """A region page shows its country's locale and its own more-info link."""
    try:
        api_key = get_api_key()
    except ConfigError as e:
        pytest.skip(str(e))

    row = next(live_migration_data.iter_rows("walking", level=LEVEL_REGION), None)
    code = live_migration_data.country_code("walking", row) if row else None
    if not code:
        pytest.skip("No walking region with a country code")

    client = DeliveryApiClient(live_environment.p_cms, api_key, config=live_config)
    try:
        item = client.check_code("walking", LEVEL_COUNTRY, code)
    finally:
        client.close()

    properties = item.get("properties") or {}
    values = [properties.get(key) for key in GLANCE_PROPERTIES]
    if not all(isinstance(value, str) and value for value in values):
        pytest.skip(f"{item.get('name')} has no locale properties")

    region_page = RegionPage(page)
    region_page.goto(build_target_url(live_environment.e_cms, "walking", row.source_path))
    region_page.check_at_a_glance(*values, target=target_name(row.source_path))
