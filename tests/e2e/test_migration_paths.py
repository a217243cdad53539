"""
MIGRATION JOURNEYS - Browser, Live Environment

Run: RUN_LIVE=1 ENV=qa pytest tests/e2e/test_migration_paths.py
Time: minutes (one page load per migration row)

Every migrated source path must open in a real browser without landing on the
editorial CMS error page, and the product CMS must hold one item for each
country/region/resort code the row carries.
"""

import re
from pathlib import Path

import pytest
from playwright.sync_api import expect

from cms_uat.config import CONFIG_FILE_PATH, get_api_key, load_config
from cms_uat.delivery_api import DeliveryApiClient
from cms_uat.exceptions import ConfigError
from cms_uat.migration_data import LEVEL_COUNTRY, LEVEL_REGION, LEVEL_RESORT, MigrationData
from cms_uat.source_path_checker import FAILING_STATUS_CODES
from cms_uat.source_paths import PRODUCTS, build_target_url, rule_set_for

pytestmark = [pytest.mark.e2e, pytest.mark.migration, pytest.mark.uat]

PROJECT_ROOT = Path(__file__).parent.parent.parent
_DATA = MigrationData.from_config(load_config(str(PROJECT_ROOT / CONFIG_FILE_PATH)), base_dir=str(PROJECT_ROOT))

ALL_ROWS = [row for product in PRODUCTS for row in _DATA.iter_rows(product)]
ROW_IDS = [f"{row.product}:{row.normalised_path}" for row in ALL_ROWS]


@pytest.fixture(scope="module")
def api_client(live_config, live_environment):
    try:
        api_key = get_api_key()
    except ConfigError as e:
        pytest.skip(str(e))
    client = DeliveryApiClient(live_environment.p_cms, api_key, config=live_config)
    yield client
    client.close()


def open_source_path(page, environment, row) -> str:
    target = build_target_url(environment.e_cms, rule_set_for(row.product, row.level), row.source_path)
    response = page.goto(target, wait_until="domcontentloaded")
    assert response is not None, f"No response for {target}"
    assert response.status not in FAILING_STATUS_CODES, f"{target} returned {response.status}"
    expect(page).not_to_have_url(re.compile(re.escape(environment.error_path)))
    return target


@pytest.mark.parametrize("row", ALL_ROWS, ids=ROW_IDS)
def test_source_path_opens(page, live_environment, row):
    open_source_path(page, live_environment, row)


@pytest.mark.parametrize("row", [r for r in ALL_ROWS if r.level != "accommodation"],
                         ids=[i for r, i in zip(ALL_ROWS, ROW_IDS) if r.level != "accommodation"])
def test_source_path_codes_cross_reference(page, live_environment, live_migration_data, api_client, row):
    """Page resolves, then each code on the row is one delivery API item."""
    open_source_path(page, live_environment, row)

    codes = {
        LEVEL_COUNTRY: live_migration_data.country_code(row.product, row),
        LEVEL_REGION: row.region_code,
        LEVEL_RESORT: row.resort_code,
    }
    checked = 0
    for level, code in codes.items():
        if code:
            api_client.check_code(row.product, level, code)
            checked += 1
    if not checked:
        pytest.skip(f"{row.source_path} carries no codes")


@pytest.mark.accom
@pytest.mark.parametrize("row", [r for r in ALL_ROWS if r.level == "accommodation"],
                         ids=[i for r, i in zip(ALL_ROWS, ROW_IDS) if r.level == "accommodation"])
def test_accommodation_path_opens(page, live_environment, row):
    open_source_path(page, live_environment, row)
    expect(page.locator("h1").first).to_be_visible()


@pytest.mark.parametrize("product", PRODUCTS)
def test_api_item_renders_on_site(page, live_environment, live_migration_data, api_client, product):
    """Each region code's API route opens on the public site and shows the item name."""
    rows = live_migration_data.unique_rows_by_code(product, "RegionCode")
    if not rows:
        pytest.skip(f"No region codes for {product}")

    item = api_client.check_code(product, LEVEL_REGION, rows[0].region_code)
    route = (item.get("route") or {}).get("path")
    assert route, f"Item {item.get('id')} has no route path"

    response = page.goto(f"{live_environment.inghams}/{route.lstrip('/')}", wait_until="domcontentloaded")
    assert response is not None and response.status not in FAILING_STATUS_CODES
    expect(page.locator("body")).to_contain_text(item["name"], ignore_case=True)
