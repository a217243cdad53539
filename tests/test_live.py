"""
LIVE TESTS - Network-Dependent

Run: RUN_LIVE=1 ENV=qa pytest tests/test_live.py
Time: 30-60 seconds (network calls)

Real HTTP against the selected environment: a sample of migrated source
paths, the error page, and the delivery API (needs PCMS_API_KEY).

Run manually or in nightly CI, not on every commit.
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cms_uat.config import get_api_key  # noqa: E402
from cms_uat.delivery_api import DeliveryApiClient  # noqa: E402
from cms_uat.exceptions import ConfigError, ContentMismatchError  # noqa: E402
from cms_uat.migration_data import COL_REGION_CODE, COL_RESORT_CODE  # noqa: E402
from cms_uat.source_path_checker import check_migration_row, check_source_path  # noqa: E402
from cms_uat.source_paths import PRODUCTS  # noqa: E402

pytestmark = [pytest.mark.live, pytest.mark.uat]

SAMPLE_SIZE = 3


@pytest.fixture(scope="module")
def api_client(live_config, live_environment):
    try:
        api_key = get_api_key()
    except ConfigError as e:
        pytest.skip(str(e))
    client = DeliveryApiClient(live_environment.p_cms, api_key, config=live_config)
    yield client
    client.close()


# =============================================================================
# 1. SITE REACHABILITY (2 tests)
# =============================================================================

def test_public_site_home(live_environment, live_config):
    result = check_source_path(live_environment.inghams, live_environment.error_path,
                               user_agent=live_config.get("user_agent"))
    assert result["passed"], f"{result['url']}: {result['error']}"
    assert result["title"], "Home page has no <title>"


def test_unknown_path_does_not_pass(live_environment):
    result = check_source_path(f"{live_environment.e_cms}/this-page-was-never-migrated",
                               live_environment.error_path)
    assert not result["passed"]
    assert result["error"] in ("status_404", "error_page")


# =============================================================================
# 2. SOURCE PATHS (1 test per product)
# =============================================================================

@pytest.mark.migration
@pytest.mark.parametrize("product", PRODUCTS)
def test_sample_source_paths(live_environment, live_migration_data, live_config, product):
    rows = list(live_migration_data.iter_rows(product))[:SAMPLE_SIZE]
    if not rows:
        pytest.skip(f"No migration rows for {product}")

    failures = []
    for row in rows:
        result = check_migration_row(row, live_environment, live_migration_data,
                                     user_agent=live_config.get("user_agent"))
        if not result["passed"]:
            failures.append(f"{result['target_url']}: {result['error']}")
    assert not failures, "\n".join(failures)


# =============================================================================
# 3. DELIVERY API (3 tests per product)
# =============================================================================

@pytest.mark.parametrize("product", PRODUCTS)
def test_country_codes(api_client, live_migration_data, product):
    codes = live_migration_data.unique_country_codes(product)[:SAMPLE_SIZE]
    failures = []
    for code in codes:
        try:
            api_client.check_code(product, "country", code)
        except ContentMismatchError as e:
            failures.append(str(e))
    assert not failures, "\n".join(failures)


@pytest.mark.parametrize("product", PRODUCTS)
@pytest.mark.parametrize("level,column", [("region", COL_REGION_CODE), ("resort", COL_RESORT_CODE)])
def test_region_and_resort_codes(api_client, live_migration_data, product, level, column):
    rows = live_migration_data.unique_rows_by_code(product, column)[:SAMPLE_SIZE]
    if not rows:
        pytest.skip(f"No {level} codes for {product}")

    failures = []
    for row in rows:
        code = row.region_code if level == "region" else row.resort_code
        try:
            api_client.check_code(product, level, code)
        except ContentMismatchError as e:
            failures.append(str(e))
    assert not failures, "\n".join(failures)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
