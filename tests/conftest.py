"""
Shared fixtures.

Live HTTP tests (marker: live) and browser journeys (marker: e2e) hit real
environments, so they are skipped unless RUN_LIVE=1. Journeys that edit the
editorial CMS (marker: cms) also need ECMS_USERNAME / ECMS_PASSWORD.
"""

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cms_uat.config import Environment, load_config, get_environment  # noqa: E402
from cms_uat.migration_data import MigrationData  # noqa: E402

DATA_DIR = Path(__file__).parent / "data"

TEST_ENVIRONMENT = Environment(
    name="test",
    inghams="https://site.test",
    e_cms="https://ecms.test",
    p_cms="https://pcms.test",
)


def pytest_collection_modifyitems(config, items):
    if os.getenv("RUN_LIVE") == "1":
        return
    skip_live = pytest.mark.skip(reason="set RUN_LIVE=1 to run against a real environment")
    for item in items:
        if "live" in item.keywords or "e2e" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def migration_data() -> MigrationData:
    return MigrationData(data_dir=str(DATA_DIR))


@pytest.fixture
def test_environment() -> Environment:
    return TEST_ENVIRONMENT


@pytest.fixture
def project_config():
    config = load_config(str(PROJECT_ROOT / "config.json"))
    assert config is not None, "config.json failed to load"
    return config


# =============================================================================
# LIVE / BROWSER FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def live_config():
    config = load_config(str(PROJECT_ROOT / "config.json"))
    if config is None:
        pytest.skip("config.json failed to load")
    return config


@pytest.fixture(scope="session")
def live_environment(live_config) -> Environment:
    return get_environment(live_config)


@pytest.fixture(scope="session")
def live_migration_data(live_config) -> MigrationData:
    return MigrationData.from_config(live_config, base_dir=str(PROJECT_ROOT))


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    """pytest-playwright hook: desktop viewport for the public site."""
    return {
        **browser_context_args,
        "viewport": {"width": 1440, "height": 900},
        "ignore_https_errors": True,
    }


@pytest.fixture
def page(page):
    """Defaults matching the site's slow first paint."""
    page.set_default_timeout(60000)
    page.set_default_navigation_timeout(60000)
    return page
