"""
EDITORIAL CMS JOURNEYS - Browser, Live Environment, WRITES CONTENT

Run: RUN_LIVE=1 ECMS_USERNAME=... ECMS_PASSWORD=... pytest tests/e2e -m cms

Each journey edits a migrated country or region page in the editorial CMS,
publishes it and checks the result on the site. The module reuses the session
saved by tests/e2e/conftest.py. Only run against qa or dev_test.
"""

from pathlib import Path

import pytest

from cms_uat.config import CONFIG_FILE_PATH, load_config
from cms_uat.migration_data import LEVEL_COUNTRY, LEVEL_REGION, MigrationData
from cms_uat.pages import CountryPage, EcmsMainPage, RegionPage, SharedSteps
from cms_uat.source_paths import build_target_url, target_name

pytestmark = [pytest.mark.e2e, pytest.mark.cms, pytest.mark.regression, pytest.mark.inw]

PROJECT_ROOT = Path(__file__).parent.parent.parent

# Content tree node (and sub-product node) per product
TREE_NODES = {
    "walking": ("Walking Holidays", None),
    "ski": ("Ski Holidays", None),
    "lapland": ("Lapland Holidays", None),
    "santa": ("Lapland Holidays", "Santa Breaks"),
}

DEFAULT_PROGRAMS = {
    "walking": "Walking",
    "ski": "Ski",
    "lapland": "Lapland",
    "santa": "Lapland",
}

_DATA = MigrationData.from_config(load_config(str(PROJECT_ROOT / CONFIG_FILE_PATH)), base_dir=str(PROJECT_ROOT))
WALKING_COUNTRIES = list(_DATA.iter_rows("walking", level=LEVEL_COUNTRY))
WALKING_REGIONS = list(_DATA.iter_rows("walking", level=LEVEL_REGION))


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, ecms_storage_state):
    """Every page in this module starts signed in to the editorial CMS."""
    return {**browser_context_args, "storage_state": ecms_storage_state}


@pytest.fixture
def ecms_page(page):
    return page


@pytest.fixture
def media(live_config):
    return live_config.get("media", {})


def open_in_tree(page, environment, row) -> EcmsMainPage:
    """Expand the tree down to the row's page; region rows go through their country."""
    node, secondary = TREE_NODES[row.product]
    target = target_name(row.source_path)
    main_page = EcmsMainPage(page)
    main_page.goto(f"{environment.e_cms}/umbraco")
    if row.level == LEVEL_REGION:
        main_page.expand_tree(node, country=target_name(row.country), region=target, secondary_product=secondary)
    else:
        main_page.expand_tree(node, country=target, secondary_product=secondary)
    main_page.select_target_page(target)
    return main_page


def open_on_site(page, environment, row) -> CountryPage:
    country_page = RegionPage(page) if row.level == LEVEL_REGION else CountryPage(page)
    country_page.goto(build_target_url(environment.e_cms, row.product, row.source_path))
    country_page.wait_for_load()
    return country_page


@pytest.mark.parametrize("row", WALKING_COUNTRIES, ids=[target_name(r.source_path) for r in WALKING_COUNTRIES])
def test_default_program_header_footer(ecms_page, live_environment, row):
    program = DEFAULT_PROGRAMS[row.product]

    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.add_default_program_header_footer(program)
    main_page.save_and_publish()

    country_page = open_on_site(ecms_page, live_environment, row)
    country_page.check_header(row.product)
    country_page.check_footer(row.product)

    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.remove_default_program_header_footer()
    main_page.save_and_publish()

    country_page = open_on_site(ecms_page, live_environment, row)
    country_page.check_header(row.product, program_visible=False)
    country_page.check_footer(row.product, program_visible=False)

    # Put the program back for the next run
    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.add_default_program_header_footer(program)
    main_page.save_and_publish()


@pytest.mark.parametrize("row", WALKING_COUNTRIES, ids=[target_name(r.source_path) for r in WALKING_COUNTRIES])
def test_hero_banner(ecms_page, live_environment, media, row):
    hero_media = media.get("hero_banner")
    if not hero_media:
        pytest.skip("No media.hero_banner in config.json")

    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.modify_hero_banner(hero_media, layout="Full Bleed", vertical="Top", horizontal="Full")
    main_page.save_and_publish()

    country_page = open_on_site(ecms_page, live_environment, row)
    country_page.check_hero_banner(hero_media, vertical="Top", horizontal="Full")


@pytest.mark.parametrize("row", WALKING_COUNTRIES, ids=[target_name(r.source_path) for r in WALKING_COUNTRIES])
def test_accordions(ecms_page, live_environment, media, row):
    carousel = media.get("carousel") or []
    if not carousel:
        pytest.skip("No media.carousel in config.json")

    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.modify_accordions(carousel)
    main_page.save_and_publish()

    country_page = open_on_site(ecms_page, live_environment, row)
    country_page.check_accordions(carousel)


@pytest.mark.parametrize("row", WALKING_COUNTRIES[:1], ids=[target_name(r.source_path) for r in WALKING_COUNTRIES[:1]])
def test_published_page_link_opens(ecms_page, live_environment, row):
    steps = SharedSteps(ecms_page)
    steps.goto(f"{live_environment.e_cms}/umbraco")
    steps.search_and_open(target_name(row.source_path))
    steps.open_info_tab()

    site_page = steps.open_page_link()
    CountryPage(site_page).check_header(row.product)
    site_page.close()


# =============================================================================
# REGION PAGES
# =============================================================================

REGION_IDS = [target_name(r.source_path) for r in WALKING_REGIONS]


@pytest.mark.parametrize("row", WALKING_REGIONS, ids=REGION_IDS)
def test_region_default_program_header_footer(ecms_page, live_environment, row):
    program = DEFAULT_PROGRAMS[row.product]

    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.add_default_program_header_footer(program)
    main_page.save_and_publish()

    region_page = open_on_site(ecms_page, live_environment, row)
    assert isinstance(region_page, RegionPage)
    region_page.check_header(row.product)
    region_page.check_footer(row.product)


@pytest.mark.parametrize("row", WALKING_REGIONS, ids=REGION_IDS)
def test_region_hero_banner(ecms_page, live_environment, media, row):
    hero_media = media.get("hero_banner")
    if not hero_media:
        pytest.skip("No media.hero_banner in config.json")

    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.modify_hero_banner(hero_media, layout="Full Bleed", vertical="Top", horizontal="Full")
    main_page.save_and_publish()

    region_page = open_on_site(ecms_page, live_environment, row)
    region_page.check_hero_banner(hero_media, vertical="Top", horizontal="Full")


@pytest.mark.parametrize("row", WALKING_REGIONS, ids=REGION_IDS)
def test_region_accordions(ecms_page, live_environment, media, row):
    carousel = media.get("carousel") or []
    if not carousel:
        pytest.skip("No media.carousel in config.json")

    main_page = open_in_tree(ecms_page, live_environment, row)
    main_page.modify_accordions(carousel)
    main_page.save_and_publish()

    region_page = open_on_site(ecms_page, live_environment, row)
    region_page.check_accordions(carousel)
