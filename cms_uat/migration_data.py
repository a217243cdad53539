"""
1.0 Migration Data Module
Loads the migration CSV datasets that drive the UAT checks.

Key features:
- One migration list per product (SourcePath, Alias, Country, RegionCode, ResortCode)
- One country lookup list per product (Name, Code)
- Every value read as text; blanks are empty strings, never NaN
- Level filtering on the Alias column (country, region, resort, accommodation)
- First-row-wins de-duplication of codes, in file order
"""

import os
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import pandas as pd

from cms_uat.exceptions import DatasetError
from cms_uat.source_paths import (
    PRODUCT_LAPLAND,
    PRODUCT_SANTA,
    PRODUCT_SKI,
    PRODUCT_WALKING,
    normalise_source_path,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "data/migration"

# 1.1 Column name constants for consistency
COL_SOURCE_PATH = "SourcePath"
COL_ALIAS = "Alias"
COL_COUNTRY = "Country"
COL_REGION_CODE = "RegionCode"
COL_RESORT_CODE = "ResortCode"
COL_NAME = "Name"
COL_CODE = "Code"

MIGRATION_COLUMNS = [COL_SOURCE_PATH, COL_ALIAS, COL_COUNTRY, COL_REGION_CODE, COL_RESORT_CODE]
COUNTRY_COLUMNS = [COL_NAME, COL_CODE]

# 1.2 Levels, most specific last
LEVEL_COUNTRY = "country"
LEVEL_REGION = "region"
LEVEL_RESORT = "resort"
LEVEL_ACCOMMODATION = "accommodation"
LEVELS = [LEVEL_COUNTRY, LEVEL_REGION, LEVEL_RESORT, LEVEL_ACCOMMODATION]

# 1.3 File names per product
MIGRATION_FILES = {
    PRODUCT_LAPLAND: "Migration_Lapland.csv",
    PRODUCT_SANTA: "Migration_SantasBreaks.csv",
    PRODUCT_SKI: "Migration_Ski.csv",
    PRODUCT_WALKING: "Migration_Walking.csv",
}

COUNTRY_FILES = {
    PRODUCT_LAPLAND: "DD_List_CountriesLapland.csv",
    PRODUCT_SANTA: "DD_List_CountriesSanta.csv",
    PRODUCT_SKI: "DD_List_CountriesSki.csv",
    PRODUCT_WALKING: "DD_List_CountriesWalking.csv",
}


@dataclass(frozen=True)
class MigrationRow:
    product: str
    source_path: str
    alias: str
    country: str
    region_code: str
    resort_code: str

    @property
    def level(self) -> Optional[str]:
        """Most specific level named in the Alias column, if any."""
        alias = self.alias.lower()
        for level in reversed(LEVELS):
            if level in alias:
                return level
        return None

    @property
    def normalised_path(self) -> str:
        return normalise_source_path(self.source_path)

    @classmethod
    def from_series(cls, product: str, row: pd.Series) -> "MigrationRow":
        return cls(
            product=product,
            source_path=row[COL_SOURCE_PATH],
            alias=row[COL_ALIAS],
            country=row[COL_COUNTRY],
            region_code=row[COL_REGION_CODE],
            resort_code=row[COL_RESORT_CODE],
        )


def read_dataset(file_path: str, required_columns: List[str]) -> pd.DataFrame:
    """
    2.0 Read one CSV as text.

    Raises:
        DatasetError: file missing, unreadable, or without the required columns
    """
    if not os.path.exists(file_path):
        raise DatasetError(f"Dataset not found: {file_path}")

    try:
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DatasetError(f"Could not read {file_path}: {e}") from e

    df.columns = [c.strip() for c in df.columns]
    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise DatasetError(f"{file_path} is missing columns: {', '.join(missing)}")

    df = df.apply(lambda col: col.str.strip())
    # Rows where every cell is blank (trailing commas in the exports)
    df = df[(df != "").any(axis=1)].reset_index(drop=True)

    logger.debug(f"Loaded {len(df)} rows from {file_path}")
    return df


def filter_by_level(df: pd.DataFrame, level: str) -> pd.DataFrame:
    """2.1 Rows whose Alias mentions the level, e.g. 'resortSki' for 'resort'."""
    mask = df[COL_ALIAS].str.contains(level, case=False, regex=False)
    return df[mask].reset_index(drop=True)


def unique_codes(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """2.2 First row for each non-blank code in the column, in file order."""
    non_blank = df[df[column].str.strip() != ""]
    return non_blank.drop_duplicates(subset=[column], keep="first").reset_index(drop=True)


def country_code_for(countries: pd.DataFrame, country: str) -> Optional[str]:
    """
    2.3 Look up a country code by the slug used in the migration list.

    Country names are lower-cased and '/' becomes '-' before comparing,
    so 'Bosnia/Herzegovina' matches 'bosnia-herzegovina'.
    """
    for _, entry in countries.iterrows():
        slug = entry[COL_NAME].lower().replace("/", "-")
        if slug == country:
            return entry[COL_CODE]
    return None


class MigrationData:
    """
    3.0 MigrationData Class
    Access to the per-product datasets under one data directory.
    """

    def __init__(self, data_dir: str = DEFAULT_DATA_DIR):
        """
        3.1 Initialize the dataset reader.

        Args:
            data_dir: Directory holding Migration_*.csv and DD_List_Countries*.csv
        """
        self.data_dir = data_dir
        self._cache: Dict[str, pd.DataFrame] = {}
        logger.info(f"MigrationData initialized with data directory: {data_dir}")

    @classmethod
    def from_config(cls, config: Optional[Dict], base_dir: Optional[str] = None) -> "MigrationData":
        """
        3.1.1 Build from config.json's data_dir.

        A relative data_dir is resolved against base_dir (the project root)
        when one is given.
        """
        data_dir = (config or {}).get("data_dir") or DEFAULT_DATA_DIR
        if base_dir and not os.path.isabs(data_dir):
            data_dir = os.path.join(base_dir, data_dir)
        return cls(data_dir=data_dir)

    def _load(self, file_name: str, required_columns: List[str]) -> pd.DataFrame:
        if file_name not in self._cache:
            self._cache[file_name] = read_dataset(
                os.path.join(self.data_dir, file_name), required_columns
            )
        return self._cache[file_name].copy()

    def load_migration(self, product: str) -> pd.DataFrame:
        """3.2 Migration list for a product."""
        if product not in MIGRATION_FILES:
            raise DatasetError(f"No migration dataset for product '{product}'")
        return self._load(MIGRATION_FILES[product], MIGRATION_COLUMNS)

    def load_countries(self, product: str) -> pd.DataFrame:
        """3.3 Country lookup list for a product."""
        if product not in COUNTRY_FILES:
            raise DatasetError(f"No country list for product '{product}'")
        return self._load(COUNTRY_FILES[product], COUNTRY_COLUMNS)

    def iter_rows(self, product: str, level: Optional[str] = None) -> Iterator[MigrationRow]:
        """3.4 Migration rows as records, optionally limited to one level."""
        df = self.load_migration(product)
        if level:
            df = filter_by_level(df, level)
        for _, row in df.iterrows():
            yield MigrationRow.from_series(product, row)

    def country_code(self, product: str, row: MigrationRow) -> Optional[str]:
        return country_code_for(self.load_countries(product), row.country)

    def unique_country_codes(self, product: str) -> List[str]:
        countries = unique_codes(self.load_countries(product), COL_CODE)
        return countries[COL_CODE].tolist()

    def unique_rows_by_code(self, product: str, column: str) -> List[MigrationRow]:
        """3.5 One migration row per distinct RegionCode or ResortCode."""
        df = unique_codes(self.load_migration(product), column)
        return [MigrationRow.from_series(product, row) for _, row in df.iterrows()]
