"""
1.0 Source Path Checker
Verifies that migrated legacy URLs resolve on the new site, and optionally
cross-references each row's codes with the product CMS delivery API.

Key features:
- GET each rewritten source path, following redirects
- Fails on 404/500/503 or on landing on the editorial CMS error page
- Captures the page <title> for the report
- Cross-reference mode: country, region and resort codes checked per row
- Rows checked concurrently, one CSV report per product
- Exit code 1 when any row failed (usable as a CI gate)

Usage:
    python -m cms_uat.source_path_checker
    python -m cms_uat.source_path_checker --product ski --env staging
    python -m cms_uat.source_path_checker --product lapland --cross-ref --limit 20
    python -m cms_uat.source_path_checker --level accommodation
"""

import argparse
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import requests
from bs4 import BeautifulSoup

from cms_uat.config import Environment, get_api_key, get_environment, load_config, CONFIG_FILE_PATH
from cms_uat.content_config import load_content_config
from cms_uat.delivery_api import DeliveryApiClient
from cms_uat.exceptions import CmsUatError, ContentMismatchError
from cms_uat.migration_data import (
    LEVEL_COUNTRY,
    LEVEL_REGION,
    LEVEL_RESORT,
    LEVELS,
    MigrationData,
    MigrationRow,
)
from cms_uat.source_paths import PRODUCTS, build_target_url, rule_set_for

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler("source_path_checker.log"),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# 1.1 Default settings
DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; CmsUatChecker/1.0)"
FAILING_STATUS_CODES = {404, 500, 503}

CHECK_OK = "ok"
CHECK_SKIPPED = "skipped"


def check_source_path(
    url: str,
    error_url: str,
    user_agent: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT
) -> Dict:
    """
    2.0 Check that a migrated URL resolves.

    A page passes when the request completes, the final status is not
    404/500/503, and the redirect chain did not end on the error page.

    Returns dict with status, redirect and title details plus 'passed'.
    """
    result = {
        'url': url,
        'status_code': None,
        'final_url': None,
        'redirect_count': 0,
        'response_time_ms': None,
        'title': None,
        'is_error_page': None,
        'error': None,
        'passed': False,
        'checked_at': datetime.now(timezone.utc).isoformat(),
    }

    headers = {
        'User-Agent': user_agent or DEFAULT_USER_AGENT,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    }

    try:
        start = datetime.now()
        response = requests.get(
            url,
            headers=headers,
            timeout=timeout,
            allow_redirects=True
        )
        elapsed = (datetime.now() - start).total_seconds() * 1000

        # 2.1 Basic response info
        result['status_code'] = response.status_code
        result['final_url'] = response.url if response.url != url else None
        result['redirect_count'] = len(response.history)
        result['response_time_ms'] = round(elapsed)
        result['is_error_page'] = response.url.rstrip('/') == error_url.rstrip('/')

        # 2.2 Title, for reading the report
        if 'html' in (response.headers.get('Content-Type') or ''):
            soup = BeautifulSoup(response.content, 'html.parser')
            title_tag = soup.find('title')
            if title_tag and title_tag.string:
                result['title'] = title_tag.string.strip()[:200]

        if result['is_error_page']:
            result['error'] = 'error_page'
        elif response.status_code in FAILING_STATUS_CODES:
            result['error'] = f'status_{response.status_code}'
        else:
            result['passed'] = True

    except requests.exceptions.Timeout:
        result['error'] = 'timeout'
        result['status_code'] = 0
    except requests.exceptions.TooManyRedirects:
        result['error'] = 'too_many_redirects'
        result['status_code'] = 0
    except requests.exceptions.ConnectionError:
        result['error'] = 'connection_error'
        result['status_code'] = 0
    except requests.exceptions.RequestException as e:
        result['error'] = str(e)[:100]
        result['status_code'] = 0

    log = logger.info if result['passed'] else logger.warning
    log(f"{result['status_code']} {url}" + (f" ({result['error']})" if result['error'] else ""))
    return result


def _run_code_check(
    api_client: DeliveryApiClient,
    product: str,
    level: str,
    code: str,
    expected_name: Optional[str] = None,
) -> str:
    """3.0 One delivery API check, reduced to 'ok' or the failure text."""
    try:
        api_client.check_code(product, level, code, expected_name=expected_name)
        return CHECK_OK
    except ContentMismatchError as e:
        return "; ".join(e.failures)
    except CmsUatError as e:
        return str(e)[:200]


def check_migration_row(
    row: MigrationRow,
    environment: Environment,
    migration_data: MigrationData,
    api_client: Optional[DeliveryApiClient] = None,
    user_agent: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """
    3.1 Check one migration row.

    Always checks the source path. With an api_client, also checks:
    - the country code, when the row's Country is in the lookup list
    - the region code, when RegionCode is set
    - the resort code, when ResortCode is set

    The row's own level is compared with its legacy content.config name
    when the export has one.
    """
    target_url = build_target_url(
        environment.e_cms, rule_set_for(row.product, row.level), row.source_path
    )
    status = check_source_path(target_url, environment.error_path, user_agent=user_agent, timeout=timeout)

    result: Dict[str, Any] = {
        'product': row.product,
        'source_path': row.source_path,
        'alias': row.alias,
        'level': row.level,
        'target_url': target_url,
        'status_code': status['status_code'],
        'final_url': status['final_url'],
        'redirect_count': status['redirect_count'],
        'response_time_ms': status['response_time_ms'],
        'title': status['title'],
        'is_error_page': status['is_error_page'],
        'error': status['error'],
        'checked_at': status['checked_at'],
        'country_code': None,
        'country_check': None,
        'region_check': None,
        'resort_check': None,
        'passed': status['passed'],
    }

    if api_client is None:
        return result

    snapshot = load_content_config(migration_data.data_dir, row.source_path)
    snapshot_name = snapshot.get('name') if snapshot else None

    country_code = migration_data.country_code(row.product, row)
    result['country_code'] = country_code

    codes = [
        (LEVEL_COUNTRY, country_code, 'country_check'),
        (LEVEL_REGION, row.region_code, 'region_check'),
        (LEVEL_RESORT, row.resort_code, 'resort_check'),
    ]
    for level, code, key in codes:
        if not code:
            result[key] = CHECK_SKIPPED
            continue
        expected_name = snapshot_name if level == row.level else None
        result[key] = _run_code_check(api_client, row.product, level, code, expected_name)
        if result[key] != CHECK_OK:
            result['passed'] = False

    return result


def _error_result(row: MigrationRow, message: str) -> Dict[str, Any]:
    return {
        'product': row.product,
        'source_path': row.source_path,
        'alias': row.alias,
        'level': row.level,
        'error': message,
        'passed': False,
        'checked_at': datetime.now(timezone.utc).isoformat(),
    }


def check_product(
    product: str,
    config: Dict[str, Any],
    environment: Environment,
    migration_data: MigrationData,
    level: Optional[str] = None,
    cross_ref: bool = False,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """
    4.0 Check every row of one product's migration list concurrently.

    Returns:
        DataFrame with one row per checked source path
    """
    rows = list(migration_data.iter_rows(product, level=level))
    if limit:
        rows = rows[:limit]
    if not rows:
        logger.warning(f"No {level or 'migration'} rows for {product}")
        return pd.DataFrame()

    api_client = None
    if cross_ref:
        api_client = DeliveryApiClient(environment.p_cms, get_api_key(), config=config)

    max_workers = config.get("max_concurrent_checks", 4)
    user_agent = config.get("user_agent", DEFAULT_USER_AGENT)
    timeout = config.get("timeout", DEFAULT_TIMEOUT)
    logger.info(f"Checking {len(rows)} {product} rows with {max_workers} workers (cross_ref={cross_ref})")

    results: List[Dict[str, Any]] = []
    try:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(
                    check_migration_row,
                    row,
                    environment,
                    migration_data,
                    api_client,
                    user_agent,
                    timeout,
                ): row
                for row in rows
            }

            for future in as_completed(futures):
                row = futures[future]
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error(f"Error checking {row.source_path}: {type(e).__name__}: {e}")
                    results.append(_error_result(row, str(e)[:200]))
    finally:
        if api_client is not None:
            api_client.close()

    return pd.DataFrame(results)


def save_report(df: pd.DataFrame, output_dir: str, env_name: str, product: str) -> Optional[str]:
    """5.0 Write one product's results as {env}_{product}_{timestamp}.csv."""
    if df is None or df.empty:
        return None
    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    output_path = os.path.join(output_dir, f"{env_name}_{product}_{timestamp}.csv")
    df.to_csv(output_path, index=False)
    logger.info(f"Saved report: {len(df)} rows to {output_path}")
    return output_path


def summarise(df: pd.DataFrame) -> Dict[str, Any]:
    """5.1 Counts used for the run summary."""
    if df is None or df.empty:
        return {"status": "skipped", "checked": 0, "failed": 0}
    failed = int((~df['passed'].astype(bool)).sum())
    summary = {
        "status": "success" if failed == 0 else "error",
        "checked": len(df),
        "failed": failed,
    }
    if 'error' in df.columns and failed:
        summary["errors"] = df.loc[df['error'].notna(), 'error'].value_counts().head(5).to_dict()
    return summary


def process_product(
    product: str,
    config: Dict[str, Any],
    environment: Environment,
    migration_data: MigrationData,
    output_dir: str,
    level: Optional[str] = None,
    cross_ref: bool = False,
    limit: Optional[int] = None,
) -> Tuple[str, Dict[str, Any]]:
    """
    6.0 Check, report and summarise one product.

    Returns:
        Tuple of (product, summary_dict) for aggregation
    """
    try:
        logger.info(f"--- Checking {product} on {environment.name} ---")
        df = check_product(
            product,
            config,
            environment,
            migration_data,
            level=level,
            cross_ref=cross_ref,
            limit=limit,
        )
        summary = summarise(df)
        report = save_report(df, output_dir, environment.name, product)
        if report:
            summary["report"] = report
        return (product, summary)
    except CmsUatError as e:
        logger.error(f"FAILED processing {product}: {type(e).__name__}: {e}")
        return (product, {"status": "error", "message": str(e)})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check that migrated source paths resolve on the new site"
    )
    parser.add_argument(
        "--product", "-p",
        action="append",
        choices=PRODUCTS,
        default=None,
        help="Product to check, repeatable (default: all products)"
    )
    parser.add_argument(
        "--env", "-e",
        default=None,
        help="Environment name (default: $ENV or default_environment)"
    )
    parser.add_argument(
        "--level",
        choices=LEVELS,
        default=None,
        help="Only rows whose Alias names this level"
    )
    parser.add_argument(
        "--cross-ref",
        action="store_true",
        help="Also check country/region/resort codes against the delivery API"
    )
    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Max rows per product"
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE_PATH,
        help=f"Config file (default: {CONFIG_FILE_PATH})"
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory with the migration CSVs (default: data_dir from config)"
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for CSV reports (default: output_dir from config)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    7.0 CLI entry point. Returns the process exit code.
    """
    args = build_parser().parse_args(argv)

    logger.info("=" * 60)
    logger.info("Starting Source Path Checker")
    logger.info(f"Timestamp: {datetime.now(timezone.utc).isoformat()}")
    logger.info("=" * 60)

    config = load_config(args.config)
    if not config:
        logger.error("Configuration could not be loaded")
        return 2

    try:
        environment = get_environment(config, args.env)
    except CmsUatError as e:
        logger.error(str(e))
        return 2

    products = args.product or PRODUCTS
    output_dir = args.output_dir or config.get("output_dir", "output")
    if args.data_dir:
        migration_data = MigrationData(data_dir=args.data_dir)
    else:
        migration_data = MigrationData.from_config(config)

    logger.info(f"Environment: {environment.name} ({environment.e_cms})")
    logger.info(f"Products: {', '.join(products)}")

    product_results = {}
    for product in products:
        name, summary = process_product(
            product,
            config,
            environment,
            migration_data,
            output_dir,
            level=args.level,
            cross_ref=args.cross_ref,
            limit=args.limit,
        )
        product_results[name] = summary

    # Summary
    logger.info("=" * 60)
    logger.info("Source Path Checker complete")
    for name, summary in product_results.items():
        marker = "[OK]" if summary.get("status") in ("success", "skipped") else "[FAIL]"
        logger.info(
            f"  {marker} {name}: {summary.get('checked', 0)} checked, "
            f"{summary.get('failed', 0)} failed {summary.get('message', '')}".rstrip()
        )
    logger.info("=" * 60)

    failed = any(s.get("status") == "error" for s in product_results.values())
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
