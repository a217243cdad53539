"""
1.0 Delivery API Module
Queries the product CMS delivery API and checks migrated codes against it.

Key features:
- Automatic retry on transient failures (429, 500, 502, 503, 504)
- Session reuse with the Api-Key header set once
- One query shape for every product and level:
  /umbraco/delivery/api/v2/content?filter=product:<p>&filter=<level>Code:<code>
- Reports every mismatched field at once instead of stopping at the first
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cms_uat.exceptions import ContentMismatchError, DeliveryApiError
from cms_uat.source_paths import PRODUCT_LAPLAND, PRODUCT_SANTA, PRODUCT_SKI, PRODUCT_WALKING

logger = logging.getLogger(__name__)

CONTENT_ENDPOINT = "/umbraco/delivery/api/v2/content"
DEFAULT_TAKE = 10

# 1.1 Santa breaks are modelled as Lapland content types
CONTENT_TYPE_SUFFIX = {
    PRODUCT_LAPLAND: "Lapland",
    PRODUCT_SANTA: "Lapland",
    PRODUCT_SKI: "Ski",
    PRODUCT_WALKING: "Walking",
}

REQUIRED_FIELDS = ["name", "createDate", "updateDate", "route", "id"]


def expected_content_type(product: str, level: str) -> str:
    """countryLapland, regionSki, resortWalking, ..."""
    if product not in CONTENT_TYPE_SUFFIX:
        raise ValueError(f"Unknown product '{product}'")
    return f"{level}{CONTENT_TYPE_SUFFIX[product]}"


def build_query(product: str, level: str, code: str, skip: int = 0, take: int = DEFAULT_TAKE) -> str:
    """
    2.0 Encode the content query.

    Produces exactly:
    filter=product%3Alapland&filter=countryCode%3AFI&skip=0&take=10&fields=properties%5B%24all%5D
    """
    params = [
        ("filter", f"product:{product}"),
        ("filter", f"{level}Code:{code}"),
        ("skip", skip),
        ("take", take),
        ("fields", "properties[$all]"),
    ]
    return urlencode(params)


def validate_content(
    body: Any,
    product: str,
    level: str,
    code: str,
    expected_name: Optional[str] = None,
) -> List[str]:
    """
    2.1 Compare a delivery API response body with the expected record.

    Returns:
        List of human-readable failures; empty when the content matches
    """
    if not isinstance(body, dict) or "items" not in body:
        return ["response has no 'items'"]
    items = body["items"]
    if not isinstance(items, list):
        return ["'items' is not a list"]
    if len(items) != 1:
        return [f"expected 1 item, got {len(items)}"]

    content = items[0]
    if not isinstance(content, dict):
        return [f"item is {type(content).__name__}, expected an object"]
    failures = []

    expected_type = expected_content_type(product, level)
    if content.get("contentType") != expected_type:
        failures.append(f"contentType is {content.get('contentType')!r}, expected {expected_type!r}")

    for field in REQUIRED_FIELDS:
        if content.get(field) is None:
            failures.append(f"{field} is missing or null")

    code_key = f"{level}Code"
    properties = content.get("properties") or {}
    if not isinstance(properties, dict):
        failures.append("properties is not an object")
    elif code_key not in properties:
        failures.append(f"properties.{code_key} is missing")
    elif str(properties[code_key]) != str(code):
        failures.append(f"properties.{code_key} is {properties[code_key]!r}, expected {code!r}")

    name = content.get("name")
    if expected_name and name is not None:
        if not isinstance(name, str):
            failures.append(f"name is {name!r}, expected a string")
        elif name.strip().lower() != expected_name.strip().lower():
            failures.append(f"name is {name!r}, legacy snapshot has {expected_name!r}")

    return failures


class DeliveryApiClient:
    """
    3.0 DeliveryApiClient Class
    Reads product content from the delivery API with built-in retry logic.
    """

    def __init__(self, base_url: str, api_key: str, config: Optional[Dict[str, Any]] = None):
        """
        3.1 Initialize the client.

        Args:
            base_url: Product CMS base URL for the active environment
            api_key: Delivery API key (Api-Key header)
            config: Optional settings: timeout (default 30), max_retries (default 3)
        """
        config = config or {}
        self.base_url = base_url.rstrip("/")
        self.timeout = config.get("timeout", 30)
        self.max_retries = config.get("max_retries", 3)
        self.session = self._create_session_with_retries(api_key)

        logger.info(
            f"DeliveryApiClient initialized: base_url={self.base_url}, "
            f"timeout={self.timeout}s, retries={self.max_retries}"
        )

    def _create_session_with_retries(self, api_key: str) -> requests.Session:
        """
        3.2 Create a requests Session with retry logic and API headers.
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            "Api-Key": api_key,
            "Accept": "application/json",
        })
        return session

    def content_url(self, product: str, level: str, code: str) -> str:
        return f"{self.base_url}{CONTENT_ENDPOINT}?{build_query(product, level, code)}"

    def search(self, product: str, level: str, code: str) -> Tuple[int, Any]:
        """
        3.3 Run the content query.

        Returns:
            (status_code, decoded JSON body or None when the body is not JSON)

        Raises:
            DeliveryApiError: on timeout or connection failure
        """
        url = self.content_url(product, level, code)
        logger.info(f"Delivery API: {product} {level}Code={code}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise DeliveryApiError(f"Timeout querying {url} after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise DeliveryApiError(f"Request error querying {url}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            logger.warning(f"Non-JSON response from {url} (status={response.status_code})")
            body = None

        logger.debug(f"Delivery API status={response.status_code} for {url}")
        return response.status_code, body

    def check_code(
        self,
        product: str,
        level: str,
        code: str,
        expected_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        3.4 Assert that exactly one item carries this code with the right shape.

        Args:
            product: lapland, santa, ski or walking
            level: country, region, resort or accommodation
            code: Code from the migration dataset
            expected_name: Optional page name from a legacy content snapshot

        Returns:
            The matching content item

        Raises:
            ContentMismatchError: listing every failed check
        """
        query = f"{product} {level}Code={code}"
        status_code, body = self.search(product, level, code)

        if status_code != 200:
            raise ContentMismatchError(query, [f"status {status_code}, expected 200"], status_code=status_code)

        failures = validate_content(body, product, level, code, expected_name=expected_name)
        if failures:
            logger.error(f"Delivery API mismatch for {query}: {failures}")
            raise ContentMismatchError(query, failures, status_code=status_code)

        item = body["items"][0]
        logger.info(f"Delivery API OK for {query}: {item.get('name')} ({item.get('route')})")
        return item

    def close(self) -> None:
        self.session.close()
