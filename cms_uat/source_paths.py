"""
1.0 Source Path Rewriting
Turns legacy source paths from the migration lists into new-site URLs.

Each product line has its own substitution list. Every rule is either
"first" (only the first occurrence is replaced) or "all" (every occurrence),
and rules run in order. The order matters: lapland paths drop the hyphen in
"lapland-" before "laplandholidays" is rewritten to "lapland-holidays".

Example:
    home/laplandholidays/resorts/lapland-finland/st.-anne
    -> /lapland-holidays/resorts/laplandfinland/st--anne
"""

import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# 1.1 Product names as they appear in config, CSV file names and API filters
PRODUCT_LAPLAND = "lapland"
PRODUCT_SANTA = "santa"
PRODUCT_SKI = "ski"
PRODUCT_WALKING = "walking"
PRODUCT_ACCOMMODATION = "accommodation"

PRODUCTS = [PRODUCT_LAPLAND, PRODUCT_SANTA, PRODUCT_SKI, PRODUCT_WALKING]

FIRST = "first"
ALL = "all"

# 1.2 (scope, old, new) triples applied in order
_LAPLAND_RULES: List[Tuple[str, str, str]] = [
    (FIRST, "home", ""),
    (ALL, "lapland-", "lapland"),
    (FIRST, "laplandholidays", "lapland-holidays"),
    (ALL, "st.", "st-"),
]

REWRITE_RULES: Dict[str, List[Tuple[str, str, str]]] = {
    PRODUCT_LAPLAND: _LAPLAND_RULES,
    PRODUCT_SANTA: _LAPLAND_RULES,
    PRODUCT_SKI: [
        (FIRST, "home", ""),
        (FIRST, "ski-resorts", "resorts"),
        (ALL, "st.", "st-"),
    ],
    PRODUCT_WALKING: [
        (FIRST, "home", "/walking-holidays"),
        (ALL, "st.", "st-"),
    ],
    PRODUCT_ACCOMMODATION: [
        (FIRST, "home", ""),
        (ALL, "st.", "st-"),
    ],
}


def rule_set_for(product: str, level: Optional[str] = None) -> str:
    """
    1.3 Accommodation pages kept their legacy folder names, so lapland, santa
    and ski accommodation rows skip the product-specific renames. Walking
    accommodation still lives under /walking-holidays.
    """
    if level == PRODUCT_ACCOMMODATION and product != PRODUCT_WALKING:
        return PRODUCT_ACCOMMODATION
    return product


def normalise_source_path(source_path: str) -> str:
    """2.0 Legacy exports use Windows separators; the site uses '/'."""
    return (source_path or "").strip().replace("\\", "/")


def rewrite_source_path(product: str, source_path: str) -> str:
    """
    2.1 Apply the product's rewrite rules to a source path.

    Args:
        product: One of lapland, santa, ski, walking, accommodation
        source_path: Raw SourcePath value from a migration CSV

    Returns:
        The new-site path (normally starting with '/')
    """
    rules = REWRITE_RULES.get((product or "").lower())
    if rules is None:
        raise ValueError(
            f"Unknown product '{product}'. Expected one of: {', '.join(REWRITE_RULES)}"
        )

    path = normalise_source_path(source_path)
    for scope, old, new in rules:
        if scope == FIRST:
            path = path.replace(old, new, 1)
        else:
            path = path.replace(old, new)
    return path


def build_target_url(base_url: str, product: str, source_path: str) -> str:
    """2.2 Join an environment base URL and a rewritten path with a single '/'."""
    path = rewrite_source_path(product, source_path)
    target = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    logger.debug(f"{product}: {source_path} -> {target}")
    return target


def target_name(source_path: str) -> str:
    """
    2.3 Page name as shown in the CMS content tree.

    The last path segment, split on '-', each word capitalised:
    'home\\ski\\ski-resorts\\austria\\st-anton' -> 'St Anton'
    """
    segments = [s for s in normalise_source_path(source_path).split("/") if s]
    if not segments:
        return ""
    words = segments[-1].split("-")
    return " ".join(word[:1].upper() + word[1:] for word in words if word)
