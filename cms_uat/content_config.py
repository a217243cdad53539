import os
import logging
from typing import Any, Dict, Optional, Union

from lxml import etree

from cms_uat.source_paths import normalise_source_path

logger = logging.getLogger(__name__)

CONTENT_CONFIG_FILE = "content.config"
SNAPSHOT_DIR = "uat_data"

NAME_KEYS = ("nodeName", "name")
CODE_KEYS = ("countryCode", "regionCode", "resortCode")


def _lookup(root: etree._Element, key: str) -> Optional[str]:
    """Attribute on the root first, then the first descendant element with that local name."""
    value = root.get(key)
    if value:
        return value.strip()
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        if etree.QName(element.tag).localname == key and element.text and element.text.strip():
            return element.text.strip()
    return None


def parse_content_config(xml_content: Union[str, bytes], source: str = "") -> Optional[Dict[str, Any]]:
    """
    Parses a legacy content.config snapshot.

    Args:
        xml_content: The XML text of the file. Bytes are decoded by lxml
            following the encoding declaration.
        source: Where it came from (for logging).

    Returns:
        A dictionary with 'root', 'name' and any of countryCode/regionCode/resortCode
        that the snapshot carries, or None if the content is empty or unparseable.
    """
    if not xml_content or not xml_content.strip():
        logger.error(f"Cannot parse empty content.config (from {source}).")
        return None

    try:
        parser = etree.XMLParser(recover=True, remove_blank_text=True)
        if isinstance(xml_content, str):
            xml_content = xml_content.encode('utf-8')
        root = etree.fromstring(xml_content, parser=parser)
    except etree.XMLSyntaxError as e:
        logger.error(f"XML syntax error while parsing content.config from {source}: {e}")
        return None

    # recover mode hands back None when nothing salvageable was found
    if root is None:
        logger.error(f"No XML content recovered from {source}.")
        return None

    snapshot: Dict[str, Any] = {"root": etree.QName(root.tag).localname, "name": None}
    for key in NAME_KEYS:
        name = _lookup(root, key)
        if name:
            snapshot["name"] = name
            break
    for key in CODE_KEYS:
        code = _lookup(root, key)
        if code:
            snapshot[key] = code
    return snapshot


def content_config_path(data_dir: str, source_path: str) -> str:
    relative = normalise_source_path(source_path).strip("/")
    return os.path.join(data_dir, SNAPSHOT_DIR, *relative.split("/"), CONTENT_CONFIG_FILE)


def load_content_config(data_dir: str, source_path: str) -> Optional[Dict[str, Any]]:
    """Reads the snapshot stored for a source path, if the export has one."""
    file_path = content_config_path(data_dir, source_path)
    if not os.path.exists(file_path):
        logger.debug(f"No content.config for {source_path}")
        return None
    try:
        with open(file_path, 'rb') as f:
            raw = f.read()
    except OSError as e:
        logger.error(f"Could not read {file_path}: {e}")
        return None
    return parse_content_config(raw, source=file_path)
