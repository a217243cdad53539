import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Any

from dotenv import load_dotenv

from cms_uat.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_PATH = "config.json"
ENV_VAR = "ENV"
DEFAULT_ENVIRONMENT = "qa"
SITE_KEYS = ("inghams", "e_cms", "p_cms")
ERROR_PAGE_PATH = "/error-500"

ENVIRONMENT_ALIASES = {
    "stg": "staging",
    "prod": "production",
}

API_KEY_VAR = "PCMS_API_KEY"


@dataclass(frozen=True)
class Environment:
    name: str
    inghams: str
    e_cms: str
    p_cms: str

    @property
    def error_path(self) -> str:
        """Page the editorial CMS redirects to when a route blows up."""
        return f"{self.e_cms}{ERROR_PAGE_PATH}"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


def load_config(config_path: str = CONFIG_FILE_PATH) -> Optional[Dict[str, Any]]:
    """Loads the configuration from config.json and seeds secrets from .env."""
    load_dotenv()
    if not os.path.exists(config_path):
        logger.error(f"Configuration file not found: {config_path}")
        return None
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
        logger.info(f"Successfully loaded configuration from {config_path}")
        if not validate_config(config_data):
            return None
        return config_data
    except json.JSONDecodeError as e:
        logger.error(f"Error decoding JSON from {config_path}: {e}")
        return None
    except OSError as e:
        logger.error(f"Could not read {config_path}: {e}")
        return None


def validate_config(config: Dict[str, Any]) -> bool:
    """Validates the structure and content of the configuration."""
    if not isinstance(config, dict):
        logger.error("Configuration must be a dictionary.")
        return False

    environments = config.get("environments")
    if not isinstance(environments, dict) or not environments:
        logger.error("'environments' key is missing or not a non-empty object in config.")
        return False

    for name, sites in environments.items():
        if not isinstance(sites, dict):
            logger.error(f"Environment '{name}' is not a dictionary.")
            return False
        for key in SITE_KEYS:
            value = sites.get(key)
            if not isinstance(value, str) or not value.strip():
                logger.error(f"Environment '{name}' is missing required key: '{key}'.")
                return False
            if not value.startswith(("http://", "https://")):
                logger.error(f"Value for '{key}' in environment '{name}' must be an http(s) URL.")
                return False

    default_env = config.get("default_environment", DEFAULT_ENVIRONMENT)
    if resolve_environment_name(default_env) not in environments:
        logger.error(f"default_environment '{default_env}' is not a configured environment.")
        return False

    if "user_agent" not in config or not isinstance(config["user_agent"], str) or not config["user_agent"].strip():
        logger.warning("'user_agent' key is missing or not a non-empty string. Using a default one is recommended.")

    logger.info("Configuration validation successful.")
    return True


def resolve_environment_name(name: str) -> str:
    """Maps short names (stg, prod) onto the configured environment names."""
    cleaned = (name or "").strip().lower()
    return ENVIRONMENT_ALIASES.get(cleaned, cleaned)


def get_environment(config: Dict[str, Any], name: Optional[str] = None) -> Environment:
    """
    Resolve the active environment.

    Order: explicit name, then the ENV variable, then default_environment.
    Trailing slashes are stripped so callers can join paths with "/".
    """
    requested = name or os.getenv(ENV_VAR) or config.get("default_environment", DEFAULT_ENVIRONMENT)
    env_name = resolve_environment_name(requested)
    environments = config.get("environments", {})
    if env_name not in environments:
        known = ", ".join(sorted(environments))
        raise ConfigError(f"Unknown environment '{requested}'. Known environments: {known}")

    sites = environments[env_name]
    return Environment(
        name=env_name,
        inghams=sites["inghams"].rstrip("/"),
        e_cms=sites["e_cms"].rstrip("/"),
        p_cms=sites["p_cms"].rstrip("/"),
    )


def load_credentials(prefix: str) -> Credentials:
    """Reads <PREFIX>_USERNAME and <PREFIX>_PASSWORD (ECMS or PCMS)."""
    load_dotenv()
    prefix = prefix.upper()
    values = {
        f"{prefix}_USERNAME": os.getenv(f"{prefix}_USERNAME"),
        f"{prefix}_PASSWORD": os.getenv(f"{prefix}_PASSWORD"),
    }
    missing = [key for key, value in values.items() if not value]
    if missing:
        raise ConfigError(f"Missing required credentials: {', '.join(missing)}")
    return Credentials(
        username=values[f"{prefix}_USERNAME"],
        password=values[f"{prefix}_PASSWORD"],
    )


def get_api_key() -> str:
    load_dotenv()
    api_key = (os.getenv(API_KEY_VAR) or "").strip()
    if not api_key:
        raise ConfigError(f"Missing required config value: {API_KEY_VAR}")
    return api_key


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    config = load_config()
    if config:
        environment = get_environment(config)
        logger.info(f"Active environment: {environment.name}")
        logger.info(f"Editorial CMS: {environment.e_cms}")
        logger.info(f"Product CMS: {environment.p_cms}")
    else:
        logger.error("Failed to load or validate configuration.")
