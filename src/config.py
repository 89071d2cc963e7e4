"""Configuration loading from env vars and an optional YAML file.

Precedence: environment variable > YAML (CONFIG_PATH) > dataclass default.
"""

import os
import logging
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    namespace: str = "default"
    scrape_interval: int = 30
    log_lines: int = 100
    pod_selector: str = ""
    host: str = "0.0.0.0"
    port: int = 8080
    scrape_timeout: int = 10
    log_level: str = "INFO"


# field name -> environment variable
ENV_VARS = {
    "namespace": "TARGET_NAMESPACE",
    "scrape_interval": "SCRAPE_INTERVAL_SECONDS",
    "log_lines": "LOG_LINES_LIMIT",
    "pod_selector": "POD_SELECTOR",
    "host": "LISTEN_HOST",
    "port": "PORT",
    "scrape_timeout": "SCRAPE_TIMEOUT_SECONDS",
    "log_level": "LOG_LEVEL",
}

_POSITIVE_INTS = ("scrape_interval", "log_lines", "scrape_timeout")


def load_yaml_config(path: str | None) -> dict:
    """Load flat config keys from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring it", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def _parse_int(name: str, value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s: %r, using %d", name, value, default)
        return default


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from environment variables, YAML data and defaults."""
    if yaml_data is None:
        yaml_data = load_yaml_config(os.environ.get("CONFIG_PATH"))

    defaults = Config()
    values = {}
    for name, env_var in ENV_VARS.items():
        default = getattr(defaults, name)
        env_value = os.environ.get(env_var)
        if env_value not in (None, ""):
            raw = env_value
        else:
            raw = yaml_data.get(name, default)

        if isinstance(default, int):
            value = _parse_int(env_var, raw, default)
            if name in _POSITIVE_INTS and value <= 0:
                logger.warning("%s must be positive, got %d, using %d", env_var, value, default)
                value = default
        else:
            value = "" if raw is None else str(raw)
        values[name] = value

    level = values["log_level"].upper()
    if level not in LOG_LEVELS:
        logger.warning("Unknown LOG_LEVEL %r, using INFO", values["log_level"])
        level = "INFO"
    values["log_level"] = level

    return Config(**values)
