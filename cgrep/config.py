import logging
import os
from typing import Any, Dict, Optional

from .errors import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "threshold": 0.8,
    "max_workers": None,  # let concurrent.futures decide
    "encoding": "utf-8",
    "errors": "replace",
    "prefilter": True
}

ENV_PREFIX = "CGREP_"


def parse_threshold(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"threshold must be a floating-point number, got {value!r}")


def _parse_workers(value: Any) -> Optional[int]:
    if value in (None, "", "auto"):
        return None
    try:
        workers = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"max_workers must be an integer, got {value!r}")
    if workers < 1:
        raise ConfigurationError(f"max_workers must be at least 1, got {workers}")
    return workers


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"expected a boolean, got {value!r}")


PARSERS = {
    "threshold": parse_threshold,
    "max_workers": _parse_workers,
    "encoding": str,
    "errors": str,
    "prefilter": _parse_bool
}


def load_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Defaults, then CGREP_* environment variables, then explicit overrides.

    Unknown override keys are rejected.
    """
    config = dict(DEFAULT_CONFIG)

    for key, parser in PARSERS.items():
        env_value = os.environ.get(ENV_PREFIX + key.upper())
        if env_value is not None:
            config[key] = parser(env_value)
            logger.debug(f"Config {key}={config[key]!r} from environment")

    for key, value in (overrides or {}).items():
        if key not in PARSERS:
            raise ConfigurationError(f"unknown configuration key {key!r}")
        config[key] = PARSERS[key](value)

    return config
