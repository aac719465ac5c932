# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Runtime configuration.

Values come from ~/.osscontrib/config.json, overlaid by environment variables.
Nothing here is read implicitly by the fetcher or the share helpers: callers
build a ContributionsConfig once and pass its values in.
"""

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import bittensor as bt

from osscontrib.constants import (
    API_URL_ENV,
    BASE_GITHUB_API_URL,
    BASE_URL_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    GITHUB_TOKEN_ENV,
    TIMEOUT_ENV,
)
from osscontrib.utils.utils import mask_secret

# Config paths
OSSCONTRIB_DIR = Path.home() / '.osscontrib'
CONFIG_FILE = OSSCONTRIB_DIR / 'config.json'

CONFIG_KEYS = ('github_token', 'base_url', 'api_url', 'timeout')
SECRET_KEYS = ('github_token',)


@dataclass
class ContributionsConfig:
    github_token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    api_url: str = BASE_GITHUB_API_URL
    timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __repr__(self) -> str:
        token = mask_secret(self.github_token) if self.github_token else None
        return (
            f"ContributionsConfig(base_url={self.base_url!r}, api_url={self.api_url!r}, "
            f"timeout={self.timeout}, github_token={token})"
        )


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the JSON config file, empty if missing or invalid."""
    path = path or CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        bt.logging.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def save_config_file(config: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(config, f, indent=2)


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        bt.logging.warning(f"Invalid timeout {value!r}, using {DEFAULT_REQUEST_TIMEOUT}s")
        return DEFAULT_REQUEST_TIMEOUT
    if not math.isfinite(timeout) or timeout <= 0:
        bt.logging.warning(
            f"Timeout must be a positive finite number (got {timeout}), using {DEFAULT_REQUEST_TIMEOUT}s"
        )
        return DEFAULT_REQUEST_TIMEOUT
    return timeout


def load_config(path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> ContributionsConfig:
    """Build the runtime config: file values first, environment variables win."""
    env = os.environ if environ is None else environ
    values = load_config_file(path)

    overrides = {
        'github_token': env.get(GITHUB_TOKEN_ENV),
        'base_url': env.get(BASE_URL_ENV),
        'api_url': env.get(API_URL_ENV),
        'timeout': env.get(TIMEOUT_ENV),
    }
    values.update({key: value for key, value in overrides.items() if value})

    return ContributionsConfig(
        github_token=values.get('github_token') or None,
        base_url=str(values.get('base_url') or DEFAULT_BASE_URL).rstrip('/'),
        api_url=str(values.get('api_url') or BASE_GITHUB_API_URL).rstrip('/'),
        timeout=_parse_timeout(values.get('timeout', DEFAULT_REQUEST_TIMEOUT)),
    )


def display_value(key: str, value: Any) -> str:
    """Render a config value for display, masking secrets."""
    if key in SECRET_KEYS and value:
        return mask_secret(value)
    str_val = str(value)
    if len(str_val) > 60:
        str_val = str_val[:30] + '...' + str_val[-20:]
    return str_val
