"""
Configuration Loader (``erp_config.loader``).

Responsibility
--------------
Reads an analytics configuration YAML file into an ``AnalyticsConfig``
and fingerprints it for change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* A YAML document that is not a mapping, or that holds impossible
  values  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from erp_config.schema import AnalyticsConfig
from erp_kernel.exceptions import ConfigurationError
from erp_kernel.logging_config import get_logger

logger = get_logger("config.loader")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "analytics.yaml"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Contents of a YAML file; an empty file is an empty dict."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top level must be a mapping")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 over a canonical JSON rendering of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def load_config(path: str | Path | None = None) -> AnalyticsConfig:
    """
    Load configuration from ``path``, or the packaged defaults file.

    The file may nest its settings under an ``analytics:`` key.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    raw = load_yaml_file(config_path)
    section = raw.get("analytics", raw)
    config = AnalyticsConfig.from_dict(section)
    logger.info(
        "config_loaded",
        extra={"path": str(config_path), "checksum": compute_checksum(section)},
    )
    return config
