"""
Configuration for the analytics layer.

Public API:
    AnalyticsConfig   -- frozen, validated settings object
    load_config(path) -- read settings from YAML (packaged defaults if None)
"""

from erp_config.loader import compute_checksum, load_config, load_yaml_file
from erp_config.schema import AnalyticsConfig

__all__ = ["AnalyticsConfig", "compute_checksum", "load_config", "load_yaml_file"]
