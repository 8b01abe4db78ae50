"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates the scoring and notification sections.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

from ..scoring.thresholds import THRESHOLD_NAMES

logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is empty
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in ["global", "scoring", "notifications"]:
        if section not in config:
            issues.append(f"Missing section: {section} (defaults will be used)")

    # Threshold sets must be descending and within [0, 100]
    thresholds = get_config_value(config, "scoring.thresholds") or {}
    for name, values in thresholds.items():
        if name not in THRESHOLD_NAMES:
            issues.append(f"Unknown threshold set: {name}")
            continue
        if not isinstance(values, dict):
            issues.append(f"Thresholds for {name} must be a mapping")
            continue
        bounds = [values.get(k) for k in ("excellent", "good", "concerning")]
        present = [b for b in bounds if b is not None]
        if any(not 0 <= b <= 100 for b in present):
            issues.append(f"Thresholds for {name} must be in [0, 100], got {present}")
        if len(present) == 3 and not bounds[0] >= bounds[1] >= bounds[2]:
            issues.append(f"Thresholds for {name} must be descending, got {bounds}")

    # Flag ratio weights sum to 1
    w_flag = get_config_value(config, "scoring.flag_ratio.flag_weight", 0.7)
    w_safety = get_config_value(config, "scoring.flag_ratio.safety_weight", 0.3)
    if abs(w_flag + w_safety - 1.0) > 0.01:
        issues.append(f"Flag ratio weights don't sum to 1: {w_flag} + {w_safety}")

    cutoff = get_config_value(config, "scoring.alignment.non_negotiable_importance", 8)
    if not 1 <= cutoff <= 10:
        issues.append(f"alignment.non_negotiable_importance must be in [1, 10], got {cutoff}")

    capacity = get_config_value(config, "notifications.capacity", 2)
    if not isinstance(capacity, int) or capacity < 1:
        issues.append(f"notifications.capacity must be a positive integer, got {capacity}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Look up a scoring setting by dotted path.

    A key left blank in YAML loads as None and is treated as absent.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.thresholds.energy.good")
        default: Returned when any step of the path is missing or blank

    Returns:
        Configuration value or default
    """
    value = config
    for key in path.split("."):
        if not isinstance(value, dict) or value.get(key) is None:
            return default
        value = value[key]
    return value
