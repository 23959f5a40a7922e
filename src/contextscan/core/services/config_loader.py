from __future__ import annotations

"""
Scan Configuration Loader.

Loads scan configuration overrides from JSON files. Missing or corrupted
files fall back to defaults; validation and coercion are delegated to the
validator service.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from contextscan.core.services.validator import validate_scan_config
from contextscan.domain.scan_models import ScanConfig

logger = logging.getLogger(__name__)


def load_config_overrides(config_path: Optional[str]) -> Dict[str, Any]:
    """
    Read a JSON object of configuration overrides.

    Args:
        config_path: Path to the JSON file, or None.

    Returns:
        Dict[str, Any]: Parsed overrides, empty on any failure.
    """
    if not config_path:
        return {}

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}. Using defaults.")
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{config_path}'. Using defaults.")
        return {}

    return data


def load_scan_config(
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
) -> Tuple[ScanConfig, List[str]]:
    """
    Resolve a ScanConfig from defaults, an optional JSON file and overrides.

    Precedence: explicit overrides > file values > defaults.

    Args:
        config_path: Optional JSON file with configuration keys.
        overrides: Values that win over the file (None values are ignored).

    Returns:
        Tuple[ScanConfig, List[str]]: Normalized configuration and warnings.
    """
    raw = load_config_overrides(config_path)
    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value

    return validate_scan_config(raw, strict=False)
