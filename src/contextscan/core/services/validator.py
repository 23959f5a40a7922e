from __future__ import annotations

"""
Scan Configuration Validation Service.

Acts as the gatekeeper between untrusted configuration sources (CLI flags,
JSON files) and the immutable ScanConfig. Handles type coercion, range
checks and default injection, collecting warnings instead of failing unless
strict mode is requested.
"""

import logging
from dataclasses import asdict, fields
from typing import Any, Dict, List, Optional, Tuple

from contextscan.domain.scan_models import ScanConfig

logger = logging.getLogger(__name__)

_INT_FIELDS = (
    "max_file_size", "small_file_threshold", "max_depth",
    "sniff_sample_size", "control_window",
)
_BOOL_FIELDS = (
    "enable_parallel_counting", "enable_token_counting", "follow_symlinks",
    "respect_gitignore",
)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_scan_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[ScanConfig, List[str]]:
    """
    Validate and normalize raw configuration data into a ScanConfig.

    Args:
        config: Raw configuration (usually a dictionary of overrides).
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[ScanConfig, List[str]]: The normalized configuration and a
                                      list of warnings.

    Raises:
        TypeError: In strict mode, on type mismatches.
        ValueError: In strict mode, on out-of-range values.
    """
    warnings: List[str] = []
    defaults = asdict(ScanConfig())

    if config is None:
        return ScanConfig(), warnings

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return ScanConfig(), warnings

    known = {f.name for f in fields(ScanConfig)}
    for key in config:
        if key not in known:
            msg = f"Unknown config key '{key}'."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in known and v is not None})

    for name in _INT_FIELDS:
        merged[name] = _as_non_negative_int(merged[name], defaults[name], name, warnings, strict)

    for name in _BOOL_FIELDS:
        merged[name] = _as_bool(merged[name], defaults[name], name, warnings, strict)

    merged["max_workers"] = _as_optional_workers(merged["max_workers"], warnings, strict)
    merged["control_ratio"] = _as_ratio(merged["control_ratio"], defaults["control_ratio"], warnings, strict)
    merged["encoding"] = _as_str(merged["encoding"], defaults["encoding"], "encoding", warnings, strict)

    if merged["small_file_threshold"] > merged["max_file_size"]:
        warnings.append(
            "small_file_threshold exceeds max_file_size; memory mapping will never be used."
        )

    return ScanConfig(**merged), warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, fallback: Any, warnings: List[str], strict: bool, exc: type = TypeError) -> Any:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Validate non-negative integers (accepting numeric strings)."""
    if isinstance(value, bool):
        return _reject(f"Invalid field '{field}': expected int, received bool.", fallback, warnings, strict)

    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return _reject(f"Invalid field '{field}': '{value}' is not an integer.", fallback, warnings, strict)

    if not isinstance(value, int):
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        return _reject(msg, fallback, warnings, strict)

    if value < 0:
        return _reject(f"Invalid field '{field}': must be >= 0.", fallback, warnings, strict, ValueError)

    return value


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Validate booleans (accepting common string spellings)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_STRINGS:
            return True
        if v in _FALSE_STRINGS:
            return False

    msg = f"Invalid field '{field}': expected bool, received {value!r}."
    return _reject(msg, fallback, warnings, strict)


def _as_optional_workers(value: Any, warnings: List[str], strict: bool) -> Optional[int]:
    if value is None:
        return None
    workers = _as_non_negative_int(value, 0, "max_workers", warnings, strict)
    return workers or None


def _as_ratio(value: Any, fallback: float, warnings: List[str], strict: bool) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return _reject(f"Invalid field 'control_ratio': received {value!r}.", fallback, warnings, strict)
    try:
        ratio = float(value)
    except ValueError:
        return _reject(f"Invalid field 'control_ratio': '{value}' is not a number.", fallback, warnings, strict)
    if not 0.0 <= ratio <= 1.0:
        return _reject("Invalid field 'control_ratio': must be within [0, 1].", fallback, warnings, strict, ValueError)
    return ratio


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    return _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.",
                   fallback, warnings, strict)
