"""Shared manifest/lockfile readers used by the project loaders."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from errors import ProjectLoadError

logger = logging.getLogger(__name__)


def read_json(path: str) -> Any:
    """Load a JSON file, raising ProjectLoadError on any read/parse failure."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as e:
        raise ProjectLoadError(f"File not found: {path}") from e
    except OSError as e:
        raise ProjectLoadError(f"Failed to read {path}: {e}") from e
    except ValueError as e:
        raise ProjectLoadError(f"Invalid JSON in {path}: {e}") from e


def read_toml(path: str) -> Dict[str, Any]:
    """Load a TOML file, raising ProjectLoadError on any read/parse failure."""
    try:
        import tomllib as toml  # type: ignore
    except ImportError:  # Python < 3.11
        import tomli as toml  # type: ignore

    try:
        with open(path, "rb") as fh:
            return toml.load(fh) or {}
    except FileNotFoundError as e:
        raise ProjectLoadError(f"File not found: {path}") from e
    except OSError as e:
        raise ProjectLoadError(f"Failed to read {path}: {e}") from e
    except toml.TOMLDecodeError as e:
        raise ProjectLoadError(f"Invalid TOML in {path}: {e}") from e


def as_mapping(value: Any) -> Dict[str, str]:
    """Return ``value`` as a ``{name: constraint}`` dict, ``{}`` for anything else."""
    if not isinstance(value, dict):
        return {}
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


def license_list(value: Union[str, List[Any], Dict[str, Any], None]) -> List[str]:
    """Normalize the common manifest license shapes to a list of strings.

    Accepts a plain string, a list of strings, or ``{"type": ...}`` objects as
    found in older npm manifests.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.strip()
        return [value] if value else []
    if isinstance(value, dict):
        return license_list(value.get("type"))
    if isinstance(value, list):
        result: List[str] = []
        for item in value:
            result.extend(license_list(item))
        return result
    return []


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
