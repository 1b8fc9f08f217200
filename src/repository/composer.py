"""Composer projects: composer.json plus the installed/locked package list."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List

from constants import Constants, Ecosystems
from errors import ProjectLoadError
from package.models import Package, Project, Repository

from .files import as_mapping, license_list, optional_str, read_json

logger = logging.getLogger(__name__)


def _lower_keys(mapping: Dict[str, str]) -> Dict[str, str]:
    return {name.lower(): constraint for name, constraint in mapping.items()}


def package_from_dict(data: Dict[str, Any]) -> Package:
    """Build a Package from one entry of installed.json or composer.lock."""
    pretty_name = optional_str(data.get("name"))
    if pretty_name is None:
        raise ProjectLoadError("Composer package entry without a name")
    pretty_version = optional_str(data.get("version")) or ""
    source = data.get("source") if isinstance(data.get("source"), dict) else {}
    return Package(
        name=pretty_name.lower(),
        pretty_name=pretty_name,
        version=optional_str(data.get("version_normalized")) or pretty_version,
        pretty_version=pretty_version,
        requires=_lower_keys(as_mapping(data.get("require"))),
        dev_requires=_lower_keys(as_mapping(data.get("require-dev"))),
        license=license_list(data.get("license")),
        source_type=optional_str(source.get("type")),
        source_reference=optional_str(source.get("reference")),
    )


def load_root_package(path: str) -> Package:
    """Read the root package from composer.json."""
    data = read_json(path)
    if not isinstance(data, dict):
        raise ProjectLoadError(f"{path} does not contain a JSON object")
    pretty_name = optional_str(data.get("name")) or Constants.COMPOSER_ROOT_NAME
    pretty_version = optional_str(data.get("version")) or Constants.COMPOSER_ROOT_VERSION
    return Package(
        name=pretty_name.lower(),
        pretty_name=pretty_name,
        version=pretty_version,
        requires=_lower_keys(as_mapping(data.get("require"))),
        dev_requires=_lower_keys(as_mapping(data.get("require-dev"))),
        license=license_list(data.get("license")),
    )


def _installed_entries(data: Any) -> List[Dict[str, Any]]:
    # Composer 1 writes a bare list, Composer 2 wraps it in {"packages": [...]}
    if isinstance(data, dict):
        data = data.get("packages", [])
    if not isinstance(data, list):
        return []
    return [entry for entry in data if isinstance(entry, dict)]


def _locked_entries(data: Any) -> Iterable[Dict[str, Any]]:
    if not isinstance(data, dict):
        return []
    entries = []
    for key in ("packages", "packages-dev"):
        section = data.get(key) or []
        if isinstance(section, list):
            entries.extend(entry for entry in section if isinstance(entry, dict))
    return entries


def load_repository(directory: str) -> Repository:
    """Read installed packages from vendor/composer/installed.json or composer.lock."""
    installed_path = os.path.join(directory, Constants.COMPOSER_INSTALLED_FILE)
    lock_path = os.path.join(directory, Constants.COMPOSER_LOCK_FILE)

    if os.path.isfile(installed_path):
        logger.info("Reading installed packages from %s", installed_path)
        entries = _installed_entries(read_json(installed_path))
    elif os.path.isfile(lock_path):
        logger.info("No installed.json found, reading %s", lock_path)
        entries = _locked_entries(read_json(lock_path))
    else:
        logger.warning("No installed packages found in %s; run composer install first", directory)
        entries = []

    return Repository(package_from_dict(entry) for entry in entries)


def load_project(directory: str, **_options: Any) -> Project:
    manifest = os.path.join(directory, Constants.COMPOSER_JSON_FILE)
    if not os.path.isfile(manifest):
        raise ProjectLoadError(f"{Constants.COMPOSER_JSON_FILE} not found in {directory}")
    return Project(
        root=load_root_package(manifest),
        repository=load_repository(directory),
        ecosystem=Ecosystems.COMPOSER.value,
    )
