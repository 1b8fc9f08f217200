"""npm projects: package.json plus package-lock.json."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from constants import Constants, Ecosystems
from errors import ProjectLoadError
from package.models import Package, Project, Repository

from .files import as_mapping, license_list, optional_str, read_json

logger = logging.getLogger(__name__)

_NODE_MODULES = "node_modules/"


def _extract_npm_name_from_path(path: str) -> str:
    """Return the package name of a lockfile ``packages`` key.

    ``node_modules/a/node_modules/@scope/b`` yields ``@scope/b``.
    """
    path = str(path).replace("\\", "/")
    if _NODE_MODULES not in path:
        return ""
    tail = path.split(_NODE_MODULES)[-1]
    parts = [s for s in tail.split("/") if s]
    if not parts:
        return ""
    if parts[0].startswith("@") and len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def _manifest_licenses(data: Dict[str, Any]) -> List[str]:
    licenses = license_list(data.get("license"))
    if not licenses:
        # Pre-SPDX manifests: "licenses": [{"type": "MIT", "url": "..."}]
        licenses = license_list(data.get("licenses"))
    return licenses


def _runtime_requires(data: Dict[str, Any]) -> Dict[str, str]:
    requires = as_mapping(data.get("dependencies"))
    requires.update(as_mapping(data.get("optionalDependencies")))
    return requires


def load_root_package(path: str) -> Package:
    """Read the root package from package.json."""
    data = read_json(path)
    if not isinstance(data, dict):
        raise ProjectLoadError(f"{path} does not contain a JSON object")
    name = optional_str(data.get("name")) or os.path.basename(os.path.dirname(os.path.abspath(path)))
    return Package(
        name=name,
        version=optional_str(data.get("version")) or "",
        requires=_runtime_requires(data),
        dev_requires=as_mapping(data.get("devDependencies")),
        license=_manifest_licenses(data),
    )


def _packages_from_v2(packages: Dict[str, Any]) -> List[Package]:
    result = []
    for path, meta in packages.items():
        if not path or not isinstance(meta, dict):
            continue  # "" is the root project itself
        if meta.get("link"):
            continue
        # Dependents refer to the install path name, which differs from
        # the entry name for aliases (node_modules/foo installed as bar)
        name = _extract_npm_name_from_path(path) or optional_str(meta.get("name"))
        if not name:
            logger.debug("Skipping lockfile entry without a package name: %s", path)
            continue
        result.append(Package(
            name=name,
            version=optional_str(meta.get("version")) or "",
            requires=_runtime_requires(meta),
            dev_requires=as_mapping(meta.get("devDependencies")),
            license=_manifest_licenses(meta),
        ))
    return result


def _packages_from_v1(dependencies: Dict[str, Any]) -> List[Package]:
    result: List[Package] = []

    # Walk the nested tree iteratively; nested copies keep their own entry.
    stack = [dependencies]
    while stack:
        current = stack.pop()
        for name, meta in current.items():
            if not isinstance(meta, dict):
                continue
            result.append(Package(
                name=name,
                version=optional_str(meta.get("version")) or "",
                requires=as_mapping(meta.get("requires")),
            ))
            nested = meta.get("dependencies")
            if isinstance(nested, dict):
                stack.append(nested)
    return result


def load_repository(path: str) -> Repository:
    """Read the installed package list from package-lock.json.

    Supports lockfileVersion 1, 2 and 3. Version 1 lockfiles carry no license data.
    """
    data = read_json(path)
    if not isinstance(data, dict):
        raise ProjectLoadError(f"{path} does not contain a JSON object")

    lockfile_version = data.get("lockfileVersion", 1)
    packages = data.get("packages")
    if isinstance(packages, dict) and lockfile_version in (2, 3):
        return Repository(_packages_from_v2(packages))
    if isinstance(data.get("dependencies"), dict):
        if lockfile_version == 1:
            logger.warning("%s uses lockfileVersion 1; licenses are not recorded there", path)
        return Repository(_packages_from_v1(data["dependencies"]))
    logger.warning("No packages found in %s", path)
    return Repository()


def load_project(directory: str, **_options: Any) -> Project:
    manifest = os.path.join(directory, Constants.PACKAGE_JSON_FILE)
    if not os.path.isfile(manifest):
        raise ProjectLoadError(f"{Constants.PACKAGE_JSON_FILE} not found in {directory}")
    lock_path = os.path.join(directory, Constants.PACKAGE_LOCK_FILE)
    if os.path.isfile(lock_path):
        repository = load_repository(lock_path)
    else:
        logger.warning("%s not found in %s; no installed packages to report",
                       Constants.PACKAGE_LOCK_FILE, directory)
        repository = Repository()
    return Project(
        root=load_root_package(manifest),
        repository=repository,
        ecosystem=Ecosystems.NPM.value,
    )
