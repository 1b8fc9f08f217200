"""Python projects: pyproject.toml (or requirements.txt) plus installed distributions."""

from __future__ import annotations

import glob
import logging
import os
import sys
from importlib import metadata
from typing import Any, Dict, Iterable, List, Optional

import requirements
from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from constants import Constants, Ecosystems
from errors import ProjectLoadError
from package.models import Package, Project, Repository

from .files import license_list, optional_str, read_toml

logger = logging.getLogger(__name__)

_LICENSE_CLASSIFIER_PREFIX = "License ::"
_UNKNOWN_LICENSE = "UNKNOWN"


def parse_requirements_list(entries: Iterable[Any], context: str) -> Dict[str, str]:
    """Map PEP 508 requirement strings to ``{canonical name: specifier}``.

    Requirements that only apply under an extra are left out; malformed
    entries are logged and skipped.
    """
    result: Dict[str, str] = {}
    for entry in entries or []:
        if not isinstance(entry, str):
            continue
        try:
            req = Requirement(entry)
        except InvalidRequirement as e:
            logger.warning("Ignoring invalid requirement %r in %s: %s", entry, context, e)
            continue
        if req.marker is not None and "extra" in str(req.marker):
            continue
        result[canonicalize_name(req.name)] = str(req.specifier)
    return result


def licenses_from_classifiers(classifiers: Iterable[str]) -> List[str]:
    """Extract license names from ``License :: ...`` trove classifiers."""
    result = []
    for classifier in classifiers or []:
        if not classifier.startswith(_LICENSE_CLASSIFIER_PREFIX):
            continue
        parts = [p.strip() for p in classifier.split("::")]
        # "License :: OSI Approved" alone names no license
        if len(parts) < 2 or parts[-1] == "OSI Approved":
            continue
        result.append(parts[-1])
    return result


def _pyproject_licenses(project: Dict[str, Any]) -> List[str]:
    value = project.get("license")
    if isinstance(value, str):
        return license_list(value)
    if isinstance(value, dict) and isinstance(value.get("text"), str):
        text = value["text"].strip()
        if text and "\n" not in text:
            return [text]
    return licenses_from_classifiers(project.get("classifiers") or [])


def _dependency_groups(data: Dict[str, Any]) -> List[str]:
    entries: List[str] = []
    groups = data.get("dependency-groups")
    if isinstance(groups, dict):
        for group in groups.values():
            if isinstance(group, list):
                # {include-group = "..."} tables are references, not requirements
                entries.extend(e for e in group if isinstance(e, str))
    uv = (data.get("tool") or {}).get("uv") or {}
    if isinstance(uv.get("dev-dependencies"), list):
        entries.extend(uv["dev-dependencies"])
    return entries


def load_root_from_pyproject(path: str) -> Package:
    data = read_toml(path)
    project = data.get("project")
    if not isinstance(project, dict):
        raise ProjectLoadError(f"{path} has no [project] table")
    pretty_name = optional_str(project.get("name"))
    if pretty_name is None:
        raise ProjectLoadError(f"{path} does not declare a project name")
    return Package(
        name=canonicalize_name(pretty_name),
        pretty_name=pretty_name,
        version=optional_str(project.get("version")) or "",
        requires=parse_requirements_list(project.get("dependencies") or [], path),
        dev_requires=parse_requirements_list(_dependency_groups(data), path),
        license=_pyproject_licenses(project),
    )


def load_root_from_requirements(path: str) -> Package:
    """Build an anonymous root package named after the project directory."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            body = fh.read()
    except OSError as e:
        raise ProjectLoadError(f"Failed to read {path}: {e}") from e

    requires: Dict[str, str] = {}
    for req in requirements.parse(body):
        name = getattr(req, "name", None)
        if not isinstance(name, str) or not name:
            continue
        specs = getattr(req, "specs", []) or []
        requires[canonicalize_name(name)] = ",".join(op + ver for op, ver in specs)

    pretty_name = os.path.basename(os.path.dirname(os.path.abspath(path)))
    return Package(name=canonicalize_name(pretty_name), pretty_name=pretty_name,
                   version="", requires=requires)


def distribution_licenses(dist: metadata.Distribution) -> List[str]:
    """Best available license information of an installed distribution."""
    meta = dist.metadata
    expression = optional_str(meta.get("License-Expression"))
    if expression:
        return [expression]
    declared = optional_str(meta.get("License"))
    if declared and declared != _UNKNOWN_LICENSE and "\n" not in declared:
        return [declared]
    return licenses_from_classifiers(meta.get_all("Classifier") or [])


def package_from_distribution(dist: metadata.Distribution) -> Optional[Package]:
    pretty_name = optional_str(dist.metadata.get("Name"))
    if pretty_name is None:
        return None
    return Package(
        name=canonicalize_name(pretty_name),
        pretty_name=pretty_name,
        version=dist.version or "",
        requires=parse_requirements_list(dist.requires or [], pretty_name),
        license=distribution_licenses(dist),
    )


def find_site_packages(directory: str) -> Optional[List[str]]:
    """Return the site-packages of the project's .venv, or None to use sys.path."""
    venv = os.path.join(directory, Constants.VENV_DIR)
    patterns = [
        os.path.join(venv, "lib", "python*", "site-packages"),
        os.path.join(venv, "Lib", "site-packages"),
    ]
    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        if matches:
            return matches
    return None


def load_repository(paths: Optional[List[str]] = None, exclude: Optional[str] = None) -> Repository:
    """Read installed distributions from ``paths`` (default: the running interpreter).

    The distribution named ``exclude`` (the project itself when it is installed
    into its own environment) is left out.
    """
    search = paths if paths is not None else sys.path
    logger.info("Reading installed distributions from %s", ", ".join(search) or "<empty path>")
    repository = Repository()
    for dist in metadata.distributions(path=list(search)):
        pkg = package_from_distribution(dist)
        if pkg is None:
            logger.debug("Skipping installed distribution without a Name field")
            continue
        if pkg.name == exclude:
            logger.debug("Skipping installed distribution of the project itself: %s", pkg.pretty_name)
            continue
        repository.add_package(pkg)
    return repository


def load_project(directory: str, site_packages: Optional[List[str]] = None, **_options: Any) -> Project:
    pyproject = os.path.join(directory, Constants.PYPROJECT_TOML_FILE)
    req_file = os.path.join(directory, Constants.REQUIREMENTS_FILE)
    if os.path.isfile(pyproject):
        root = load_root_from_pyproject(pyproject)
    elif os.path.isfile(req_file):
        root = load_root_from_requirements(req_file)
    else:
        raise ProjectLoadError(
            f"Neither {Constants.PYPROJECT_TOML_FILE} nor {Constants.REQUIREMENTS_FILE} found in {directory}"
        )
    paths = site_packages if site_packages else find_site_packages(directory)
    return Project(root=root, repository=load_repository(paths, exclude=root.name),
                   ecosystem=Ecosystems.PYPI.value)
