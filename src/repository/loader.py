"""Project loading: pick the ecosystem and delegate to its loader."""

import logging
import os

from constants import Constants, Ecosystems
from errors import ProjectLoadError

logger = logging.getLogger(__name__)

# Checked in order when no ecosystem is given
_MANIFESTS = [
    (Ecosystems.COMPOSER.value, [Constants.COMPOSER_JSON_FILE]),
    (Ecosystems.NPM.value, [Constants.PACKAGE_JSON_FILE]),
    (Ecosystems.PYPI.value, [Constants.PYPROJECT_TOML_FILE, Constants.REQUIREMENTS_FILE]),
]


def detect_ecosystem(directory):
    """Return the ecosystem whose manifest is present in ``directory``.

    Raises:
        ProjectLoadError: If no known manifest is found.
    """
    for ecosystem, files in _MANIFESTS:
        if any(os.path.isfile(os.path.join(directory, name)) for name in files):
            return ecosystem
    raise ProjectLoadError(f"No composer.json, package.json, pyproject.toml or requirements.txt in {directory}")


def load_project(directory, ecosystem=None, **options):
    """Load the root package and installed repository of the project in ``directory``.

    Args:
        directory (str): Project directory.
        ecosystem (str, optional): One of Constants.SUPPORTED_ECOSYSTEMS; detected when omitted.
        **options: Loader specific options (e.g. ``site_packages`` for pypi).

    Returns:
        Project: root package, repository and ecosystem name.
    """
    if not os.path.isdir(directory):
        raise ProjectLoadError(f"Not a directory: {directory}")
    if ecosystem is None:
        ecosystem = detect_ecosystem(directory)
        logger.info("Detected %s project in %s", ecosystem, directory)

    if ecosystem == Ecosystems.COMPOSER.value:
        from repository import composer as _loader  # pylint: disable=import-outside-toplevel
    elif ecosystem == Ecosystems.NPM.value:
        from repository import npm as _loader  # pylint: disable=import-outside-toplevel
    elif ecosystem == Ecosystems.PYPI.value:
        from repository import pypi as _loader  # pylint: disable=import-outside-toplevel
    else:
        raise ProjectLoadError(f"Unsupported project type: {ecosystem}")

    project = _loader.load_project(directory, **options)
    logger.info(
        "Loaded %s with %d installed package(s)",
        project.root.pretty_name,
        len(project.repository),
    )
    return project
