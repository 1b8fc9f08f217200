"""Constants used in the project."""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    UNSUPPORTED_FORMAT = 2


class Ecosystems(Enum):
    """Project ecosystems the tool can read installed packages for.

    Args:
        Enum (string): Ecosystem identifiers accepted by --type.
    """

    COMPOSER = "composer"
    NPM = "npm"
    PYPI = "pypi"


class OutputFormats(Enum):
    """Report formats understood by the licenses command."""

    TEXT = "text"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_ECOSYSTEMS = [
        Ecosystems.COMPOSER.value,
        Ecosystems.NPM.value,
        Ecosystems.PYPI.value,
    ]
    SUPPORTED_FORMATS = [OutputFormats.TEXT.value, OutputFormats.JSON.value]
    DEFAULT_FORMAT = OutputFormats.TEXT.value

    COMPOSER_JSON_FILE = "composer.json"
    COMPOSER_LOCK_FILE = "composer.lock"
    COMPOSER_INSTALLED_FILE = os.path.join("vendor", "composer", "installed.json")
    PACKAGE_JSON_FILE = "package.json"
    PACKAGE_LOCK_FILE = "package-lock.json"
    PYPROJECT_TOML_FILE = "pyproject.toml"
    REQUIREMENTS_FILE = "requirements.txt"
    VENV_DIR = ".venv"

    COMPOSER_ROOT_NAME = "__root__"
    COMPOSER_ROOT_VERSION = "1.0.0+no-version-set"
    NO_LICENSE = "none"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    DEFAULT_LOG_LEVEL = "WARNING"
    ENV_LOG_LEVEL = "DEPLICENSE_LOG_LEVEL"
    ENV_CONFIG = "DEPLICENSE_CONFIG"
    CONFIG_FILES = ["deplicense.yml", "deplicense.yaml", ".deplicense.yml"]


def _load_yaml_config(config_path=None, directory="."):
    """Load the YAML configuration file, if any.

    Lookup order: explicit path, DEPLICENSE_CONFIG, then the default file names
    inside ``directory``. Returns an empty dict when nothing usable is found.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = []
    explicit = config_path or os.environ.get(Constants.ENV_CONFIG)
    if explicit:
        if not os.path.isfile(explicit):
            logger.warning("Config file not found: %s", explicit)
            return {}
        candidates.append(explicit)
    else:
        for name in Constants.CONFIG_FILES:
            path = os.path.join(directory, name)
            if os.path.isfile(path):
                candidates.append(path)
                break

    for path in candidates:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config %s: %s", path, e)
            return {}
        if isinstance(data, dict):
            logger.info("Loaded config from: %s", path)
            return data
        logger.warning("Ignoring config %s: top level is not a mapping", path)
    return {}
