"""CLI entry point for the licenses command.

Loads the project, fires the command event, builds the package bucket and
renders the report. The project and repository are passed explicitly to every
step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, TextIO

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, ExitCodes, _load_yaml_config
from errors import ProjectLoadError, UnsupportedFormatError
from events import COMMAND_EVENT, CommandEvent, EventDispatcher
from licenses.closure import Bucket, collect_all, compute_required_closure
from licenses.report import render
from package.models import Project
from repository.loader import load_project

logger = logging.getLogger(__name__)

COMMAND_NAME = "licenses"


@dataclass
class LicensesOptions:
    """Effective options after merging CLI flags over the config file."""
    format: str = Constants.DEFAULT_FORMAT
    no_dev: bool = False
    project_type: Optional[str] = None


def resolve_options(args: Any, config: Optional[Dict[str, Any]] = None) -> LicensesOptions:
    """Merge CLI flags (highest precedence) over config values and defaults."""
    config = config or {}
    section = config.get(COMMAND_NAME)
    section = section if isinstance(section, dict) else {}

    fmt = getattr(args, "FORMAT", None)
    if fmt is None:
        fmt = section.get("format", Constants.DEFAULT_FORMAT)

    no_dev = getattr(args, "NO_DEV", None)
    if no_dev is None:
        no_dev = bool(section.get("no_dev", False))

    project_type = getattr(args, "PROJECT_TYPE", None) or config.get("type")
    if project_type is not None:
        project_type = str(project_type).lower()

    return LicensesOptions(format=str(fmt), no_dev=bool(no_dev), project_type=project_type)


def build_bucket(project: Project, no_dev: bool) -> Bucket:
    """Return the required closure when ``no_dev`` is set, else all installed packages."""
    if no_dev:
        return compute_required_closure(project.repository, project.root)
    return collect_all(project.repository)


def run_licenses(
    project: Project,
    options: LicensesOptions,
    out: Optional[TextIO] = None,
) -> None:
    """Render the license report of ``project``.

    Raises:
        UnsupportedFormatError: If the requested format is unknown.
    """
    bucket = build_bucket(project, options.no_dev)
    if is_debug_enabled(logger):
        logger.debug(
            "Bucket built",
            extra=extra_context(
                event="decision",
                component="cli",
                action="build_bucket",
                outcome="required_only" if options.no_dev else "all",
                count=len(bucket),
            ),
        )
    render(options.format, project.root, bucket, out)


def licenses_command(
    args: Any,
    config: Optional[Dict[str, Any]] = None,
    dispatcher: Optional[EventDispatcher] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Entry point for the licenses command.

    Args:
        args: Parsed CLI arguments namespace.
        config: Loaded configuration mapping; read from disk when None.
        dispatcher: Receives the command event before any work is done.
        out: Output stream for the report (default: stdout).

    Returns:
        int: Exit code.
    """
    directory = getattr(args, "DIRECTORY", None) or "."
    if config is None:
        config = _load_yaml_config(getattr(args, "CONFIG", None), directory)
    options = resolve_options(args, config)

    if dispatcher is not None:
        dispatcher.dispatch(COMMAND_EVENT, CommandEvent(COMMAND_EVENT, COMMAND_NAME, args))

    try:
        project = load_project(
            directory,
            options.project_type,
            site_packages=getattr(args, "SITE_PACKAGES", None),
        )
    except ProjectLoadError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    try:
        run_licenses(project, options, out)
    except UnsupportedFormatError as e:
        logger.error("%s", e)
        return ExitCodes.UNSUPPORTED_FORMAT.value

    return ExitCodes.SUCCESS.value
