"""Argument parsing functionality for deplicense."""

import argparse

from constants import Constants


def _add_common_args(parser):
    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Project directory to inspect (default: current directory)",
                        action="store", type=str,
                        default=".")
    parser.add_argument("-t", "--type",
                        dest="PROJECT_TYPE",
                        help="Project type, i.e: composer, npm, pypi (default: detected from manifests)",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_ECOSYSTEMS)
    parser.add_argument("--site-packages",
                        dest="SITE_PACKAGES",
                        help="site-packages directory to read installed distributions from (pypi only, repeatable)",
                        action="append", type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def build_parser():
    """Build the top level parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="deplicense",
        description="deplicense - Show licenses of installed project dependencies",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="<command>")
    subparsers.required = True

    licenses = subparsers.add_parser(
        "licenses",
        help="Show information about licenses of dependencies",
        description=(
            "The licenses command displays detailed information about the "
            "licenses of the installed dependencies."
        ),
    )
    # Validated by the renderer so unknown formats fail with a clear message
    licenses.add_argument("-f", "--format",
                          dest="FORMAT",
                          help="Format of the output: {} (default: {})".format(
                              ", ".join(Constants.SUPPORTED_FORMATS), Constants.DEFAULT_FORMAT),
                          action="store",
                          type=str)
    licenses.add_argument("--no-dev",
                          dest="NO_DEV",
                          help="Disables search in require-dev packages.",
                          action="store_true",
                          default=None)
    _add_common_args(licenses)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
