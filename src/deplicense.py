"""deplicense - Show licenses of installed project dependencies

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_licenses import licenses_command
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes, _load_yaml_config
from events import EventDispatcher


def main(argv=None, dispatcher=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    config = _load_yaml_config(getattr(args, "CONFIG", None), getattr(args, "DIRECTORY", "."))

    # CLI --loglevel wins over the config file, which wins over the environment
    configure_logging(
        getattr(args, "LOG_LEVEL", None) or config.get("log_level"),
        getattr(args, "LOG_FILE", None),
    )

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    if dispatcher is None:
        dispatcher = EventDispatcher()

    if args.action == "licenses":
        code = licenses_command(args, config=config, dispatcher=dispatcher)
    else:
        logger.error("Unknown command: %s", args.action)
        code = ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action=args.action,
                                outcome="success" if code == ExitCodes.SUCCESS.value else "failure")
        )
    sys.exit(code)


if __name__ == "__main__":
    main()
