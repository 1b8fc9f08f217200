import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    """Drop handlers installed by configure_logging so they never outlive capsys."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_deplicense_handler", False):
            root.removeHandler(handler)
            handler.close()
