import logging
from collections.abc import Iterator

import pytest

from weatherfeed.cli import HANDLER_NAME


@pytest.fixture(autouse=True)
def _reset_cli_logging() -> Iterator[None]:
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
