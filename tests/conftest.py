import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_clustercli_logger():
    yield
    logger = logging.getLogger("clustercli")
    logger.handlers.clear()
    logger.propagate = True
