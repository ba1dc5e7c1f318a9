from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.packages_builder import PackagesBuilder


@pytest.fixture
def packages(tmp_path: Path) -> PackagesBuilder:
    """Provide a project root with a writable packages/ tree."""
    return PackagesBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_tsdocgen_logger():
    """Undo configure_logging() so caplog keeps receiving records."""
    yield
    logger = logging.getLogger("tsdocgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
