from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from implgen.logging import reset_logging
from implgen.resolvers import TypeIndex
from tests._fixtures.type_builder import TypeWorkspace


@pytest.fixture
def workspace(tmp_path: Path) -> TypeWorkspace:
    """Provide a directory for catalogs and Java sources rooted at tmp_path."""
    return TypeWorkspace(tmp_path)


@pytest.fixture(scope="session")
def builtin_index() -> TypeIndex:
    """Index over the bundled platform types only."""
    return TypeIndex()


@pytest.fixture(autouse=True)
def _reset_implgen_logger() -> Iterator[None]:
    """Undo CLI logging configuration so caplog keeps seeing implgen records."""
    yield
    logger = logging.getLogger("implgen")
    reset_logging(logger)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
