"""Shared fixtures for mapconfig tests."""

import logging
from pathlib import Path
from typing import Callable, Iterator, List

import pytest


def _own_handlers(logger: logging.Logger) -> List[logging.Handler]:
    # pytest installs its capture handlers per test phase
    return [h for h in logger.handlers if not type(h).__module__.startswith("_pytest")]


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo handler changes made by setup_logging()."""
    root_logger = logging.getLogger()
    saved = _own_handlers(root_logger)
    level = root_logger.level
    yield
    for handler in _own_handlers(root_logger):
        if handler not in saved:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in saved:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write a configuration document into tmp_path and return its path."""

    def write(text: str, name: str = "render.conf") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write
