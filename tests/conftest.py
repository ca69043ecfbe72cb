"""Shared fixtures for the arraykit test suite."""

from __future__ import annotations

import logging

import pytest

from arraykit.containers import KeyedMap, OrderedList
from arraykit.core.config import reset_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Every test starts from env-derived default settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def restore_package_logger():
    """Undo handler/level changes made by setup_logging()."""
    package_logger = logging.getLogger("arraykit")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield package_logger
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@pytest.fixture
def numbers() -> OrderedList[int]:
    return OrderedList.create([1, 2, 3, 4, 5])


@pytest.fixture
def people() -> OrderedList[dict]:
    return OrderedList.create([
        {"name": "ada", "team": "core", "age": 36},
        {"name": "bob", "team": "web", "age": 29},
        {"name": "cy", "team": "core", "age": 41},
        {"name": "di", "team": "ops", "age": 29},
    ])


@pytest.fixture
def nested_map() -> KeyedMap:
    return KeyedMap.create({
        "db": {"host": "localhost", "port": 5432},
        "tags": ["a", "b"],
        "empty": [],
        "nothing": None,
    })
