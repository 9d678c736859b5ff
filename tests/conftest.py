"""Shared fixtures for formcheck tests."""

import logging

import pytest
import structlog

from formcheck.config import get_settings
from formcheck.validation import requirement


@pytest.fixture
def r():
    """Requirement factory namespace."""
    return requirement


@pytest.fixture
def form_values():
    """Values from the nested form example."""
    return {
        "name": "Joe",
        "age": 15,
        "address": {
            "city": "",
        },
    }


@pytest.fixture
def form_requirements(r):
    """Requirements from the nested form example."""
    return {
        "name": [r.required()],
        "age": [r.min_value(18, "You are underage")],
        "address": {"city": [r.required()]},
    }


@pytest.fixture
def fresh_settings():
    """Drop cached settings before and after the test so env changes apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_logging():
    """Undo configure_logging side effects."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
