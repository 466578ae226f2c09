"""Shared fixtures: keep logging state from leaking between tests."""

from __future__ import annotations

import logging

import pytest
import structlog

from trisphere.log import install_library_defaults


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    # configure_logging() installs a plain StreamHandler bound to the
    # captured stderr of the test that called it
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
    install_library_defaults()
