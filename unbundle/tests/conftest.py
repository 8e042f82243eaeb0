"""Shared fixtures for unbundle tests."""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep ``UNBUNDLE_*`` variables of the calling shell out of the settings."""
    for name in list(os.environ):
        if name.startswith('UNBUNDLE_'):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the handler the CLI attaches, so caplog sees every record."""
    yield
    logger = logging.getLogger('unbundle')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
