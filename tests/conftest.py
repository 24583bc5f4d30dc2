#!/usr/bin/env python
"""Root conftest.py for the hafetch test suite."""

import pytest

from hafetch.utils.loguru_setup import suppress_http_logging


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "serial: mark test to run serially (non-parallel)")


@pytest.fixture(autouse=True, scope="session")
def quiet_http_libraries():
    """Keep httpx/httpcore debug output out of captured logs."""
    suppress_http_logging(True)
    yield
