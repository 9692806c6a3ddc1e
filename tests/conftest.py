"""Shared pytest fixtures for testing."""

import pytest
import structlog

from cxmlbuilder import CXMLBuilder, configure_logging, makeresponse


@pytest.fixture
def builder() -> CXMLBuilder:
    """A builder holding a new, empty document."""
    return makeresponse()


@pytest.fixture
def debug_logging():
    """Let debug events through for the duration of a test."""
    configure_logging("DEBUG")
    yield
    structlog.reset_defaults()
