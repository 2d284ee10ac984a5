"""Shared test fixtures and utilities for all tests."""
import pytest

from src.app.containers import Container


@pytest.fixture
def container():
    """A fresh container; nothing touches the database unless a test asks for it."""
    return Container()


@pytest.fixture
def decoder(container):
    """Get the document decoder from the container."""
    return container.decoder()


@pytest.fixture
def grouping_engine(container):
    """Get the grouping engine from the container."""
    return container.grouping_engine()
