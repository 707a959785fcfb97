"""Fixtures for the SQLite-backed integration tests."""

import pytest


def pytest_collection_modifyitems(items):
    """Tag everything under integration_tests/ so it can be deselected."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def db_path(tmp_path):
    """Database file in a data directory that does not exist yet."""
    return tmp_path / "data" / "gymbook.db"
