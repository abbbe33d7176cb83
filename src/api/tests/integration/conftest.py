"""Integration test configuration.

Integration tests run against a real database. The authoring suite uses a
throwaway SQLite file per test; see ``tests/integration/authoring/conftest.py``.
"""


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )
