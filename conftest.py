# conftest.py
"""
Pytest configuration for stepchain tests.
"""


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "smoke: quick import health checks")
    config.addinivalue_line("markers", "cli: tests that drive the command line")
