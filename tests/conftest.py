"""Pytest configuration and shared fixtures for the mdsync test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import logging
import os
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def restore_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers and level after a test reconfigures them.

    The CLI installs its own handlers on the root logger; without this the
    handlers would keep writing to streams captured by earlier tests.
    """
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


@pytest.fixture
def sample_markdown() -> str:
    """Provide a small document exercising most block types."""
    return (
        "# Project Notes\n"
        "\n"
        "Intro paragraph with *emphasis* and `code`.\n"
        "\n"
        "- first item\n"
        "- second item\n"
        "\n"
        "> quoted text\n"
        "\n"
        "```python\n"
        "print('hi')\n"
        "```\n"
    )
