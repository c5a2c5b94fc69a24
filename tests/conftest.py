"""Pytest configuration and shared fixtures for the scrapbox2review test suite."""

import logging
import os

import pytest
from hypothesis import Verbosity, settings

from scrapbox2review.logging_utils import CollectingDiagnostics

# Register Hypothesis profiles for property-based tests
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def diagnostics() -> CollectingDiagnostics:
    """Provide a diagnostics sink that records every reported message."""
    return CollectingDiagnostics()


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Run with an empty working and home directory so no config file is discovered."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.delenv("SCRAPBOX2REVIEW_CONFIG", raising=False)
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def root_logger(monkeypatch):
    """Give configure_logging a private root logger instead of the real one."""
    root = logging.Logger("root")
    get_logger = logging.getLogger
    monkeypatch.setattr(logging, "getLogger", lambda name=None: root if name is None else get_logger(name))
    yield root
    for handler in root.handlers:
        handler.close()
