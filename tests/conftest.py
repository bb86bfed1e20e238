"""Pytest configuration and fixtures."""

import os

import pytest

from ftsquery.condition import SearchOptions


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables and config lookup for each test.

    This prevents a user's configuration or a previous test's environment
    from changing how conditions are parsed.
    """
    original_env = os.environ.copy()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("FTSQUERY_OPTIONS", raising=False)
    monkeypatch.delenv("FTSQUERY_STRICT", raising=False)
    monkeypatch.chdir(tmp_path)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def strict_options() -> SearchOptions:
    """Default options with every throw option enabled."""
    return SearchOptions.DEFAULT | SearchOptions.THROW_ON_ALL


@pytest.fixture
def unstemmed_options() -> SearchOptions:
    """Options that trim prefixes but never stem."""
    return SearchOptions.TRIM_PREFIX_ALL
