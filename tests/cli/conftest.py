"""Pytest configuration and fixtures for CLI tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Click CLI test runner invoking the ftsquery group."""

    class FtsQueryCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            from ftsquery.cli.main import cli

            if isinstance(args, list):
                return super().invoke(cli, args, **kwargs)
            return super().invoke(args, **kwargs)

    return FtsQueryCliRunner()


@pytest.fixture
def conditions_file(tmp_path):
    """File with one condition per line, including a malformed one."""
    path = tmp_path / "conditions.txt"
    path.write_text("cats dogs\n\n(a b\n", encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path):
    """Config file limiting options to term stemming."""
    path = tmp_path / "ftsquery-test.yaml"
    path.write_text("options:\n  - stem-terms\n", encoding="utf-8")
    return path


def assert_exit_success(result):
    """Assert CLI command exited successfully."""
    assert result.exit_code == 0, f"Command failed: {result.output}"


def assert_exit_failure(result, expected_code=1):
    """Assert CLI command failed with expected code."""
    assert result.exit_code == expected_code, (
        f"Expected exit code {expected_code}, got {result.exit_code}: {result.output}"
    )


def assert_output_contains(result, *expected):
    """Assert CLI output contains expected strings."""
    for text in expected:
        assert text in result.output, f"Expected '{text}' in output:\n{result.output}"


pytest.assert_exit_success = assert_exit_success  # type: ignore[attr-defined]
pytest.assert_exit_failure = assert_exit_failure  # type: ignore[attr-defined]
pytest.assert_output_contains = assert_output_contains  # type: ignore[attr-defined]
