"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from contentfinder.cli import _build_config, _setup_logging, app


runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONTENT_ROOT", "GIT_REPOSITORY", "RESET_ON_REBUILD", "DB_PATH", "DATE_FORMAT", "EXTENSIONS"):
        monkeypatch.delenv(f"CONTENTFINDER_{name}", raising=False)


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        with patch("contentfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        with patch("contentfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestBuildConfig:
    def test_options_override(self, tmp_path: Path) -> None:
        config = _build_config(tmp_path, "https://example.com/x.git", True, tmp_path / "x.db")

        assert config.content_root == tmp_path
        assert config.git_repository == "https://example.com/x.git"
        assert config.reset_on_rebuild is True
        assert config.db_path == tmp_path / "x.db"

    def test_none_keeps_defaults(self) -> None:
        config = _build_config(None, None, None, None)

        assert config.reset_on_rebuild is False
        assert config.git_repository is None


class TestRebuildCommand:
    """Tests for the rebuild command."""

    def test_rebuild_success(self, tmp_path: Path, content_root: Path, write_post) -> None:
        write_post("a.md", title="Alpha")
        write_post("b.md", title="Beta")

        result = runner.invoke(
            app, ["rebuild", "--root", str(content_root), "--db", str(tmp_path / "cli.db"), "--no-reset"]
        )

        assert result.exit_code == 0, result.output
        assert "Indexed" in result.output
        assert "2" in result.output

    def test_rebuild_without_content_fails(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()

        result = runner.invoke(app, ["rebuild", "--root", str(empty), "--db", str(tmp_path / "cli.db")])

        assert result.exit_code == 1
        assert "Rebuild failed" in result.output


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_shows_matches(self, tmp_path: Path, content_root: Path, write_post) -> None:
        write_post("py.md", title="Snakes", body="python everywhere")
        write_post("rs.md", title="Crabs", body="rust everywhere")

        result = runner.invoke(
            app, ["search", "python", "--root", str(content_root), "--db", str(tmp_path / "cli.db")]
        )

        assert result.exit_code == 0, result.output
        assert "Snakes" in result.output
        assert "Crabs" not in result.output

    def test_search_no_matches(self, tmp_path: Path, content_root: Path, write_post) -> None:
        write_post("py.md", title="Snakes", body="python everywhere")

        result = runner.invoke(
            app, ["search", "haskell", "--root", str(content_root), "--db", str(tmp_path / "cli.db")]
        )

        assert result.exit_code == 0
        assert "No matches found" in result.output

    def test_search_unlisted_needs_all_flag(self, tmp_path: Path, content_root: Path, write_post) -> None:
        write_post("draft.md", title="Secret", body="python draft", listed=False)
        db = str(tmp_path / "cli.db")

        hidden = runner.invoke(app, ["search", "python", "--root", str(content_root), "--db", db])
        shown = runner.invoke(app, ["search", "python", "--root", str(content_root), "--db", db, "--all"])

        assert "Secret" not in hidden.output
        assert "Secret" in shown.output
