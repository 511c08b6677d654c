"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from contentfinder.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.content_root == Path("content-repo")
        assert config.git_repository is None
        assert config.reset_on_rebuild is False
        assert config.db_path is not None
        assert config.content_subdirectory == "content"
        assert config.extensions == ("md", "html")
        assert config.source_extension == ".md"
        assert config.served_extension == ".html"
        assert config.date_format == "%Y-%m-%d"

    def test_custom_config(self) -> None:
        config = AppConfig(
            content_root="/srv/site",  # type: ignore[arg-type]
            git_repository="https://example.com/site.git",
            reset_on_rebuild=True,
            db_path=Path("/custom/path.db"),
            extensions=("MD",),
        )

        assert config.content_root == Path("/srv/site")
        assert config.reset_on_rebuild is True
        assert config.db_path == Path("/custom/path.db")
        assert config.extensions == ("md",)

    def test_resolve_db_path_absolute(self) -> None:
        config = AppConfig(db_path=Path("/absolute/path/db.db"))

        assert config.resolve_db_path(Path("/base")) == Path("/absolute/path/db.db")

    def test_resolve_db_path_relative_with_base(self) -> None:
        config = AppConfig(db_path=Path("relative/db.db"))

        assert config.resolve_db_path(base_dir=Path("/base")) == Path("/base/relative/db.db")

    def test_resolve_db_path_relative_no_base(self) -> None:
        config = AppConfig(db_path=Path("relative/db.db"))

        assert config.resolve_db_path() == Path("relative/db.db")

    def test_resolve_content_root(self) -> None:
        config = AppConfig(content_root=Path("site"))

        assert config.resolve_content_root(Path("/base")) == Path("/base/site")
        assert config.resolve_content_root() == Path("site")


class TestFromEnv:
    """Test environment-driven configuration."""

    def test_reads_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONTENTFINDER_CONTENT_ROOT", "/srv/site")
        monkeypatch.setenv("CONTENTFINDER_GIT_REPOSITORY", "https://example.com/site.git")
        monkeypatch.setenv("CONTENTFINDER_RESET_ON_REBUILD", "true")
        monkeypatch.setenv("CONTENTFINDER_DB_PATH", "/tmp/index.db")
        monkeypatch.setenv("CONTENTFINDER_DATE_FORMAT", "%d.%m.%Y")
        monkeypatch.setenv("CONTENTFINDER_EXTENSIONS", "md, txt")

        config = AppConfig.from_env()

        assert config.content_root == Path("/srv/site")
        assert config.git_repository == "https://example.com/site.git"
        assert config.reset_on_rebuild is True
        assert config.db_path == Path("/tmp/index.db")
        assert config.date_format == "%d.%m.%Y"
        assert config.extensions == ("md", "txt")

    def test_defaults_without_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("CONTENT_ROOT", "GIT_REPOSITORY", "RESET_ON_REBUILD", "DB_PATH", "DATE_FORMAT", "EXTENSIONS"):
            monkeypatch.delenv(f"CONTENTFINDER_{name}", raising=False)

        config = AppConfig.from_env()

        assert config.reset_on_rebuild is False
        assert config.extensions == ("md", "html")

    @pytest.mark.parametrize("value", ["0", "false", "no", "off"])
    def test_reset_flag_false_values(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("CONTENTFINDER_RESET_ON_REBUILD", value)

        assert AppConfig.from_env().reset_on_rebuild is False
