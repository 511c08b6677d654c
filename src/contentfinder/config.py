"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "CONTENTFINDER_"

DEFAULT_EXTENSIONS = ("md", "html")


def _get_default_db_path() -> Path:
    """Get the default database path, preferring a local data/ directory."""
    local_db = Path("data/contentfinder.db")
    if local_db.parent.exists():
        return local_db
    return Path.home() / ".contentfinder" / "contentfinder.db"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class AppConfig:
    content_root: Path = Path("content-repo")
    git_repository: str | None = None
    reset_on_rebuild: bool = False
    db_path: Path | None = None
    content_subdirectory: str = "content"
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    source_extension: str = ".md"
    served_extension: str = ".html"
    date_format: str = "%Y-%m-%d"

    def __post_init__(self) -> None:
        self.content_root = Path(self.content_root)
        if self.db_path is None:
            self.db_path = _get_default_db_path()
        self.extensions = tuple(ext.lower() for ext in self.extensions)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from ``CONTENTFINDER_*`` environment variables."""
        values: dict[str, object] = {}
        env = os.environ
        if f"{ENV_PREFIX}CONTENT_ROOT" in env:
            values["content_root"] = Path(env[f"{ENV_PREFIX}CONTENT_ROOT"])
        if f"{ENV_PREFIX}GIT_REPOSITORY" in env:
            values["git_repository"] = env[f"{ENV_PREFIX}GIT_REPOSITORY"]
        if f"{ENV_PREFIX}RESET_ON_REBUILD" in env:
            values["reset_on_rebuild"] = _env_flag(env[f"{ENV_PREFIX}RESET_ON_REBUILD"])
        if f"{ENV_PREFIX}DB_PATH" in env:
            values["db_path"] = Path(env[f"{ENV_PREFIX}DB_PATH"])
        if f"{ENV_PREFIX}DATE_FORMAT" in env:
            values["date_format"] = env[f"{ENV_PREFIX}DATE_FORMAT"]
        if f"{ENV_PREFIX}EXTENSIONS" in env:
            raw = env[f"{ENV_PREFIX}EXTENSIONS"]
            values["extensions"] = tuple(part.strip() for part in raw.split(",") if part.strip())
        return cls(**values)  # type: ignore[arg-type]

    def resolve_db_path(self, base_dir: Path | None = None) -> Path:
        if self.db_path is None:
            self.db_path = _get_default_db_path()
        if Path(self.db_path).is_absolute() or base_dir is None:
            return Path(self.db_path)
        return base_dir / self.db_path

    def resolve_content_root(self, base_dir: Path | None = None) -> Path:
        if self.content_root.is_absolute() or base_dir is None:
            return self.content_root
        return base_dir / self.content_root
