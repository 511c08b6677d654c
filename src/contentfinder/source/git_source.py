"""Git-backed content source.

Prepares the local content tree before an index rebuild. When
``reset_on_rebuild`` is enabled the local clone is thrown away and the
repository is cloned again; otherwise the existing directory is used as is.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pygit2

from contentfinder.errors import SourceUnavailableError
from contentfinder.utils.files import has_entries

LOGGER = logging.getLogger(__name__)


class GitContentSource:
    """Local checkout of a remote content repository."""

    def __init__(self, root: Path, repository: str | None, *, reset_on_rebuild: bool = False) -> None:
        self.root = Path(root)
        self.repository = repository
        self.reset_on_rebuild = reset_on_rebuild

    def ensure_ready(self) -> None:
        """Make sure a local copy of the content tree exists.

        Raises:
            SourceUnavailableError: If the clone fails or no repository is set.
        """
        LOGGER.info("Should reset git clone? %s", self.reset_on_rebuild)
        if not self.reset_on_rebuild:
            return

        if not self.repository:
            raise SourceUnavailableError("reset_on_rebuild is enabled but no git repository is configured")

        if self.root.is_dir():
            LOGGER.info("Deleting %s", self.root.resolve())
            shutil.rmtree(self.root)

        try:
            repo = pygit2.clone_repository(self.repository, str(self.root))
        except (pygit2.GitError, OSError) as exc:
            raise SourceUnavailableError(f"Failed to clone {self.repository}: {exc}") from exc

        if repo.head_is_unborn:
            LOGGER.warning("Cloned %s but it has no commits", self.repository)
        else:
            LOGGER.info("Cloned %s at %s", self.repository, repo.head.target)

    def has_content(self) -> bool:
        """True when the root exists and holds at least one entry."""
        return has_entries(self.root)
