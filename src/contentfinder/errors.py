"""Exception hierarchy for source, rebuild and search failures."""

from __future__ import annotations


class ContentFinderError(Exception):
    """Base class for all ContentFinder errors."""


class SourceError(ContentFinderError):
    """The versioned content source could not be prepared."""


class SourceUnavailableError(SourceError):
    """Fetching the remote content repository failed."""


class ContentBuildError(ContentFinderError):
    """A single content file could not be turned into a content item."""


class SearchQueryError(ContentFinderError):
    """The full-text engine rejected a query."""


class RebuildError(ContentFinderError):
    """Base class for failures that abort an index rebuild."""


class SourceFailureError(RebuildError):
    pass


class NoContentError(RebuildError):
    pass


class BuildFailureError(RebuildError):
    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Failed to build {path}: {cause}")
        self.path = path
        self.cause = cause


class IndexWriteFailureError(RebuildError):
    pass


class EmptyResultError(RebuildError):
    pass
