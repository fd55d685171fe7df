"""Exception types raised while loading XML files for comparison.

Both errors are fail-fast: they abort the comparison of a single file pair
and no partial ``DifferenceTrace`` is produced for it.  A content mismatch is
never an error; it is reported as a trace entry instead.
"""

from __future__ import annotations

__all__ = ["LoadError", "ParseError", "XmlSnapshotError"]


class XmlSnapshotError(Exception):
    """Base class for all errors raised by xml-snapshot-diff."""


class LoadError(XmlSnapshotError):
    """The content of a file could not be retrieved.

    Raised for local I/O failures, for endpoints without a registered
    content source, and for failures inside a remote content source.

    Attributes:
        endpoint: Endpoint the file was requested from (``"local"`` for the
            local filesystem).
        path:     Path of the requested file on that endpoint.
        cause:    The underlying exception, if any.
    """

    def __init__(
        self, endpoint: str, path: str, cause: BaseException | None = None
    ) -> None:
        self.endpoint = endpoint
        self.path = path
        self.cause = cause
        msg = f"Error loading '{path}' XML file from {endpoint}"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)


class ParseError(XmlSnapshotError):
    """The retrieved content is not well-formed XML.

    Attributes:
        path:  Identifier of the content that failed to parse.
        cause: The underlying parser exception, if any.
    """

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        msg = f"Error parsing XML file '{path}'"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
