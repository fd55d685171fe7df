"""ContentLoader: resolves (endpoint, path) references to parsed XML trees.

Local files are read from the filesystem; any other endpoint is served by
the ``ContentSource`` registered for it in a ``SourceRegistry``.  A missing
source is a checked condition reported as ``LoadError``, never a partial
result: the comparison of the file pair must not go on without both trees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from xml_snapshot_diff.errors import LoadError
from xml_snapshot_diff.sources.base import LOCAL, SourceRegistry
from xml_snapshot_diff.tree.builder import TreeBuilder
from xml_snapshot_diff.tree.nodes import XmlNode

__all__ = ["ContentLoader", "FileLocation"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileLocation:
    """Reference to one file: its path and the endpoint holding it."""

    path: str
    endpoint: str = LOCAL

    @property
    def is_local(self) -> bool:
        return self.endpoint == LOCAL

    def __str__(self) -> str:
        return self.path if self.is_local else f"{self.endpoint}:{self.path}"


class ContentLoader:
    """Loads and parses XML files from local or remote endpoints.

    Args:
        registry: Endpoint sources.  Defaults to a registry serving only
            the local filesystem.
        encoding: Text encoding of the files.  Defaults to UTF-8.
    """

    def __init__(
        self, registry: SourceRegistry | None = None, encoding: str = "utf-8"
    ) -> None:
        self._registry = registry if registry is not None else SourceRegistry()
        self._encoding = encoding
        self._builder = TreeBuilder()

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    def load_text(
        self, location: FileLocation | str | None, path: str | None = None
    ) -> str:
        """Return the text of a file.

        Args:
            location: A ``FileLocation``, or an endpoint identifier (``None``
                meaning local) used together with ``path``.
            path:     File path when ``location`` is an endpoint identifier.

        Raises:
            LoadError: If the endpoint has no source or the read fails.
        """
        ref = _to_location(location, path)
        source = self._registry.get(ref.endpoint)
        if source is None:
            raise LoadError(
                ref.endpoint, ref.path, LookupError("no content source registered")
            )
        logger.debug("Loading %s", ref)
        try:
            return source.read_text(ref.path, self._encoding)
        except Exception as exc:
            raise LoadError(ref.endpoint, ref.path, exc) from exc

    def load(
        self, location: FileLocation | str | None, path: str | None = None
    ) -> XmlNode:
        """Load a file and parse it into an ``XmlNode`` tree.

        Raises:
            LoadError:  If the content cannot be retrieved.
            ParseError: If the content is not well-formed XML.
        """
        ref = _to_location(location, path)
        text = self.load_text(ref)
        return self._builder.parse(text, source=str(ref))


def _to_location(
    location: FileLocation | str | None, path: str | None
) -> FileLocation:
    if isinstance(location, FileLocation):
        if path is not None:
            msg = "path must not be given together with a FileLocation"
            raise TypeError(msg)
        return location
    if path is None:
        msg = "path is required when location is an endpoint identifier"
        raise TypeError(msg)
    return FileLocation(path=path, endpoint=location or LOCAL)
