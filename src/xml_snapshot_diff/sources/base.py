"""ContentSource Protocol and SourceRegistry.

A content source returns the text of a file on one endpoint (the local
machine or a remote agent).  Sources are plain objects with a conformant
``read_text`` method; no inheritance is required.

Remote sources are registered explicitly, typically at startup::

    from xml_snapshot_diff.sources import SourceRegistry
    from xml_snapshot_diff.sources.http import HttpSource

    registry = SourceRegistry()
    registry.register("agent-1:8089", HttpSource("http://agent-1:8089"))

    registry.get("agent-1:8089")   # HttpSource(...)
    registry.get("agent-2:8089")   # None -- no source, checked by the caller
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from xml_snapshot_diff.sources.local import LocalSource

__all__ = ["LOCAL", "ContentSource", "SourceRegistry"]

LOCAL = "local"


@runtime_checkable
class ContentSource(Protocol):
    """Structural protocol for file content sources.

    ``read_text`` must return the decoded text of the file at ``path`` and
    raise an exception (any type) when the file cannot be read.
    """

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...


class SourceRegistry:
    """Explicit map from endpoint identifier to ``ContentSource``.

    The ``LOCAL`` endpoint is always available and served by a
    ``LocalSource`` unless another source is registered for it.  Each
    registry instance has its own map; nothing is shared between instances.
    """

    def __init__(self, sources: dict[str, ContentSource] | None = None) -> None:
        self._sources: dict[str, ContentSource] = {LOCAL: LocalSource()}
        for endpoint, source in (sources or {}).items():
            self.register(endpoint, source)

    def register(self, endpoint: str, source: ContentSource) -> None:
        """Register ``source`` for ``endpoint``, replacing any previous one.

        Raises:
            TypeError: If ``source`` does not satisfy ``ContentSource``.
        """
        if not isinstance(source, ContentSource):
            msg = f"{source!r} does not implement read_text(path, encoding)"
            raise TypeError(msg)
        self._sources[endpoint] = source

    def unregister(self, endpoint: str) -> None:
        """Remove the source of ``endpoint``; unknown endpoints are ignored."""
        self._sources.pop(endpoint, None)

    def get(self, endpoint: str) -> ContentSource | None:
        """Return the source of ``endpoint``, or None when none is registered."""
        return self._sources.get(endpoint)

    def __contains__(self, endpoint: object) -> bool:
        return endpoint in self._sources

    @property
    def endpoints(self) -> list[str]:
        return sorted(self._sources)
