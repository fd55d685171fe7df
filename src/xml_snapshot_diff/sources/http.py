"""HttpSource: reads file content from a remote agent over HTTP.

The agent is expected to serve the raw bytes of a file at
``GET {base_url}/files?path=<path>``.  Non-2xx responses raise
``httpx.HTTPStatusError``, which the ``ContentLoader`` turns into a
``LoadError`` naming the endpoint and path.

Wraps ``httpx.Client`` with a lazy import so that the base install (no
httpx/tenacity installed) never triggers an ``ImportError`` at module
level.  The ``httpx`` and ``tenacity`` packages are only required when
``HttpSource`` is *instantiated*.

Transport failures (connection refused, timeouts, ...) are retried with
jittered exponential backoff via ``tenacity``.  HTTP error statuses are not
retried.

Install the optional dependency with::

    pip install xml-snapshot-diff[http]

Example::

    from xml_snapshot_diff.sources.http import HttpSource

    with HttpSource("http://agent-1:8089") as source:
        text = source.read_text("/var/app/config.xml")
"""

from __future__ import annotations

from typing import Any


class HttpSource:
    """Remote agent content source.

    Args:
        base_url:     Root URL of the agent, e.g. ``"http://agent-1:8089"``.
        timeout:      Per-request timeout in seconds.
        max_attempts: Total attempts per read when the transport fails.
        transport:    Optional ``httpx`` transport, mainly for tests
                      (``httpx.MockTransport``).

    Raises:
        ImportError: If ``httpx`` or ``tenacity`` is not installed.  The
            message includes the install command.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_attempts: int = 3,
        transport: Any = None,
    ) -> None:
        try:
            import httpx
            from tenacity import (
                retry,
                retry_if_exception_type,
                stop_after_attempt,
                wait_random_exponential,
            )
        except ImportError as exc:
            raise ImportError(
                "httpx and tenacity are required for HttpSource. "
                "Install with: pip install xml-snapshot-diff[http]"
            ) from exc

        if max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {max_attempts}"
            raise ValueError(msg)

        self._base_url = base_url.rstrip("/")
        self._client: Any = httpx.Client(
            base_url=self._base_url, timeout=timeout, transport=transport
        )
        _retry = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_random_exponential(min=0.1, max=10),
            stop=stop_after_attempt(max_attempts),
            reraise=True,
        )
        self._fetch = _retry(self._raw_fetch)

    def __repr__(self) -> str:
        return f"HttpSource(base_url={self._base_url!r})"

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Return the decoded content of ``path`` on the agent."""
        content: bytes = self._fetch(path)
        return content.decode(encoding)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _raw_fetch(self, path: str) -> bytes:
        response = self._client.get("/files", params={"path": path})
        response.raise_for_status()
        return bytes(response.content)
