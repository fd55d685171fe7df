"""Tests for HttpSource.

These tests require the ``http`` extra (httpx and tenacity).  Requests are
served by ``httpx.MockTransport``, so no network access is needed.

Verifies:
- GET /files?path=<path> is issued and the body decoded
- HTTP error statuses raise and are not retried
- Transport errors are retried up to max_attempts, then re-raised
- Invalid max_attempts is rejected
- The context manager closes the underlying client
- A failing remote read surfaces as LoadError through ContentLoader
"""

from __future__ import annotations

from typing import Any

import pytest

httpx = pytest.importorskip("httpx")
pytest.importorskip("tenacity")

from xml_snapshot_diff.errors import LoadError  # noqa: E402
from xml_snapshot_diff.loader import ContentLoader, FileLocation  # noqa: E402
from xml_snapshot_diff.sources import SourceRegistry  # noqa: E402
from xml_snapshot_diff.sources.http import HttpSource  # noqa: E402

BASE_URL = "http://agent-1:8089"


def _source(handler: Any, max_attempts: int = 3) -> HttpSource:
    return HttpSource(
        BASE_URL, max_attempts=max_attempts, transport=httpx.MockTransport(handler)
    )


class TestHttpSource:
    def test_reads_file(self) -> None:
        seen: list[tuple[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.url.path, request.url.params["path"]))
            return httpx.Response(200, content="<r>é</r>".encode())

        source = _source(handler)
        assert source.read_text("/etc/app.xml") == "<r>é</r>"
        assert seen == [("/files", "/etc/app.xml")]

    def test_http_error_is_not_retried(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(404)

        source = _source(handler)
        with pytest.raises(httpx.HTTPStatusError):
            source.read_text("missing.xml")
        assert len(calls) == 1

    def test_transport_error_is_retried(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) < 2:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, content=b"<r/>")

        assert _source(handler).read_text("a.xml") == "<r/>"
        assert len(calls) == 2

    def test_gives_up_after_max_attempts(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(httpx.ConnectError):
            _source(handler, max_attempts=1).read_text("a.xml")
        assert len(calls) == 1

    def test_rejects_invalid_max_attempts(self) -> None:
        with pytest.raises(ValueError, match="max_attempts"):
            HttpSource(BASE_URL, max_attempts=0)

    def test_context_manager_closes_client(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<r/>")

        with _source(handler) as source:
            assert source.read_text("a.xml") == "<r/>"
        assert source._client.is_closed

    def test_repr(self) -> None:
        source = HttpSource(BASE_URL + "/")
        assert repr(source) == f"HttpSource(base_url='{BASE_URL}')"
        source.close()


class TestHttpSourceThroughLoader:
    def test_remote_failure_is_load_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        registry = SourceRegistry({"agent-1:8089": _source(handler)})
        loader = ContentLoader(registry)
        with pytest.raises(LoadError) as exc_info:
            loader.load(FileLocation("conf.xml", "agent-1:8089"))
        assert exc_info.value.endpoint == "agent-1:8089"
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)

    def test_remote_file_is_parsed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<r><a>1</a></r>")

        registry = SourceRegistry({"agent-1:8089": _source(handler)})
        root = ContentLoader(registry).load("agent-1:8089", "conf.xml")
        assert root.tag == "r"
