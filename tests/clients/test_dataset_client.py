"""
Tests for DatasetClient: HTTP and file fetching of dataset payloads.

HTTP behaviour is exercised through httpx.MockTransport, so no network
access is needed.
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from scripture_qa.clients import DatasetClient, FakeDatasetClient
from scripture_qa.core.exceptions import DataUnavailableError

PAYLOAD = "surah_no,ayah_no_surah,ayah_en\n1,1,In the name\n"


def _client(handler, max_retries: int = 3) -> DatasetClient:
    return DatasetClient(
        max_retries=max_retries,
        retry_delay=0.0,
        transport=httpx.MockTransport(handler),
    )


class TestDatasetClientInit:
    """Construction defaults."""

    def test_defaults(self) -> None:
        client = DatasetClient()

        assert client.timeout == 30.0
        assert client.max_retries == 3
        assert client.retry_delay == 1.0

    def test_uses_connection_pooling(self) -> None:
        client = DatasetClient()

        assert isinstance(client._client, httpx.AsyncClient)


class TestFetchUrl:
    """http(s) sources."""

    @pytest.mark.asyncio
    async def test_returns_body_on_200(self) -> None:
        client = _client(lambda request: httpx.Response(200, text=PAYLOAD))

        text = await client.fetch_text("https://data.example.org/quran.csv")

        assert text == PAYLOAD
        await client.close()

    @pytest.mark.asyncio
    async def test_non_2xx_raises_without_retry(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(str(request.url))
            return httpx.Response(404, text="not found")

        client = _client(handler)

        with pytest.raises(DataUnavailableError, match="HTTP 404") as exc_info:
            await client.fetch_text("https://data.example.org/missing.csv")

        assert exc_info.value.source == "https://data.example.org/missing.csv"
        assert len(calls) == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_body_raises(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="  \n"))

        with pytest.raises(DataUnavailableError, match="empty"):
            await client.fetch_text("https://data.example.org/quran.csv")
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_error_retried_then_succeeds(self) -> None:
        attempts = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            attempts["count"] += 1
            if attempts["count"] < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, text=PAYLOAD)

        client = _client(handler)

        text = await client.fetch_text("http://data.example.org/quran.csv")

        assert text == PAYLOAD
        assert attempts["count"] == 3
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_error_exhausts_retries(self) -> None:
        attempts = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            attempts["count"] += 1
            raise httpx.ReadTimeout("timed out", request=request)

        client = _client(handler, max_retries=2)

        with pytest.raises(DataUnavailableError, match="after 2 attempts"):
            await client.fetch_text("http://data.example.org/quran.csv")

        assert attempts["count"] == 2
        await client.close()


class TestFetchFile:
    """Filesystem sources."""

    @pytest.mark.asyncio
    async def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "quran.csv"
        path.write_text(PAYLOAD, encoding="utf-8")
        client = DatasetClient()

        assert await client.fetch_text(str(path)) == PAYLOAD
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        client = DatasetClient()

        with pytest.raises(DataUnavailableError):
            await client.fetch_text(str(tmp_path / "nope.csv"))
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        client = DatasetClient()

        with pytest.raises(DataUnavailableError):
            await client.fetch_text(str(path))
        await client.close()


class TestFakeDatasetClient:
    """The test double."""

    @pytest.mark.asyncio
    async def test_serves_configured_payloads(self) -> None:
        fake = FakeDatasetClient({"a": "x"})
        fake.set_payload("b", "y")

        assert await fake.fetch_text("a") == "x"
        assert await fake.fetch_text("b") == "y"
        assert fake.requested == ["a", "b"]

    @pytest.mark.asyncio
    async def test_unknown_source_raises(self) -> None:
        with pytest.raises(DataUnavailableError):
            await FakeDatasetClient().fetch_text("missing")
