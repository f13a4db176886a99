"""
Dataset Client

Fetches the raw dataset payloads for the Record Store, from an http(s) URL
(pooled httpx.AsyncClient) or from a local file path.

Patterns Applied:
- Connection pooling (one httpx.AsyncClient per DatasetClient)
- Retry with exponential backoff for transport failures only
- Protocol for duck typing, with FakeDatasetClient for tests
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol

import httpx

from scripture_qa.core.exceptions import DataUnavailableError
from scripture_qa.core.logging import get_logger

logger = get_logger(__name__)

_URL_PREFIXES = ("http://", "https://")


# =============================================================================
# Protocol for Duck Typing
# =============================================================================


class DatasetClientProtocol(Protocol):
    """Anything that can turn a dataset source into its raw text."""

    async def fetch_text(self, source: str) -> str:
        """Return the raw payload for ``source``."""
        ...


# =============================================================================
# DatasetClient Implementation
# =============================================================================


class DatasetClient:
    """Fetches dataset payloads over HTTP or from disk.

    Non-2xx responses and empty bodies fail immediately; timeouts and other
    transport errors are retried with exponential backoff.

    Attributes:
        timeout: Request timeout in seconds (default: 30)
        max_retries: Maximum attempts per URL (default: 3)
        retry_delay: Initial delay between retries in seconds (default: 1.0)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the dataset client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum attempts per URL
            retry_delay: Initial delay between retries
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def fetch_text(self, source: str) -> str:
        """Fetch the raw payload for a dataset source.

        Args:
            source: http(s) URL or filesystem path

        Returns:
            The payload text

        Raises:
            DataUnavailableError: On non-2xx, empty payload, missing file,
                or exhausted retries
        """
        if source.startswith(_URL_PREFIXES):
            text = await self._fetch_url(source)
        else:
            text = self._read_file(source)

        if not text.strip():
            raise DataUnavailableError(f"Dataset is empty: {source}", source=source)
        return text

    async def _fetch_url(self, url: str) -> str:
        last_error: Exception | None = None

        for attempt in range(self.max_retries):
            try:
                response = await self._client.get(url)
            except httpx.TransportError as e:
                last_error = e
                logger.warning(
                    "dataset_fetch_retry",
                    source=url,
                    attempt=attempt + 1,
                    error=str(e),
                )
            else:
                if not response.is_success:
                    raise DataUnavailableError(
                        f"Failed to fetch {url}: HTTP {response.status_code}",
                        source=url,
                    )
                return response.text

            if attempt < self.max_retries - 1:
                await asyncio.sleep(self.retry_delay * (2**attempt))

        raise DataUnavailableError(
            f"Failed to fetch {url} after {self.max_retries} attempts: {last_error}",
            source=url,
        )

    def _read_file(self, source: str) -> str:
        path = Path(source)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise DataUnavailableError(
                f"Failed to read dataset file {path}: {e}", source=source
            ) from e

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()


# =============================================================================
# FakeDatasetClient for Testing
# =============================================================================


class FakeDatasetClient:
    """Fake client serving payloads from a dict, without I/O.

    Implements DatasetClientProtocol. Unknown sources raise
    DataUnavailableError, like a 404 would.
    """

    def __init__(self, payloads: dict[str, str] | None = None) -> None:
        self._payloads = dict(payloads) if payloads else {}
        self.requested: list[str] = []

    async def fetch_text(self, source: str) -> str:
        """Return the configured payload for ``source``."""
        await asyncio.sleep(0)
        self.requested.append(source)
        if source not in self._payloads:
            raise DataUnavailableError(f"Unknown dataset source: {source}", source=source)
        return self._payloads[source]

    def set_payload(self, source: str, text: str) -> None:
        """Set or replace the payload for a source."""
        self._payloads[source] = text
