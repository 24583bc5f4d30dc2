#!/usr/bin/env python
"""Opening readable byte streams over HTTP.

The selector only cares whether a stream can be opened, but the fetcher is a
general collaborator: callers doing real work against the selected endpoint
read the returned stream to completion.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

import httpx

from hafetch.utils.config import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    HTTP_ERROR_CODE_THRESHOLD,
    HTTP_OK,
    CompressionType,
)
from hafetch.utils.loguru_setup import logger
from hafetch.utils.network.client_factory import create_httpx_client, safely_close_client
from hafetch.utils.network.exceptions import StreamFetchError

__all__ = [
    "Closeable",
    "HttpStreamFetcher",
    "ResponseStream",
    "StreamFetcher",
]


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None: ...


class StreamFetcher(Protocol):
    """Opens a readable stream for a URL or raises."""

    def open(self, url: str, compression: CompressionType) -> Closeable: ...


class ResponseStream:
    """Readable view over a streamed httpx response.

    Content encoding is undone by httpx, so ``read`` and ``iter_bytes`` yield
    the decompressed body regardless of the compression hint.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def closed(self) -> bool:
        return self._response.is_closed

    def read(self) -> bytes:
        return self._response.read()

    def iter_bytes(self, chunk_size: int | None = None) -> Iterator[bytes]:
        return self._response.iter_bytes(chunk_size)

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> "ResponseStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class HttpStreamFetcher:
    """StreamFetcher backed by an httpx Client.

    Args:
        client: Client to issue requests with. When omitted the fetcher creates
            and owns one, and ``close`` releases it.
        timeout: Timeout for the owned client in seconds.
        follow_redirects: Whether redirects are followed. Off by default, so
            a standby resource manager redirecting to the active one fails.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        follow_redirects: bool = False,
    ) -> None:
        self._owns_client = client is None
        self._follow_redirects = follow_redirects
        self._client = client if client is not None else create_httpx_client(timeout=timeout)

    def open(self, url: str, compression: CompressionType = CompressionType.NONE) -> ResponseStream:
        """Open a streamed GET against ``url``.

        Raises:
            StreamFetchError: On transport errors or a non-2xx status.
        """
        headers = {"Accept-Encoding": compression.value}
        request = self._client.build_request("GET", url, headers=headers)
        try:
            response = self._client.send(request, stream=True, follow_redirects=self._follow_redirects)
        except httpx.HTTPError as e:
            raise StreamFetchError(url, f"Failed to open stream from {url}: {e}") from e

        if not HTTP_OK <= response.status_code < HTTP_ERROR_CODE_THRESHOLD:
            status_code = response.status_code
            response.close()
            raise StreamFetchError(url, f"HTTP {status_code} from {url}", status_code=status_code)

        logger.debug(f"Opened stream from {url} (compression={compression.name})")
        return ResponseStream(response)

    def close(self) -> None:
        if self._owns_client:
            safely_close_client(self._client)

    def __enter__(self) -> "HttpStreamFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
