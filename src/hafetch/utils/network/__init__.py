#!/usr/bin/env python
"""Network utilities subpackage.

- HTTP client factory functions
- Streamed fetching with a compression hint
- Probe URL builders
"""

from hafetch.utils.network.client_factory import (
    Client,
    create_httpx_client,
    safely_close_client,
)
from hafetch.utils.network.exceptions import StreamFetchError
from hafetch.utils.network.stream_fetch import (
    Closeable,
    HttpStreamFetcher,
    ResponseStream,
    StreamFetcher,
)
from hafetch.utils.network.url_builder import (
    RmActiveTestURLBuilder,
    ServiceURLBuilder,
)

__all__ = [
    "Client",
    "Closeable",
    "HttpStreamFetcher",
    "ResponseStream",
    "RmActiveTestURLBuilder",
    "ServiceURLBuilder",
    "StreamFetchError",
    "StreamFetcher",
    "create_httpx_client",
    "safely_close_client",
]
