#!/usr/bin/env python
"""HTTP client factory functions."""

from __future__ import annotations

import platform
from typing import Any

import httpx
from httpx import Limits, Timeout

from hafetch import __version__
from hafetch.utils.config import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_MAX_CONNECTIONS
from hafetch.utils.loguru_setup import logger

__all__ = [
    "Client",
    "create_httpx_client",
    "safely_close_client",
]

Client = httpx.Client


def create_httpx_client(
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    max_connections: int = DEFAULT_MAX_CONNECTIONS,
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> httpx.Client:
    """Create an httpx Client for endpoint probing.

    Args:
        timeout: Connect and read timeout in seconds
        max_connections: Maximum number of connections
        headers: Optional headers to include in all requests
        **kwargs: Additional keyword arguments to pass to Client

    Returns:
        httpx.Client: An initialized HTTP client
    """
    # httpx.Timeout needs either a default or all four values
    timeout_obj = Timeout(connect=timeout, read=timeout, write=timeout, pool=timeout)

    limits = Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(1, max_connections // 2),
    )

    if headers is None:
        headers = {
            "User-Agent": f"hafetch/{__version__} Python/{platform.python_version()}",
            "Accept": "application/json",
        }

    client = httpx.Client(
        timeout=timeout_obj,
        limits=limits,
        headers=headers,
        follow_redirects=True,
        **kwargs,
    )

    logger.debug(f"Created httpx Client with timeout={timeout}s, max_connections={max_connections}")
    return client


def safely_close_client(client: Any) -> None:
    """Close an HTTP client, logging instead of raising on failure.

    Args:
        client: HTTP client to close
    """
    if client is None:
        return

    try:
        if hasattr(client, "close") and callable(client.close):
            client.close()
            logger.debug("HTTP client closed successfully")
    except (OSError, httpx.HTTPError) as e:
        logger.warning(f"Error while closing HTTP client: {e}")
