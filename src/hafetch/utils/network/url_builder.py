#!/usr/bin/env python
"""Builders that turn a raw candidate endpoint into a concrete URL."""

from __future__ import annotations

from typing import Protocol

from hafetch.utils.config import ANONYMOUS_PARAMETER, RM_CLUSTER_INFO_PATH

__all__ = [
    "RmActiveTestURLBuilder",
    "ServiceURLBuilder",
]


class ServiceURLBuilder(Protocol):
    """Maps an endpoint to a URL. Implementations must be pure."""

    def build(self, endpoint: str) -> str: ...


class RmActiveTestURLBuilder:
    """Liveness URL for a YARN resource manager.

    Only the active resource manager answers the cluster info call; a standby
    redirects or refuses, which is exactly what the probe needs to tell them
    apart.

    >>> RmActiveTestURLBuilder().build("http://rm1:8088/")
    'http://rm1:8088/ws/v1/cluster/info?anonymous=true'
    """

    def build(self, endpoint: str) -> str:
        return f"{endpoint.rstrip('/')}/{RM_CLUSTER_INFO_PATH}?{ANONYMOUS_PARAMETER}"
