#!/usr/bin/env python
"""Network-related exception classes."""

from __future__ import annotations

from typing import Any

from hafetch.utils.for_core.selector_exceptions import HAFetchError

__all__ = [
    "StreamFetchError",
]


class StreamFetchError(HAFetchError):
    """Raised when a stream cannot be opened against a URL.

    Covers transport failures and non-2xx responses alike.
    """

    def __init__(
        self,
        url: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        merged: dict[str, Any] = {"url": url}
        if status_code is not None:
            merged["status_code"] = status_code
        merged.update(details or {})
        super().__init__(message or f"Failed to open stream from {url}", details=merged)
