#!/usr/bin/env python3
"""Exceptions raised by endpoint selection.

All exceptions carry a ``.details`` dict (default ``{}``) for machine-parseable
error context, so callers can react to a failover failure without parsing the
message.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from hafetch.utils.loguru_setup import logger


class HAFetchError(Exception):
    """Base exception for all hafetch errors.

    Attributes:
        message: Human-readable error message.
        details: Machine-parseable error context (dict, default ``{}``).
    """

    def __init__(self, message="hafetch error occurred", *, details: dict[str, Any] | None = None) -> None:
        """Initialize HAFetchError.

        Args:
            message: Error description.
            details: Machine-parseable context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NoAliveEndpointError(HAFetchError):
    """Raised when a failover scan exhausts every candidate endpoint.

    Attributes:
        candidates: Every configured candidate, in scan order.
    """

    def __init__(
        self,
        candidates: Sequence[str],
        *,
        attempts_per_candidate: int | None = None,
        deadline_exceeded: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize NoAliveEndpointError.

        Args:
            candidates: Candidates that were scanned, in order.
            attempts_per_candidate: Probe attempts allowed per candidate.
            deadline_exceeded: Whether the scan stopped on its overall deadline.
            details: Extra context merged into ``.details``.
        """
        self.candidates = tuple(candidates)
        message = f"No alive url found: {';'.join(self.candidates)}"
        if deadline_exceeded:
            message += " (reselect deadline exceeded)"
        merged = {
            "candidates": list(self.candidates),
            "attempts_per_candidate": attempts_per_candidate,
            "deadline_exceeded": deadline_exceeded,
        }
        merged.update(details or {})
        super().__init__(message, details=merged)
        logger.error(f"NoAliveEndpointError: {message}")
