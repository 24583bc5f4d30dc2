#!/usr/bin/env python
"""Fixed backoff for probing a single candidate.

The per-candidate attempt loop is a tenacity ``Retrying`` whose sleep goes
through a ``BackoffDelay``. The delay waits on a ``threading.Event`` so an
owner can cut a wait short without aborting the scan, and the optional
deadline stop lets a whole failover scan be bounded in time.
"""

from __future__ import annotations

import threading
import time

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)
from tenacity.stop import stop_base

from hafetch.utils.loguru_setup import logger

__all__ = [
    "BackoffDelay",
    "create_probe_retrying",
    "deadline_passed",
    "remaining_until",
]


class BackoffDelay:
    """Interruptible blocking delay.

    ``interrupt`` wakes a ``wait`` that is in progress. With nobody waiting
    it does nothing, so later delays run in full. An interrupted wait is not
    an error: the caller simply proceeds as if the delay elapsed.
    """

    def __init__(self) -> None:
        self._wakeup = threading.Event()
        self._lock = threading.Lock()
        self._waiters = 0

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds``.

        Returns:
            True if the full delay elapsed, False if it was interrupted.
        """
        if seconds <= 0:
            return True
        with self._lock:
            self._waiters += 1
        try:
            interrupted = self._wakeup.wait(seconds)
        finally:
            with self._lock:
                self._waiters -= 1
                if self._waiters == 0:
                    self._wakeup.clear()
        if interrupted:
            logger.warning(f"Backoff delay of {seconds:.2f}s interrupted, continuing with next attempt")
            return False
        return True

    def interrupt(self) -> bool:
        """Wake the waits in progress.

        Returns:
            True if a wait was running and has been woken.
        """
        with self._lock:
            if not self._waiters:
                return False
            self._wakeup.set()
            return True


def remaining_until(deadline_at: float | None) -> float | None:
    """Seconds left before a monotonic deadline, or None without one."""
    if deadline_at is None:
        return None
    return max(0.0, deadline_at - time.monotonic())


def deadline_passed(deadline_at: float | None) -> bool:
    return deadline_at is not None and time.monotonic() >= deadline_at


class stop_at_deadline(stop_base):
    """Stop once a monotonic deadline has passed. None never stops."""

    def __init__(self, deadline_at: float | None) -> None:
        self.deadline_at = deadline_at

    def __call__(self, retry_state: RetryCallState) -> bool:
        return deadline_passed(self.deadline_at)


def _is_failed_probe(result: bool) -> bool:
    return result is False


def create_probe_retrying(
    label: str,
    max_attempts: int,
    delay_seconds: float,
    backoff: BackoffDelay,
    deadline_at: float | None = None,
) -> Retrying:
    """Create a Retrying that re-runs a boolean probe until it returns True.

    Exhausting the attempts (or hitting the deadline) returns the last probe
    result instead of raising ``RetryError``.

    Args:
        label: Name of the probed candidate, for logging.
        max_attempts: Maximum number of probes.
        delay_seconds: Fixed wait between a failed probe and the next one.
        backoff: Delay primitive used for the waits.
        deadline_at: Optional ``time.monotonic()`` value after which no
            further attempts are made.
    """

    def _sleep(seconds: float) -> None:
        remaining = remaining_until(deadline_at)
        if remaining is not None:
            seconds = min(seconds, remaining)
        backoff.wait(seconds)

    def _log_before_sleep(retry_state: RetryCallState) -> None:
        logger.info(
            f"Try {label} failed for {retry_state.attempt_number} times, "
            f"sleep {retry_state.next_action.sleep:.2f}s before trying again"
        )

    return Retrying(
        stop=stop_after_attempt(max_attempts) | stop_at_deadline(deadline_at),
        wait=wait_fixed(delay_seconds),
        retry=retry_if_result(_is_failed_probe),
        sleep=_sleep,
        before_sleep=_log_before_sleep,
        retry_error_callback=_last_result,
    )


def _last_result(retry_state: RetryCallState) -> bool:
    return retry_state.outcome.result()
