"""Tests for the probe backoff helpers (backoff.py).

Verifies:
- BackoffDelay waits, and treats an interrupt as an early, non-fatal wake-up
  of the wait in progress only
- create_probe_retrying() stops after max_attempts and returns the last result
- the deadline stop ends attempts early and caps the final wait
"""

import threading
import time
from unittest.mock import patch

from hafetch.utils.for_core.backoff import (
    BackoffDelay,
    create_probe_retrying,
    deadline_passed,
    remaining_until,
)


class _RecordingDelay(BackoffDelay):
    def __init__(self):
        super().__init__()
        self.waits = []

    def wait(self, seconds):
        self.waits.append(seconds)
        return True


def _interrupt_when_waiting(delay, woken):
    """Interrupt ``delay`` as soon as a wait is running."""
    for _ in range(500):
        if delay.interrupt():
            woken.append(True)
            return
        time.sleep(0.01)


class TestBackoffDelay:
    """Tests for the interruptible delay."""

    def test_zero_wait_returns_immediately(self):
        assert BackoffDelay().wait(0) is True

    def test_short_wait_elapses(self):
        started = time.monotonic()
        assert BackoffDelay().wait(0.05) is True
        assert time.monotonic() - started >= 0.04

    @patch("hafetch.utils.for_core.backoff.logger")
    def test_interrupt_wakes_waiter(self, mock_logger):
        delay = BackoffDelay()
        woken = []
        interrupter = threading.Thread(target=_interrupt_when_waiting, args=(delay, woken), daemon=True)
        interrupter.start()
        started = time.monotonic()

        assert delay.wait(30) is False
        assert time.monotonic() - started < 5
        interrupter.join(timeout=5)
        assert woken == [True]
        mock_logger.warning.assert_called_once()

    @patch("hafetch.utils.for_core.backoff.logger")
    def test_interrupt_without_waiter_is_ignored(self, mock_logger):
        delay = BackoffDelay()

        assert delay.interrupt() is False
        started = time.monotonic()
        assert delay.wait(0.1) is True
        assert time.monotonic() - started >= 0.09
        mock_logger.warning.assert_not_called()

    @patch("hafetch.utils.for_core.backoff.logger")
    def test_interrupt_only_wakes_current_wait(self, _mock_logger):
        delay = BackoffDelay()
        interrupter = threading.Thread(target=_interrupt_when_waiting, args=(delay, []), daemon=True)
        interrupter.start()

        assert delay.wait(30) is False
        interrupter.join(timeout=5)
        started = time.monotonic()
        assert delay.wait(0.05) is True
        assert time.monotonic() - started >= 0.04


class TestCreateProbeRetrying:
    """Tests for the per-candidate Retrying factory."""

    @patch("hafetch.utils.for_core.backoff.logger")
    def test_stops_after_max_attempts(self, _mock_logger):
        calls = []
        delay = _RecordingDelay()

        def probe(url):
            calls.append(url)
            return False

        result = create_probe_retrying("rm1", 3, 1.0, delay)(probe, "http://rm1")

        assert result is False
        assert calls == ["http://rm1"] * 3
        assert delay.waits == [1.0, 1.0]

    def test_success_returns_true_without_waiting(self):
        delay = _RecordingDelay()
        assert create_probe_retrying("rm1", 2, 1.0, delay)(lambda url: True, "u") is True
        assert delay.waits == []

    @patch("hafetch.utils.for_core.backoff.logger")
    def test_recovers_on_later_attempt(self, mock_logger):
        outcomes = iter([False, True])
        delay = _RecordingDelay()

        assert create_probe_retrying("rm1", 2, 0.5, delay)(lambda url: next(outcomes), "u") is True
        assert delay.waits == [0.5]
        message = mock_logger.info.call_args.args[0]
        assert "rm1 failed for 1 times" in message

    def test_passed_deadline_stops_after_first_attempt(self):
        calls = []
        delay = _RecordingDelay()

        def probe(url):
            calls.append(url)
            return False

        retrying = create_probe_retrying("rm1", 5, 1.0, delay, deadline_at=time.monotonic() - 1)

        assert retrying(probe, "u") is False
        assert calls == ["u"]
        assert delay.waits == []

    @patch("hafetch.utils.for_core.backoff.logger")
    def test_wait_capped_by_deadline(self, _mock_logger):
        delay = _RecordingDelay()
        retrying = create_probe_retrying("rm1", 2, 60.0, delay, deadline_at=time.monotonic() + 5)

        retrying(lambda url: False, "u")

        assert len(delay.waits) == 1
        assert delay.waits[0] <= 5


class TestDeadlineHelpers:
    def test_no_deadline(self):
        assert remaining_until(None) is None
        assert deadline_passed(None) is False

    def test_future_and_past(self):
        now = time.monotonic()
        assert 0 < remaining_until(now + 10) <= 10
        assert remaining_until(now - 10) == 0.0
        assert deadline_passed(now - 1) is True
        assert deadline_passed(now + 10) is False
