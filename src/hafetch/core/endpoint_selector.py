#!/usr/bin/env python
"""HA-aware endpoint selection with serialized failover.

``EndpointSelector`` tracks which of a fixed, ordered list of redundant
endpoints (for example the resource managers of an active/standby YARN
cluster) is currently believed reachable.

Callers fetch the endpoint with ``get_current_endpoint()`` and call
``verify()`` periodically or after real work fails. When the probe of the
current endpoint fails, one caller runs a failover scan over all candidates:

1. Candidates are scanned in configured order, always starting at the first.
2. Each candidate is probed up to ``max_attempts_per_candidate`` times with a
   fixed delay between failed attempts.
3. The first candidate that answers becomes the current endpoint.
4. If none answers, ``NoAliveEndpointError`` is raised and the current
   endpoint is left unchanged.

Only one scan runs at a time per selector. Callers that trigger a failover
while a scan is in flight return immediately and keep using the current
(possibly stale) endpoint.

Example:
    >>> selector = EndpointSelector(["http://rm1:8088", "http://rm2:8088"])
    >>> selector.get_current_endpoint()
    'http://rm1:8088'
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable

from hafetch.utils.config import CompressionType, SelectorConfig, parse_endpoints
from hafetch.utils.for_core.backoff import BackoffDelay, create_probe_retrying, deadline_passed
from hafetch.utils.for_core.selector_exceptions import NoAliveEndpointError
from hafetch.utils.loguru_setup import logger
from hafetch.utils.network.stream_fetch import HttpStreamFetcher, StreamFetcher
from hafetch.utils.network.url_builder import RmActiveTestURLBuilder, ServiceURLBuilder

__all__ = ["EndpointSelector", "create_selector"]


class EndpointSelector:
    """Selects a live endpoint among redundant candidates.

    Args:
        candidates: Ordered, non-empty endpoints. Order is both the default
            selection and the failover scan order.
        compression: Hint passed through to the fetcher on every probe.
        url_builder: Maps an endpoint to its probe URL. Defaults to the
            resource manager cluster info URL.
        fetcher: Opens the probe stream. Defaults to an httpx based fetcher
            owned (and closed) by the selector.
        config: Backoff and timeout policy.
        delay: Delay primitive used between failed probes.

    Raises:
        ValueError: If ``candidates`` is empty or holds a blank entry.
    """

    def __init__(
        self,
        candidates: Iterable[str],
        compression: CompressionType = CompressionType.NONE,
        *,
        url_builder: ServiceURLBuilder | None = None,
        fetcher: StreamFetcher | None = None,
        config: SelectorConfig | None = None,
        delay: BackoffDelay | None = None,
    ) -> None:
        self._candidates: tuple[str, ...] = tuple(candidates)
        if not self._candidates:
            raise ValueError("At least one candidate endpoint is required")
        for candidate in self._candidates:
            if not isinstance(candidate, str) or not candidate.strip():
                raise ValueError(f"Invalid candidate endpoint: {candidate!r}")

        self._compression = compression
        self._config = config if config is not None else SelectorConfig()
        self._url_builder = url_builder if url_builder is not None else RmActiveTestURLBuilder()
        self._owns_fetcher = fetcher is None
        self._fetcher = fetcher if fetcher is not None else HttpStreamFetcher(timeout=self._config.probe_timeout)
        self._delay = delay if delay is not None else BackoffDelay()

        self._selected: str | None = None
        # Held for the whole scan; a failed non-blocking acquire means another
        # thread is already reselecting.
        self._reselect_lock = threading.Lock()

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    @property
    def compression(self) -> CompressionType:
        return self._compression

    @property
    def config(self) -> SelectorConfig:
        return self._config

    @property
    def delay(self) -> BackoffDelay:
        return self._delay

    @property
    def is_reselecting(self) -> bool:
        return self._reselect_lock.locked()

    def get_current_endpoint(self) -> str:
        """Return the current endpoint, defaulting to the first candidate.

        The default is installed without probing. Never blocks.
        """
        selected = self._selected
        if selected is None:
            selected = self._candidates[0]
            self._selected = selected
        return selected

    def verify(self) -> None:
        """Probe the current endpoint and fail over if it does not answer.

        Raises:
            NoAliveEndpointError: If failover found no live candidate.
        """
        endpoint = self.get_current_endpoint()
        if self.probe(self._url_builder.build(endpoint)):
            return
        self.reselect()

    def probe(self, url: str) -> bool:
        """Check liveness by opening a stream against ``url``.

        Any failure from the fetcher counts as "not alive". The opened stream
        is always closed before returning.
        """
        stream = None
        try:
            logger.info(f"Checking endpoint liveness by {url}")
            stream = self._fetcher.open(url, self._compression)
        except Exception as e:
            logger.info(f"Failed to open stream from {url}: {e}")
            return False
        finally:
            if stream is not None:
                try:
                    stream.close()
                except Exception as e:
                    logger.warning(f"Error while closing probe stream for {url}: {e}")
        return True

    def reselect(self) -> str | None:
        """Run a failover scan unless one is already in progress.

        Returns:
            The newly selected endpoint, or None when another thread is
            already reselecting.

        Raises:
            NoAliveEndpointError: If every candidate exhausted its attempts,
                or the configured reselect deadline elapsed.
        """
        if not self._reselect_lock.acquire(blocking=False):
            logger.debug("Reselection already in progress, skipping")
            return None
        try:
            return self._scan_candidates()
        finally:
            self._reselect_lock.release()

    def _scan_candidates(self) -> str:
        logger.info("Going to reselect endpoint")
        config = self._config
        deadline_at = None
        if config.reselect_deadline is not None:
            deadline_at = time.monotonic() + config.reselect_deadline

        stopped_by_deadline = False
        for candidate in self._candidates:
            if deadline_passed(deadline_at):
                stopped_by_deadline = True
                break
            probe_url = self._url_builder.build(candidate)
            retrying = create_probe_retrying(
                candidate,
                config.max_attempts_per_candidate,
                config.delay_between_attempts,
                self._delay,
                deadline_at,
            )
            if retrying(self.probe, probe_url):
                previous = self._selected
                self._selected = candidate
                logger.info(f"Successfully switched to new endpoint: {candidate} (previous: {previous})")
                return candidate
            # Fewer attempts than configured means the deadline cut this candidate short
            attempts_made = retrying.statistics.get("attempt_number", config.max_attempts_per_candidate)
            if attempts_made < config.max_attempts_per_candidate:
                stopped_by_deadline = True
                break

        raise NoAliveEndpointError(
            self._candidates,
            attempts_per_candidate=config.max_attempts_per_candidate,
            deadline_exceeded=stopped_by_deadline,
        )

    def close(self) -> None:
        """Release the fetcher if the selector created it."""
        if self._owns_fetcher and hasattr(self._fetcher, "close"):
            self._fetcher.close()

    def __enter__(self) -> "EndpointSelector":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(candidates={list(self._candidates)!r}, "
            f"selected={self._selected!r}, compression={self._compression.name})"
        )


def create_selector(
    candidates: Iterable[str] | str,
    compression: CompressionType = CompressionType.NONE,
    **config_overrides,
) -> EndpointSelector:
    """Create a selector with configuration read from the environment.

    Args:
        candidates: Endpoints, either as an iterable or a comma separated string.
        compression: Compression hint for probes.
        **config_overrides: ``SelectorConfig`` fields overriding ``HAFETCH_*``
            environment variables.
    """
    if isinstance(candidates, str):
        candidates = parse_endpoints(candidates)
    return EndpointSelector(candidates, compression, config=SelectorConfig.from_env(**config_overrides))
