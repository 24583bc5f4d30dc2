"""Fakes for endpoint selector tests.

The selector's collaborators are injected, so failover can be exercised
deterministically without network I/O or real sleeps.
"""

import threading

import pytest

from hafetch.utils.config import CompressionType, SelectorConfig
from hafetch.utils.for_core.backoff import BackoffDelay
from hafetch.utils.network.exceptions import StreamFetchError


class FakeStream:
    """Closeable stand-in for an opened response stream."""

    def __init__(self, close_error: Exception | None = None):
        self.closed = False
        self._close_error = close_error

    def close(self):
        self.closed = True
        if self._close_error is not None:
            raise self._close_error


class PassthroughURLBuilder:
    """Probe URL is the endpoint itself, so fetcher calls read as endpoints."""

    def __init__(self):
        self.built = []

    def build(self, endpoint):
        self.built.append(endpoint)
        return endpoint


class ScriptedFetcher:
    """Fetcher whose outcomes are scripted per URL.

    Each script entry is a bool or exception, or a list of them consumed in
    order with the last one repeating. True opens a stream, False raises
    StreamFetchError, an exception instance is raised as is. URLs missing
    from the script fail.
    """

    def __init__(self, script=None):
        self.script = {url: list(outcomes) if isinstance(outcomes, list) else [outcomes]
                       for url, outcomes in (script or {}).items()}
        self.calls = []
        self.compressions = []
        self.streams = []
        self._lock = threading.Lock()

    def set(self, url, outcomes):
        self.script[url] = list(outcomes) if isinstance(outcomes, list) else [outcomes]

    def open(self, url, compression):
        with self._lock:
            self.calls.append(url)
            self.compressions.append(compression)
            outcomes = self.script.get(url, [False])
            outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if outcome is True:
            stream = FakeStream()
            self.streams.append(stream)
            return stream
        if outcome is False:
            raise StreamFetchError(url, status_code=503)
        raise outcome

    def count(self, url):
        return self.calls.count(url)


class RecordingDelay(BackoffDelay):
    """BackoffDelay that records requested waits instead of sleeping."""

    def __init__(self):
        super().__init__()
        self.waits = []

    def wait(self, seconds):
        self.waits.append(seconds)
        return True


@pytest.fixture
def fetcher():
    return ScriptedFetcher()


@pytest.fixture
def url_builder():
    return PassthroughURLBuilder()


@pytest.fixture
def delay():
    return RecordingDelay()


@pytest.fixture
def make_selector(fetcher, url_builder, delay):
    """Factory building selectors wired to the shared fakes."""
    from hafetch.core.endpoint_selector import EndpointSelector

    def _make(candidates=("A", "B", "C"), compression=CompressionType.NONE, **config):
        return EndpointSelector(
            candidates,
            compression,
            url_builder=url_builder,
            fetcher=fetcher,
            config=SelectorConfig(**config),
            delay=delay,
        )

    return _make
