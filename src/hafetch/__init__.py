"""hafetch - HA-aware endpoint selection for redundant services.

The main entry point is ``EndpointSelector``: given the ordered endpoints of
an active/standby service (such as the resource managers of a YARN cluster) it
tracks the one currently believed reachable and fails over, one scan at a
time, when it stops answering.

Quick Start:
    >>> from hafetch import EndpointSelector, CompressionType
    >>>
    >>> selector = EndpointSelector(
    ...     ["http://rm1:8088", "http://rm2:8088"],
    ...     CompressionType.GZIP,
    ... )
    >>> selector.verify()  # probe, fail over if needed
    >>> base_url = selector.get_current_endpoint()

Failover semantics:
1. Candidates are always rescanned from the first configured one
2. Each candidate gets a fixed number of probes with a fixed delay
3. ``NoAliveEndpointError`` is raised when no candidate answers
"""

__version__ = "0.1.0"

from typing import Any


# Lazy imports keep ``import hafetch`` cheap and free of httpx side effects
def __getattr__(name: str) -> Any:
    """Lazy import for main package exports."""
    if name == "EndpointSelector":
        from .core.endpoint_selector import EndpointSelector

        return EndpointSelector
    if name == "create_selector":
        from .core.endpoint_selector import create_selector

        return create_selector
    if name == "StreamEvent":
        from .core.stream_event import StreamEvent

        return StreamEvent
    if name == "CompressionType":
        from .utils.config import CompressionType

        return CompressionType
    if name == "SelectorConfig":
        from .utils.config import SelectorConfig

        return SelectorConfig
    if name == "HAFetchError":
        from .utils.for_core.selector_exceptions import HAFetchError

        return HAFetchError
    if name == "NoAliveEndpointError":
        from .utils.for_core.selector_exceptions import NoAliveEndpointError

        return NoAliveEndpointError
    if name == "StreamFetchError":
        from .utils.network.exceptions import StreamFetchError

        return StreamFetchError
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "CompressionType",
    "EndpointSelector",
    "HAFetchError",
    "NoAliveEndpointError",
    "SelectorConfig",
    "StreamEvent",
    "StreamFetchError",
    "create_selector",
]
