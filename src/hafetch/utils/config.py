#!/usr/bin/env python
"""Centralized configuration for endpoint selection and probing.

Module-level constants are the defaults; ``SelectorConfig`` is the validated,
immutable bundle a selector is constructed with.
"""

import os
from enum import Enum
from typing import Any, Final

import attrs

# Failover backoff policy
DEFAULT_MAX_ATTEMPTS_PER_CANDIDATE: Final[int] = 2
DEFAULT_DELAY_BETWEEN_ATTEMPTS: Final[float] = 1.0  # Seconds
DEFAULT_RESELECT_DEADLINE: Final[float | None] = None  # No overall bound on a scan

# HTTP settings
DEFAULT_HTTP_TIMEOUT_SECONDS: Final[float] = 60.0  # Connect and read timeout for probes
DEFAULT_MAX_CONNECTIONS: Final[int] = 10
HTTP_OK: Final = 200
HTTP_ERROR_CODE_THRESHOLD: Final = 300  # Anything outside 2xx fails a probe

# Resource manager liveness path
RM_CLUSTER_INFO_PATH: Final[str] = "ws/v1/cluster/info"
ANONYMOUS_PARAMETER: Final[str] = "anonymous=true"

# Event rendering
EVENT_TIME_FORMAT: Final[str] = "YYYY-MM-DD HH:mm:ss,SSS"
EVENT_TIMEZONE: Final[str] = "UTC"

ENV_PREFIX: Final[str] = "HAFETCH_"


class CompressionType(Enum):
    """Compression hint handed through to the stream fetcher."""

    NONE = "identity"
    GZIP = "gzip"


def _parse_optional_float_env(env_var: str, default: float | None) -> float | None:
    """Parse an optional float from the environment.

    Empty strings and ``none`` map to None.
    """
    env_value = os.getenv(env_var)
    if env_value is None:
        return default
    if env_value.strip().lower() in ("", "none"):
        return None
    return float(env_value)


def _positive(_instance: Any, attribute: attrs.Attribute, value: float | int) -> None:
    if value <= 0:
        raise ValueError(f"{attribute.name} must be > 0, got {value}")


def _non_negative(_instance: Any, attribute: attrs.Attribute, value: float) -> None:
    if value < 0:
        raise ValueError(f"{attribute.name} must be >= 0, got {value}")


@attrs.define(slots=True, frozen=True)
class SelectorConfig:
    """Backoff and probing policy for an EndpointSelector.

    Attributes:
        max_attempts_per_candidate: Probes per candidate before moving on.
        delay_between_attempts: Seconds to wait after a failed probe before
            probing the same candidate again. There is no wait after a
            candidate's last attempt: the scan moves on to the next candidate
            at once, so failover is faster than in selectors that also sleep
            before switching candidates.
        reselect_deadline: Optional upper bound in seconds on one failover
            scan. None keeps the scan bounded only by attempts and delays.
        probe_timeout: Timeout in seconds used by the default HTTP fetcher.

    Example:
        >>> config = SelectorConfig(max_attempts_per_candidate=3, delay_between_attempts=0.5)
        >>> config.max_attempts_per_candidate
        3
    """

    max_attempts_per_candidate: int = attrs.field(
        default=DEFAULT_MAX_ATTEMPTS_PER_CANDIDATE,
        validator=[attrs.validators.instance_of(int), _positive],
    )
    delay_between_attempts: float = attrs.field(
        default=DEFAULT_DELAY_BETWEEN_ATTEMPTS,
        converter=float,
        validator=_non_negative,
    )
    reselect_deadline: float | None = attrs.field(
        default=DEFAULT_RESELECT_DEADLINE,
        converter=attrs.converters.optional(float),
        validator=attrs.validators.optional(_positive),
    )
    probe_timeout: float = attrs.field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        converter=float,
        validator=_positive,
    )

    @classmethod
    def from_env(cls, **overrides: Any) -> "SelectorConfig":
        """Build a config from ``HAFETCH_*`` environment variables.

        Recognised variables: HAFETCH_MAX_ATTEMPTS, HAFETCH_RETRY_DELAY,
        HAFETCH_RESELECT_DEADLINE, HAFETCH_PROBE_TIMEOUT. Keyword overrides win
        over the environment.
        """
        values: dict[str, Any] = {}

        max_attempts = os.getenv(f"{ENV_PREFIX}MAX_ATTEMPTS")
        if max_attempts is not None:
            values["max_attempts_per_candidate"] = int(max_attempts)

        retry_delay = os.getenv(f"{ENV_PREFIX}RETRY_DELAY")
        if retry_delay is not None:
            values["delay_between_attempts"] = float(retry_delay)

        values["reselect_deadline"] = _parse_optional_float_env(
            f"{ENV_PREFIX}RESELECT_DEADLINE", DEFAULT_RESELECT_DEADLINE
        )

        probe_timeout = os.getenv(f"{ENV_PREFIX}PROBE_TIMEOUT")
        if probe_timeout is not None:
            values["probe_timeout"] = float(probe_timeout)

        values.update(overrides)
        return cls(**values)


def parse_endpoints(raw: str) -> list[str]:
    """Split a comma separated endpoint list, dropping blanks.

    >>> parse_endpoints("http://rm1:8088, http://rm2:8088,")
    ['http://rm1:8088', 'http://rm2:8088']
    """
    return [part.strip() for part in raw.split(",") if part.strip()]
