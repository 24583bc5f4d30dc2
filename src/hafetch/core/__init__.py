"""Endpoint selection and the stream event record."""

from .endpoint_selector import EndpointSelector, create_selector
from .stream_event import StreamEvent

__all__ = ["EndpointSelector", "StreamEvent", "create_selector"]
