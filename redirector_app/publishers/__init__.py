"""
Publisher module for the redirector.

Implements the Strategy Pattern for pluggable redirect backends. The core
only maintains the mapping data; publishers turn it into something a
static host or object store can serve.
"""

from .strategies import PublisherStrategy, RenderPublisher, S3Publisher
from .factory import PublisherRegistry, BackendType

__all__ = [
    "PublisherStrategy",
    "RenderPublisher",
    "S3Publisher",
    "PublisherRegistry",
    "BackendType",
]
