"""
Registry of publishers, keyed by the backend `type` in the config file.
New backends register here; the mapping service only looks them up.
"""

from enum import Enum
from typing import Dict, List, Optional

from .strategies import PublisherStrategy, RenderPublisher, S3Publisher
from redirector_app.config import Settings


class BackendType(Enum):
    """Built-in backend kinds"""
    RENDER = "render"
    S3 = "s3"


class PublisherRegistry:
    """
    Maps backend kind tags to publisher instances.

    Unlike a factory switch, the registry is open: anything implementing
    PublisherStrategy can be registered under a new tag without touching
    the dispatch code.
    """

    def __init__(self):
        self._publishers: Dict[str, PublisherStrategy] = {}

    def register(self, kind, publisher: PublisherStrategy) -> None:
        """
        Register `publisher` for `kind` (a BackendType or a plain string).
        Registering an existing kind replaces the previous publisher.
        """
        if not isinstance(publisher, PublisherStrategy):
            raise TypeError(f"{publisher!r} is not a PublisherStrategy")
        self._publishers[self._tag(kind)] = publisher

    def get(self, kind) -> Optional[PublisherStrategy]:
        """Return the publisher for `kind`, or None if nothing is registered"""
        return self._publishers.get(self._tag(kind))

    def kinds(self) -> List[str]:
        return sorted(self._publishers)

    @staticmethod
    def _tag(kind) -> str:
        if isinstance(kind, BackendType):
            return kind.value
        return str(kind)

    @classmethod
    def default(cls, settings: Optional[Settings] = None) -> "PublisherRegistry":
        """
        Registry with the built-in publishers.

        Args:
            settings: Used for publisher tuning (push timeout).
                      If None, defaults are used.
        """
        timeout = settings.push_timeout if settings is not None else 10.0

        registry = cls()
        registry.register(BackendType.RENDER, RenderPublisher())
        registry.register(BackendType.S3, S3Publisher(timeout=timeout))
        return registry
