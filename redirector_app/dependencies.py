"""
Wiring for the command line layer.

This is the only place where Settings (environment, .env) meet the core:
values are read once here and passed into the Locator, the code strategy
and the publisher registry explicitly.

Pattern: Dependency Injection
- Core classes never read the environment
- Tests build the same objects with their own values
"""

from typing import Optional

from redirector_app.config import Settings, get_settings
from redirector_app.database.locator import Locator
from redirector_app.models.mapping import DomainHandle
from redirector_app.publishers.factory import PublisherRegistry
from redirector_app.services.mapping_service import MappingService
from redirector_app.services.short_code_strategies import (
    ShortCodeStrategy,
    SpeakableShortCodeStrategy
)


def get_locator(settings: Optional[Settings] = None) -> Locator:
    settings = settings or get_settings()
    return Locator.from_settings(settings)


def get_code_strategy(settings: Optional[Settings] = None) -> ShortCodeStrategy:
    settings = settings or get_settings()
    return SpeakableShortCodeStrategy(
        min_length=settings.min_code_length,
        max_length=settings.max_code_length,
        max_attempts=settings.max_code_attempts
    )


def get_handle(domain: str = "", settings: Optional[Settings] = None) -> DomainHandle:
    """Resolve the handle for `domain` (or the configured/inferred one)"""
    return get_locator(settings).resolve(domain)


def get_mapping_service(
    domain: str = "",
    settings: Optional[Settings] = None
) -> MappingService:
    """
    Get MappingService with all dependencies injected.

    Raises:
        ConfigurationError: If no domain can be resolved
    """
    settings = settings or get_settings()
    return MappingService(
        handle=get_handle(domain, settings),
        code_strategy=get_code_strategy(settings),
        registry=PublisherRegistry.default(settings)
    )
