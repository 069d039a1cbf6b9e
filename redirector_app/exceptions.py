"""
Exception hierarchy for the redirector.

Every error the core raises on purpose derives from RedirectorError, so
callers can tell "the operation was refused" apart from plain filesystem
failures (OSError), which are never wrapped.
"""


class RedirectorError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigurationError(RedirectorError):
    """Raised when the domain cannot be resolved or a backend is not configured."""
    pass


class NotFoundError(RedirectorError):
    """Raised when a code, or a domain's config entry, does not exist."""
    pass


class CodeExistsError(RedirectorError):
    """Raised when an explicit code is already mapped to a different URL."""

    def __init__(self, code: str, existing_url: str):
        super().__init__(f"code {code!r} already exists (mapped to {existing_url!r})")
        self.code = code
        self.existing_url = existing_url


class ExhaustedError(RedirectorError):
    """Raised when no unused short code could be generated."""
    pass


class StoreFormatError(RedirectorError):
    """Raised when a database or config file is not a YAML mapping."""
    pass


class PublishError(RedirectorError):
    """Raised when a publisher fails to deliver mappings to its backend."""
    pass


class InvalidMappingError(RedirectorError):
    """Raised when a mapping is missing its url or code."""
    pass
