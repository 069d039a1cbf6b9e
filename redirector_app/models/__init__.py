"""
Core data model for the redirector.

Note: There is no database engine. A domain's mapping set is exactly the
contents of its YAML file, so these are plain immutable value objects.
"""

from .mapping import (
    CONFIG_FILENAME,
    DATABASE_SUFFIX,
    DomainHandle,
    MappingEntry,
    ReservedCode,
)

__all__ = [
    "CONFIG_FILENAME",
    "DATABASE_SUFFIX",
    "DomainHandle",
    "MappingEntry",
    "ReservedCode",
]
