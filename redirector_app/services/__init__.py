"""
Service layer: the mapping engine and the code generators it relies on.
"""

from .mapping_service import MappingService
from .short_code_strategies import ShortCodeStrategy, SpeakableShortCodeStrategy

__all__ = [
    "MappingService",
    "ShortCodeStrategy",
    "SpeakableShortCodeStrategy",
]
