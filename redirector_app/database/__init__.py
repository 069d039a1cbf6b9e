"""
Storage layer: locating a domain's files and reading/writing them atomically.
"""

from .locator import Locator, default_root, user_config_dir
from . import store

__all__ = [
    "Locator",
    "default_root",
    "user_config_dir",
    "store",
]
