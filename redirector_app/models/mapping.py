"""
Core data model: which database we are working on, and what is in it.

A domain owns exactly one mapping database (<root>/<domain>.yml) and one
entry in the config file shared by every domain under the same root.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DATABASE_SUFFIX = ".yml"
CONFIG_FILENAME = "redirector.yml"


class ReservedCode(str, Enum):
    """Codes with a meaning beyond a plain /<code> redirect"""
    INDEX = "INDEX"  # redirect for the domain root ("/")


@dataclass(frozen=True)
class DomainHandle:
    """
    Resolved locations for one domain's database.
    
    Build it with DomainHandle.create(root, domain); the two paths are
    always derived from root and domain, never set independently.
    """
    root: Path
    domain: str
    database_path: Path
    config_path: Path

    @classmethod
    def create(cls, root: Path, domain: str) -> "DomainHandle":
        root = Path(root).expanduser().absolute()
        return cls(
            root=root,
            domain=domain,
            database_path=root / f"{domain}{DATABASE_SUFFIX}",
            config_path=root / CONFIG_FILENAME,
        )


@dataclass(frozen=True)
class MappingEntry:
    """A single code -> url mapping as returned by listings."""
    code: str
    url: str

    @property
    def is_index(self) -> bool:
        return self.code == ReservedCode.INDEX.value
