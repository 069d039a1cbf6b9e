"""
Resolves which root directory and which domain database to use.

Resolution is pure path arithmetic: nothing is created and nothing has to
exist, except that the root is listed when the domain has to be inferred.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from redirector_app.config import Settings
from redirector_app.exceptions import ConfigurationError
from redirector_app.models.mapping import DATABASE_SUFFIX, DomainHandle

logger = logging.getLogger(__name__)

APP_DIRNAME = "redirector"

# Database names are fully-qualified domains, so they contain at least one
# dot before the suffix. This keeps the config file itself out of the match.
DATABASE_GLOB = f"*.*{DATABASE_SUFFIX}"


def user_config_dir() -> Path:
    """Per-user configuration directory for the current platform."""
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigurationError("%APPDATA% is not defined")
        return Path(appdata)

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def default_root() -> Path:
    return user_config_dir() / APP_DIRNAME


class Locator:
    """
    Derives a DomainHandle from explicit values.

    `root` and `domain` are the configured overrides (typically
    REDIRECTOR_ROOT and REDIRECTOR_DOMAIN, already read by Settings).
    The locator itself never reads the environment for them.
    """

    def __init__(self, root: Optional[Path] = None, domain: Optional[str] = None):
        self.root = Path(root).expanduser() if root else default_root()
        self.domain = domain or ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "Locator":
        return cls(root=settings.root, domain=settings.domain)

    def infer_domain(self) -> str:
        """
        Return the domain of the only database under root, or "".

        Zero or several candidate databases are both ambiguous.
        """
        matches = sorted(self.root.glob(DATABASE_GLOB))
        if len(matches) != 1:
            logger.debug(
                "Cannot infer domain: %d databases under %s", len(matches), self.root
            )
            return ""
        return matches[0].name[: -len(DATABASE_SUFFIX)]

    def resolve(self, domain: str = "") -> DomainHandle:
        """
        Resolve the handle for `domain`.

        Order: explicit argument, configured domain, single database under
        root. Raises ConfigurationError if none of them yields a domain.
        """
        domain = domain or self.domain or self.infer_domain()
        if not domain:
            raise ConfigurationError(
                "domain not specified: pass it explicitly or set REDIRECTOR_DOMAIN"
            )

        handle = DomainHandle.create(self.root, domain)
        logger.debug("Resolved domain %s -> %s", domain, handle.database_path)
        return handle
