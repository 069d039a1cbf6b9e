import fnmatch
import logging
import re
from typing import List, Optional, Tuple

from redirector_app.database import store
from redirector_app.exceptions import (
    CodeExistsError,
    ConfigurationError,
    InvalidMappingError,
    NotFoundError
)
from redirector_app.models.mapping import DomainHandle, MappingEntry
from redirector_app.publishers.factory import PublisherRegistry
from redirector_app.schemas.config import placeholder_text
from redirector_app.services.short_code_strategies import (
    ShortCodeStrategy,
    SpeakableShortCodeStrategy
)

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^https?://")


def looks_like_url(value: str) -> bool:
    return bool(URL_PATTERN.match(value or ""))


def swap_if_inverted(url: str, code: str) -> Tuple[str, str]:
    """
    Tolerate callers that pass (code, url) instead of (url, code).

    If `url` is not an absolute http(s) URL but `code` is, the two are
    swapped. Anything else is returned unchanged.
    """
    if not looks_like_url(url) and looks_like_url(code):
        logger.debug("Arguments look inverted, swapping %r and %r", url, code)
        return code, url
    return url, code


class MappingService:
    """
    CRUD operations on one domain's mapping database.

    Dependencies are injected (not created internally):
    - handle: which database and config file to use
    - code_strategy: how random codes are generated
    - registry: which publisher serves which backend type

    Every mutating call reads the whole file, changes the in-memory copy
    and rewrites the whole file atomically. There is no cache: the file is
    the mapping set.
    """

    def __init__(
        self,
        handle: DomainHandle,
        code_strategy: Optional[ShortCodeStrategy] = None,
        registry: Optional[PublisherRegistry] = None
    ):
        self.handle = handle
        self.code_strategy = code_strategy or SpeakableShortCodeStrategy()
        self.registry = registry or PublisherRegistry.default()

    def init(self) -> bool:
        """
        Create the root directory, the database and a config placeholder.

        Returns False (and leaves the config alone) if the database already
        exists, True if it was created.
        """
        handle = self.handle
        handle.root.mkdir(parents=True, exist_ok=True)

        if handle.database_path.exists():
            logger.info("Database %s already exists", handle.database_path)
            return False

        handle.database_path.touch(exist_ok=False)
        logger.info("Created database %s", handle.database_path)

        if not handle.config_path.exists():
            store.write_config_text(handle.config_path, placeholder_text(handle.domain))
            logger.info("Created config %s with placeholder for %s",
                        handle.config_path, handle.domain)
            return True

        try:
            store.read_config_entry(handle.config_path, handle.domain)
        except NotFoundError:
            # Expected for a new domain
            store.append_config_text(handle.config_path, placeholder_text(handle.domain))
            logger.info("Added placeholder for %s to %s", handle.domain, handle.config_path)
        else:
            logger.info("Config %s already has an entry for %s",
                        handle.config_path, handle.domain)

        return True

    def list(self, code_glob: str = "") -> List[MappingEntry]:
        """
        Return mappings sorted by code.

        An empty glob returns everything. Otherwise only codes matching the
        shell-style pattern (case-sensitive) are returned.
        """
        mappings = store.read_mappings(self.handle.database_path)
        codes = sorted(mappings)
        if code_glob:
            codes = [code for code in codes if fnmatch.fnmatchcase(code, code_glob)]
        return [MappingEntry(code=code, url=mappings[code]) for code in codes]

    def add(self, url: str, code: str = "") -> str:
        """
        Add a mapping and return the code used.

        With no code, a random unused one is generated. Re-adding an
        identical mapping is a no-op; reusing a code for a different url
        raises CodeExistsError.
        """
        if code:
            url, code = swap_if_inverted(url, code)
        if not url:
            raise InvalidMappingError("url must not be empty")

        mappings = store.read_mappings(self.handle.database_path)

        if not code:
            code = self.code_strategy.generate(mappings)
            logger.debug("Generated code %s", code)
        else:
            existing = mappings.get(code)
            if existing is not None:
                if existing == url:
                    logger.info("Mapping %s => %s already present", code, url)
                    return code
                raise CodeExistsError(code, existing)

        mappings[code] = url
        store.write_mappings(self.handle.database_path, mappings)
        logger.info("Added %s => %s", code, url)
        return code

    def update(self, url: str, code: str) -> None:
        """Point an existing code at a new url (no-op if unchanged)"""
        url, code = swap_if_inverted(url, code)
        if not url:
            raise InvalidMappingError("url must not be empty")

        mappings = store.read_mappings(self.handle.database_path)
        existing = mappings.get(code)
        if existing is None:
            raise NotFoundError(f"code {code!r} not found in {self.handle.database_path}")

        if existing == url:
            logger.info("Mapping %s => %s unchanged", code, url)
            return

        mappings[code] = url
        store.write_mappings(self.handle.database_path, mappings)
        logger.info("Updated %s => %s (was %s)", code, url, existing)

    def remove(self, code: str) -> None:
        """Remove the mapping for `code`, raising NotFoundError if absent"""
        mappings = store.read_mappings(self.handle.database_path)
        if code not in mappings:
            raise NotFoundError(f"code {code!r} not found in {self.handle.database_path}")

        del mappings[code]
        store.write_mappings(self.handle.database_path, mappings)
        logger.info("Removed %s", code)

    def push(self) -> None:
        """
        Publish all mappings via the backend named in the domain's config.

        Raises ConfigurationError if the entry has no type or the type has
        no registered publisher. Publisher errors propagate unchanged.
        """
        handle = self.handle
        config = store.read_config_entry(handle.config_path, handle.domain)

        if not config.type:
            raise ConfigurationError(
                f"no 'type' field found for {handle.domain!r} in config {handle.config_path}"
            )

        publisher = self.registry.get(config.type)
        if publisher is None:
            raise ConfigurationError(
                f"invalid type {config.type!r} found for {handle.domain!r} "
                f"in config {handle.config_path} (known: {', '.join(self.registry.kinds())})"
            )

        mappings = store.read_mappings(handle.database_path)
        logger.info("Pushing %d mappings for %s via %s",
                    len(mappings), handle.domain, config.type)
        publisher.publish(handle, config, mappings)
