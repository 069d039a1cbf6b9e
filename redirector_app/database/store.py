"""
Whole-file YAML persistence for mapping databases and the shared config file.

Every write goes through atomic_write(): the new content is written to a
hidden temporary sibling and renamed over the target, so a reader sees
either the old complete file or the new complete file. Nothing ever edits
a file in place.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Union

import yaml
from pydantic import ValidationError

from redirector_app.exceptions import NotFoundError, StoreFormatError
from redirector_app.schemas.config import ConfigEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DATABASE_MODE = 0o644
CONFIG_MODE = 0o600  # config entries may carry credentials


def atomic_write(path: PathLike, data: str, mode: int = DATABASE_MODE) -> None:
    """
    Replace `path` with `data` in one rename.

    The temporary file lives in the same directory as the target so the
    final os.replace() never crosses filesystems. If anything fails the
    temporary file is removed and the OSError propagates untouched.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _load_yaml_mapping(path: Path) -> dict:
    """Parse `path` as a YAML mapping; an empty document is an empty mapping."""
    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StoreFormatError(f"Failed to parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise StoreFormatError(
            f"Expected a mapping in {path}, found {type(data).__name__}"
        )
    return data


def read_mappings(path: PathLike) -> Dict[str, str]:
    """
    Read a domain's full code -> url mapping set.

    A missing or empty file is an empty set, not an error.
    """
    path = Path(path)
    try:
        data = _load_yaml_mapping(path)
    except FileNotFoundError:
        return {}

    return {
        _scalar_text(path, "code", code): _scalar_text(path, "url", url)
        for code, url in data.items()
    }


def _scalar_text(path: Path, what: str, value) -> str:
    """
    Text of a code or url as read from YAML.

    Numbers are accepted (hand-edited codes like 2024 load as ints). Nulls,
    booleans (yes/no/on/off) and nested values would not survive a
    rewrite, so they are refused.
    """
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise StoreFormatError(
        f"Invalid {what} {value!r} in {path}: quote it or give it a non-empty value"
    )


def write_mappings(path: PathLike, mappings: Mapping[str, str]) -> None:
    """Serialize `mappings` (sorted by code) and atomically replace `path`."""
    data = yaml.safe_dump(
        dict(mappings),
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True,
    )
    atomic_write(path, data, DATABASE_MODE)
    logger.debug("Wrote %d mappings to %s", len(mappings), path)


def read_config(path: PathLike) -> Dict[str, ConfigEntry]:
    """
    Read every domain's entry from the shared config file.

    Raises FileNotFoundError if the file does not exist; callers that
    treat that as "no config yet" catch it themselves.
    """
    data = _load_yaml_mapping(Path(path))
    entries = {}
    for domain, entry in data.items():
        if entry is None:
            # placeholder: domain key with all fields commented out
            entry = {}
        if not isinstance(entry, dict):
            raise StoreFormatError(
                f"Config entry for {domain!r} in {path} is not a mapping"
            )
        try:
            entries[str(domain)] = ConfigEntry.model_validate(entry)
        except ValidationError as e:
            raise StoreFormatError(f"Invalid config entry for {domain!r} in {path}: {e}") from e
    return entries


def read_config_entry(path: PathLike, domain: str) -> ConfigEntry:
    """Return the config entry for `domain`, or raise NotFoundError."""
    entries = read_config(path)
    if domain not in entries:
        raise NotFoundError(f"no entry for {domain!r} in config {path}")
    return entries[domain]


def write_config_text(path: PathLike, text: str) -> None:
    """Atomically replace the config file with raw `text`."""
    atomic_write(path, text, CONFIG_MODE)


def append_config_text(path: PathLike, text: str) -> None:
    """
    Atomically rewrite the config file with `text` appended.

    The existing content is kept byte for byte (comments included) so
    entries for other domains survive.
    """
    path = Path(path)
    existing = path.read_text(encoding="utf-8")
    if existing and not existing.endswith("\n"):
        existing += "\n"
    atomic_write(path, existing + text, CONFIG_MODE)
