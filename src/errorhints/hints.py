from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import yaml

LOG = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "hints.yml"


class CatalogError(Exception):
    """Base class for failures while loading a hint catalog."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class NotFoundError(CatalogError, FileNotFoundError):
    """The catalog document is missing or unreadable."""


class ParseError(CatalogError, ValueError):
    """The catalog document is malformed or does not match the expected shape."""


@dataclass(frozen=True)
class HintRecord:
    type: str
    hint: str

    @property
    def label(self) -> str:
        return f"{self.type}: {self.hint}"


def load_catalog(path: Path) -> List[HintRecord]:
    """Read a YAML hint catalog and return its records in source order.

    The document must be a mapping with an ``errors`` sequence whose entries
    each carry string ``type`` and ``hint`` fields.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"Hint catalog {path} was not found.", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Hint catalog {path} is not valid UTF-8: {exc}", path) from exc
    except OSError as exc:
        raise NotFoundError(f"Hint catalog {path} could not be read: {exc}", path) from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Hint catalog {path} is not valid YAML: {exc}", path) from exc

    if not isinstance(data, dict):
        raise ParseError(f"Hint catalog {path} must be a mapping with an 'errors' key.", path)
    if "errors" not in data:
        raise ParseError(f"Hint catalog {path} has no 'errors' key.", path)
    entries = data["errors"]
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ParseError(f"'errors' in {path} must be a list.", path)

    records = []
    for position, entry in enumerate(entries):
        records.append(_record_from_entry(entry, position, path))
    LOG.debug("Loaded %d hints from %s", len(records), path)
    return records


def _record_from_entry(entry, position: int, path: Path) -> HintRecord:
    if not isinstance(entry, dict):
        raise ParseError(f"errors[{position}] in {path} must be a mapping.", path)
    for key in ("type", "hint"):
        if key not in entry:
            raise ParseError(f"errors[{position}] in {path} is missing '{key}'.", path)
        if not isinstance(entry[key], str):
            raise ParseError(f"errors[{position}].{key} in {path} must be a string.", path)
    return HintRecord(type=entry["type"], hint=entry["hint"])


class HintCatalog:
    """Hint records from one catalog file, loaded on first use."""

    def __init__(self, path: Path = DEFAULT_CATALOG_PATH):
        self.path = Path(path)
        self._records: Optional[List[HintRecord]] = None

    @property
    def loaded(self) -> bool:
        return self._records is not None

    @property
    def records(self) -> List[HintRecord]:
        if self._records is None:
            self._records = load_catalog(self.path)
        return self._records

    def reload(self) -> List[HintRecord]:
        self._records = load_catalog(self.path)
        return self._records

    def __iter__(self) -> Iterator[HintRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
