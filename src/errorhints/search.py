from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .hints import HintCatalog, HintRecord

LOG = logging.getLogger(__name__)

Observer = Callable[[], None]


class SearchState(str, Enum):
    IDLE = "idle"
    POPULATED = "populated"


@dataclass(frozen=True)
class ErrorHint:
    label: str


@dataclass(frozen=True)
class TreeItem:
    label: str
    tooltip: str


def is_blank_query(message: Optional[str]) -> bool:
    """Return True for input the front ends should not search for."""
    return not message or not message.strip()


def match_records(records: List[HintRecord], query: str) -> List[HintRecord]:
    """Records whose type contains ``query`` (case-sensitive), in catalog order."""
    return [record for record in records if query in record.type]


class HintSearchEngine:
    """Substring search over a hint catalog with change notification.

    Results are replaced wholesale on every successful search and observers are
    called once each afterwards. A failed search raises the loader error and
    leaves the previous results in place. Concurrent searches are
    last-write-wins on the result set.
    """

    def __init__(self, catalog: HintCatalog, *, reload_on_search: bool = False):
        self.catalog = catalog
        self.reload_on_search = reload_on_search
        self._results: List[ErrorHint] = []
        self._query: Optional[str] = None
        self._state = SearchState.IDLE
        self._observers: List[Observer] = []
        self._lock = threading.Lock()

    @property
    def results(self) -> List[ErrorHint]:
        with self._lock:
            return list(self._results)

    @property
    def query(self) -> Optional[str]:
        return self._query

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def reload(self) -> int:
        records = self.catalog.reload()
        LOG.info("Reloaded %d hints from %s", len(records), self.catalog.path)
        return len(records)

    def search(self, query: str) -> List[ErrorHint]:
        LOG.info("Searching for: %s", query)
        records = self.catalog.reload() if self.reload_on_search else self.catalog.records
        found = []
        for record in match_records(records, query):
            LOG.debug("Found hint: %s", record.label)
            found.append(ErrorHint(label=record.label))
        if not found:
            LOG.info("No hints found")

        with self._lock:
            self._results = found
            self._query = query
            self._state = SearchState.POPULATED
        self._notify()
        return list(found)

    def search_error(self, message: str) -> None:
        self.search(message)

    def get_tree_item(self, element: ErrorHint) -> TreeItem:
        return TreeItem(label=element.label, tooltip=element.label)

    def get_children(self, element: Optional[ErrorHint] = None) -> List[ErrorHint]:
        if element is not None:
            return []
        return self.results

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer()
            except Exception:  # noqa: BLE001
                LOG.exception("Observer %r failed", observer)
