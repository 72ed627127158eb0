"""Key/value stores standing in for browser local storage.

Pages never touch a global store: they receive a ``KeyValueStore`` so tests can
swap in ``InMemoryStore`` while the app uses a JSON file that survives reloads.
Values are strings, mirroring local storage; use ``read_json`` / ``write_json``
for structured data.
"""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, Dict, Iterable, List, Optional, Protocol

from kpi_dashboard.utils.constants import FOOTBALL_DATA_KEY, TEAM_NAMES_KEY
from kpi_dashboard.utils.types import StatRecord

logger = logging.getLogger("kpi_dashboard")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryStore:
    """Dict-backed store (tests, throwaway sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore:
    """Store persisted as a single JSON object on disk.

    The file is re-read on every access and rewritten on every change, so two
    Streamlit sessions see each other's writes. Writes are not atomic.
    """

    def __init__(self, path: pathlib.Path):
        self.path = pathlib.Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Local storage file {self.path} unreadable, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Local storage file {self.path} is not a JSON object, starting empty")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=0)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def clear(self) -> None:
        self._save({})


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------

def read_json(store: KeyValueStore, key: str, default: Any = None) -> Any:
    """Decode a JSON value; returns default on missing or undecodable entries."""
    raw = store.get(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Ignoring undecodable value stored under '{key}'")
        return default


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, json.dumps(value))


# ---------------------------------------------------------------------------
# Football data cache
# ---------------------------------------------------------------------------

def save_football_data(store: KeyValueStore, records: List[StatRecord]) -> None:
    """Persist the last fetched dataset (overwritten on every query)."""
    write_json(store, FOOTBALL_DATA_KEY, records)


def load_football_data(store: KeyValueStore) -> List[StatRecord]:
    data = read_json(store, FOOTBALL_DATA_KEY, default=[])
    return data if isinstance(data, list) else []


def unique_team_names(records: Iterable[StatRecord]) -> List[str]:
    """Distinct team names in first-seen order; non-string or empty names are skipped."""
    seen: Dict[str, None] = {}
    for rec in records:
        name = rec.get("teamName")
        if isinstance(name, str) and name:
            seen.setdefault(name, None)
    return list(seen)


def load_team_names(store: KeyValueStore) -> Optional[List[str]]:
    """Cached team names, or None when nothing has been discovered yet."""
    names = read_json(store, TEAM_NAMES_KEY)
    if not isinstance(names, list):
        return None
    return [str(n) for n in names]


def remember_team_names(store: KeyValueStore, records: List[StatRecord]) -> Optional[List[str]]:
    """Store discovered team names unless a list is already cached.

    The first successful query wins; later queries never overwrite the list.

    Returns:
        The list that was written, or None if the cache already held one.
    """
    if store.get(TEAM_NAMES_KEY):
        return None
    names = unique_team_names(records)
    write_json(store, TEAM_NAMES_KEY, names)
    logger.info(f"Cached {len(names)} team names")
    return names
