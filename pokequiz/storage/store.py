from __future__ import annotations

"""Best-effort persistence of the review (miss) list and user settings.

Records are JSON strings under two fixed keys of a key-value store, the way
a browser keeps them in localStorage. Every failure (missing or corrupt
data, schema mismatch, unwritable file) degrades to "no data": loads return
None and writes return False. Nothing raises into a running session.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from ..app.explain import trace as xtrace
from ..quiz.session import MissRecord
from .schema import (
    SETTINGS_KEY,
    WRONG_LIST_KEY,
    MissListAdapter,
    MissRecordRow,
    Settings,
    SettingsRow,
)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-process store; handy for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """One JSON object on disk mapping keys to serialized values."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Store file is not a JSON object: {self.path}")
        return data

    def _read_for_update(self) -> Dict[str, str]:
        # A corrupt file holds nothing worth keeping; start over.
        try:
            return self._read()
        except ValueError:
            return {}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_for_update()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read_for_update()
        if key in data:
            del data[key]
            self._write(data)


def open_store(path: str | Path | None) -> KeyValueStore:
    """JSON file store at path, or an in-memory store when path is None."""
    return JsonFileStore(path) if path else MemoryStore()


class QuizStore:
    """Persistence gateway for miss lists and settings."""

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        wrong_list_key: str = WRONG_LIST_KEY,
        settings_key: str = SETTINGS_KEY,
    ) -> None:
        self.kv = kv
        self.wrong_list_key = wrong_list_key
        self.settings_key = settings_key

    # --- miss list ---

    def save_miss_list(self, records: Sequence[MissRecord]) -> bool:
        try:
            rows = [MissRecordRow.model_validate(r.to_json()) for r in records]
            payload = MissListAdapter.dump_json(rows).decode("utf-8")
            self.kv.set(self.wrong_list_key, payload)
        except Exception as e:
            xtrace("persist_failed", {"key": self.wrong_list_key, "error": repr(e)})
            return False
        xtrace("miss_list_saved", {"count": len(rows)})
        return True

    def load_miss_list(self) -> Optional[List[MissRecord]]:
        try:
            raw = self.kv.get(self.wrong_list_key)
            if not raw:
                return None
            rows = MissListAdapter.validate_json(raw)
        except Exception as e:
            xtrace("load_failed", {"key": self.wrong_list_key, "error": repr(e)})
            return None
        return [MissRecord.from_json(r.model_dump()) for r in rows]

    def clear_miss_list(self) -> bool:
        try:
            self.kv.remove(self.wrong_list_key)
        except Exception as e:
            xtrace("persist_failed", {"key": self.wrong_list_key, "error": repr(e)})
            return False
        xtrace("miss_list_cleared")
        return True

    def commit_miss_list(self, records: Sequence[MissRecord]) -> bool:
        """Store the list of a finished session; a clean run clears the old one."""
        if records:
            return self.save_miss_list(records)
        return self.clear_miss_list()

    # --- settings ---

    def save_settings(self, settings: Settings) -> bool:
        try:
            payload = SettingsRow.from_settings(settings).model_dump_json()
            self.kv.set(self.settings_key, payload)
        except Exception as e:
            xtrace("persist_failed", {"key": self.settings_key, "error": repr(e)})
            return False
        return True

    def load_settings(self) -> Optional[Settings]:
        try:
            raw = self.kv.get(self.settings_key)
            if not raw:
                return None
            row = SettingsRow.model_validate_json(raw)
        except Exception as e:
            xtrace("load_failed", {"key": self.settings_key, "error": repr(e)})
            return None
        return row.to_settings()
