from .schema import WRONG_LIST_KEY, SETTINGS_KEY, Settings, MissNames, MissRecordRow, SettingsRow
from .store import KeyValueStore, MemoryStore, JsonFileStore, QuizStore, open_store

__all__ = [
    "WRONG_LIST_KEY",
    "SETTINGS_KEY",
    "Settings",
    "MissNames",
    "MissRecordRow",
    "SettingsRow",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "QuizStore",
    "open_store",
]
