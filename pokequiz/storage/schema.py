from __future__ import annotations

"""Storage keys, settings model and Pydantic models for persisted records."""

from dataclasses import dataclass, field
from typing import FrozenSet, List

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from ..catalog.entity import LANGUAGES

# --- Constants ---

WRONG_LIST_KEY = "pokemon-quiz-wrong-list"
SETTINGS_KEY = "pokemon-quiz-settings"


@dataclass(frozen=True)
class Settings:
    display_language: str = "japanese"
    selected_partition_keys: FrozenSet[str] = field(default_factory=frozenset)


# --- Pydantic models ---

class MissNames(BaseModel):
    japanese: str = ""
    english: str = ""


class MissRecordRow(BaseModel):
    id: int = Field(ge=1)
    name: MissNames
    image: str = ""
    yourAnswer: str = ""


MissListAdapter = TypeAdapter(List[MissRecordRow])


class SettingsRow(BaseModel):
    lang: str
    regions: List[str] = Field(default_factory=list)

    @field_validator("lang")
    @classmethod
    def _known_lang(cls, v: str) -> str:
        if v not in LANGUAGES:
            raise ValueError(f"Unsupported display language: {v}")
        return v

    @field_validator("regions")
    @classmethod
    def _unique_regions(cls, v: List[str]) -> List[str]:
        seen: List[str] = []
        for r in v:
            if r not in seen:
                seen.append(r)
        return seen

    @classmethod
    def from_settings(cls, s: Settings) -> "SettingsRow":
        return cls(lang=s.display_language, regions=sorted(s.selected_partition_keys))

    def to_settings(self) -> Settings:
        return Settings(display_language=self.lang, selected_partition_keys=frozenset(self.regions))
