from __future__ import annotations

"""Catalog entities and JSON catalog loading."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..app.explain import trace as xtrace

LANGUAGES = ("japanese", "english", "chinese", "french")
FALLBACK_LANGUAGE = "english"
DEFAULT_IMAGE_TEMPLATE = "images/pokedex/hires/{id:03d}.png"


@dataclass(frozen=True)
class Entity:
    id: int
    names: Dict[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Entity":
        raw = data.get("name", data.get("names", {})) or {}
        if isinstance(raw, str):
            raw = {FALLBACK_LANGUAGE: raw}
        names = {str(k): v for k, v in raw.items() if isinstance(v, str) and v}
        return cls(id=int(data["id"]), names=names)

    def to_json(self) -> Dict[str, Any]:
        return {"id": self.id, "name": dict(self.names)}


def display_name(entity: Entity, lang: str) -> str:
    """Name in lang, falling back to english, then to the dex number."""
    return entity.names.get(lang) or entity.names.get(FALLBACK_LANGUAGE) or f"No.{entity.id}"


def image_ref(entity: Entity, template: Optional[str] = None) -> str:
    return (template or DEFAULT_IMAGE_TEMPLATE).format(id=entity.id)


def _bundled_catalog_path() -> Path:
    return Path(__file__).resolve().parents[1] / "resources" / "pokedex_sample.json"


def parse_catalog(records: List[Dict[str, Any]]) -> List[Entity]:
    """Build entities from raw records; entries without a usable id are skipped."""
    out: List[Entity] = []
    seen: set[int] = set()
    for idx, rec in enumerate(records):
        try:
            ent = Entity.from_json(rec)
        except (KeyError, TypeError, ValueError, AttributeError):
            xtrace("catalog_entry_skipped", {"index": idx})
            continue
        if ent.id < 1 or ent.id in seen:
            xtrace("catalog_entry_skipped", {"index": idx, "id": ent.id})
            continue
        seen.add(ent.id)
        out.append(ent)
    return out


def load_catalog(path: str | Path | None = None) -> List[Entity]:
    """Load a pokedex-style JSON list of {id, name: {lang: str}} records.

    Args:
        path: JSON file to read. If None, the bundled sample pokedex is used.

    Returns:
        Entities in file order.
    """
    p = Path(path) if path else _bundled_catalog_path()
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Catalog must be a JSON list: {p}")
    return parse_catalog(data)
