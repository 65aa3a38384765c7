from __future__ import annotations

"""Partitions (regions) of the catalog and pool selection.

Partitions are named inclusive id ranges loaded from a YAML resource.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from ..app.explain import trace as xtrace
from .entity import Entity


@dataclass(frozen=True)
class Partition:
    key: str
    min_id: int
    max_id: int
    label: str = ""

    def contains(self, entity_id: int) -> bool:
        return self.min_id <= entity_id <= self.max_id


def _default_partitions_path() -> str:
    return str(Path(__file__).resolve().parents[1] / "resources" / "regions.yml")


def load_partitions(path: str | None = None) -> Dict[str, Partition]:
    """Load partitions keyed by name, in file order."""
    p = path or _default_partitions_path()
    with open(p, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    out: Dict[str, Partition] = {}
    for key, pdef in (data.get("regions") or {}).items():
        pdef = pdef or {}
        lo, hi = int(pdef["min_id"]), int(pdef["max_id"])
        if lo > hi:
            lo, hi = hi, lo
        out[str(key)] = Partition(key=str(key), min_id=lo, max_id=hi, label=str(pdef.get("label", key)))
    return out


def get_partition(key: str, partitions: Dict[str, Partition]) -> Partition:
    p = partitions.get(key)
    if p is None:
        raise KeyError(f"Unknown region: {key}")
    return p


def filter_by_partitions(
    catalog: Iterable[Entity],
    selected_keys: Iterable[str],
    partitions: Optional[Dict[str, Partition]] = None,
) -> List[Entity]:
    """Entities covered by any selected partition.

    - Empty selection gives an empty pool; callers must not start on it.
    - Catalog order is kept and each id appears once, even when selected
      partitions overlap.
    - Unknown keys are ignored.
    """
    parts = partitions if partitions is not None else load_partitions()
    chosen: List[Partition] = []
    for key in selected_keys:
        p = parts.get(key)
        if p is None:
            xtrace("unknown_region", {"key": key})
            continue
        chosen.append(p)
    if not chosen:
        return []
    pool: List[Entity] = []
    seen: set[int] = set()
    for ent in catalog:
        if ent.id in seen:
            continue
        if any(p.contains(ent.id) for p in chosen):
            seen.add(ent.id)
            pool.append(ent)
    return pool


def review_pool(catalog: Iterable[Entity], misses: Iterable[Any]) -> List[Entity]:
    """Catalog entities whose id appears in misses (records or raw ids), catalog order."""
    ids = set()
    for m in misses:
        ids.add(int(m) if isinstance(m, int) else int(getattr(m, "id")))
    pool: List[Entity] = []
    seen: set[int] = set()
    for ent in catalog:
        if ent.id in ids and ent.id not in seen:
            seen.add(ent.id)
            pool.append(ent)
    return pool
