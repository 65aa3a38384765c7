from __future__ import annotations

"""Configuration loading and validation for pokequiz.

This module loads YAML configuration, applies defaults, and validates
enumerations so the CLI can rely on every key being present.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..catalog.entity import DEFAULT_IMAGE_TEMPLATE, LANGUAGES
from ..quiz.session import DEFAULT_LANGUAGE, SKIP_SENTINEL


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for section in ("catalog", "partitions", "storage", "quiz"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    cfg["catalog"].setdefault("path", None)
    cfg["partitions"].setdefault("path", None)
    cfg["storage"].setdefault("path", "./pokequiz_store.json")

    quiz = cfg["quiz"]
    quiz.setdefault("display_language", DEFAULT_LANGUAGE)
    quiz.setdefault("regions", ["kanto"])
    quiz.setdefault("image_path_template", DEFAULT_IMAGE_TEMPLATE)
    quiz.setdefault("skip_sentinel", SKIP_SENTINEL)

    lang = quiz.get("display_language")
    if lang not in LANGUAGES:
        print(f"WARNING: Unsupported display_language '{lang}', using '{DEFAULT_LANGUAGE}'.")
        quiz["display_language"] = DEFAULT_LANGUAGE

    regions = quiz.get("regions")
    if isinstance(regions, str):
        regions = [r.strip() for r in regions.split(",") if r.strip()]
    elif not isinstance(regions, list):
        print(f"WARNING: quiz.regions must be a list, got {regions!r}; using ['kanto'].")
        regions = ["kanto"]
    quiz["regions"] = [str(r) for r in regions]

    template = str(quiz.get("image_path_template"))
    try:
        template.format(id=1)
    except (KeyError, IndexError, ValueError, AttributeError, TypeError):
        print(f"WARNING: Invalid image_path_template '{template}', using default.")
        template = DEFAULT_IMAGE_TEMPLATE
    quiz["image_path_template"] = template

    if not str(quiz.get("skip_sentinel") or ""):
        quiz["skip_sentinel"] = SKIP_SENTINEL

    return cfg
