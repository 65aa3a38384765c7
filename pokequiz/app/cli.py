from __future__ import annotations

"""CLI for pokequiz using QuizManager."""

import argparse
from typing import Any

from ..config.config import load_config, validate_config
from ..quiz.session import EmptyPoolError
from ..stats.stats import format_miss_list, format_summary
from ..util.randomness import seed_if_needed
from .explain import warn
from .session_manager import QUIT_COMMAND, SKIP_COMMAND, QuizManager


def _split_regions(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [r.strip() for r in value.split(",") if r.strip()]


def _build_ui() -> dict[str, Any]:
    def ask(prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError:
            return QUIT_COMMAND

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="pokequiz")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--explain", action="store_true")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("regions")

    sp = sub.add_parser("settings")
    sp.add_argument("--lang", default=None)
    sp.add_argument("--regions", default=None, help="Comma-separated region keys, e.g. kanto,johto")

    sub.add_parser("review")

    rp = sub.add_parser("run")
    rp.add_argument("--review", action="store_true", help="Quiz only the stored review list")
    rp.add_argument("--lang", default=None)
    rp.add_argument("--regions", default=None)

    args = p.parse_args(argv)

    if args.explain:
        from .explain import enable as explain_enable
        explain_enable(True)
    seed_if_needed()
    cfg = validate_config(load_config(args.config))
    manager = QuizManager(cfg)

    if args.cmd == "regions":
        selected = manager.settings.selected_partition_keys
        for key, part in manager.partitions.items():
            mark = "*" if key in selected else " "
            print(f"{mark} {key}: {part.label} (No.{part.min_id}-{part.max_id})")
        return 0

    if args.cmd == "settings":
        try:
            if args.lang is not None:
                manager.set_language(args.lang)
            regions = _split_regions(args.regions)
            if regions is not None:
                manager.set_regions(regions)
        except (KeyError, ValueError) as e:
            print(f"ERROR: {e}")
            return 2
        s = manager.settings
        print(f"lang: {s.display_language}")
        print(f"regions: {', '.join(sorted(s.selected_partition_keys)) or '(none)'}")
        return 0

    if args.cmd == "review":
        saved = manager.store.load_miss_list()
        if not saved:
            print("Nothing to review.")
            return 0
        print(f"{len(saved)} to review:")
        print(format_miss_list(saved))
        return 0

    if args.cmd == "run":
        try:
            if args.lang is not None:
                manager.set_language(args.lang)
            regions = _split_regions(args.regions)
            if regions is not None:
                manager.set_regions(regions)
        except (KeyError, ValueError) as e:
            print(f"ERROR: {e}")
            return 2

        if args.review:
            if manager.start_review() is None:
                print("Nothing to review.")
                return 0
        else:
            try:
                manager.start_quiz()
            except EmptyPoolError:
                warn("No entities in the selected regions; choose regions with `pokequiz settings --regions`.")
                return 2

        print(f"Type the name. '{SKIP_COMMAND}' skips, '{QUIT_COMMAND}' stops.\n")
        summary = manager.run(_build_ui())
        print("\nSession Summary:")
        print(format_summary(summary, summary.get("misses", ())))
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
