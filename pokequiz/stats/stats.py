from __future__ import annotations

"""Session result summary and terminal formatting."""

from typing import Dict, Sequence

from ..quiz.session import MissRecord, QuizSession


def summarize(session: QuizSession) -> Dict[str, int]:
    """Totals for a (possibly partial) session; rate is a rounded percentage."""
    correct = session.correct_count
    wrong = session.wrong_count
    total = correct + wrong
    rate = int(round(100 * correct / total)) if total > 0 else 0
    return {"total": total, "correct": correct, "wrong": wrong, "rate": rate}


def format_miss_list(misses: Sequence[MissRecord]) -> str:
    lines = []
    for m in misses:
        lines.append(f"No.{m.id}  {m.primary_name} / {m.secondary_name}  (your answer: {m.your_answer})")
    return "\n".join(lines)


def format_summary(stats: Dict[str, int], misses: Sequence[MissRecord] = ()) -> str:
    """Return a human-readable summary of stats."""
    lines = [
        f"Total: {stats.get('total', 0)}",
        f"Correct: {stats.get('correct', 0)}",
        f"Wrong: {stats.get('wrong', 0)}",
        f"Rate: {stats.get('rate', 0)}%",
    ]
    if misses:
        lines.append("")
        lines.append("To review:")
        lines.append(format_miss_list(misses))
    return "\n".join(lines)
