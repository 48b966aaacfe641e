from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from quizbank import QuizQuestion

# A finished quiz counts as a pass in the user's records at or above this.
PASS_PERCENT = 60.0


def count_sort_iterations(array: Sequence[Any]) -> int:
    """Inner-loop comparisons a plain (no early exit) bubble sort makes."""
    n = len(array)
    return n * (n - 1) // 2


def compare_results(result: Any, expected: Any) -> bool:
    if isinstance(result, (list, tuple)) and isinstance(expected, (list, tuple)):
        if len(result) != len(expected):
            return False
        return all(r == e for r, e in zip(result, expected))
    return result == expected


def score_choice(selected: Sequence[str], answers: Sequence[Any]) -> Tuple[int, int]:
    """
    Wrong picks cancel right ones: earned = max(0, right - wrong), out of
    one point per correct answer.
    """
    correct = sum(1 for s in selected if s in answers)
    incorrect = sum(1 for s in selected if s not in answers)
    return max(0, correct - incorrect), len(answers)


def score_code(result: Optional[Mapping[str, Any]], answers: Sequence[Any]) -> Tuple[int, int]:
    if not result:
        return 0, len(answers)
    runs = result.get("results") or []
    return sum(1 for r in runs if r.get("passed")), len(runs)


def score_quiz(
    questions: Sequence[QuizQuestion],
    selected: Mapping[int, Sequence[str]],
    code_results: Mapping[int, Mapping[str, Any]],
) -> Dict[str, Any]:
    earned_total = 0
    points_total = 0
    items: List[Dict[str, Any]] = []

    for index, q in enumerate(questions):
        if q.is_coding:
            earned, total = score_code(code_results.get(index), q.answers)
        else:
            earned, total = score_choice(selected.get(index) or [], q.answers)
        earned_total += earned
        points_total += total
        items.append({"index": index, "earned": earned, "total": total})

    percent = (earned_total / points_total) * 100 if points_total > 0 else 0.0
    return {
        "earned": earned_total,
        "total": points_total,
        "percent": percent,
        "passed": percent >= PASS_PERCENT,
        "items": items,
    }


def performance_chart(iterations: Sequence[int], sizes: Sequence[int]) -> Dict[str, Any]:
    pairs = sorted(zip(sizes, iterations), key=lambda p: p[0])
    return {
        "title": "Algorithm Performance by Input Size",
        "x_label": "Input Size",
        "y_label": "Number of Iterations",
        "labels": [str(size) for size, _ in pairs],
        "data": [its for _, its in pairs],
    }
