"""
Diet adherence metrics.

Pure functions over meals already sorted by creation time; nothing here
touches the database.
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence


@dataclass
class DietReport:
    total: int = 0
    in_diet_count: int = 0
    off_diet_count: int = 0
    best_sequence: List[Any] = field(default_factory=list)


def best_diet_sequence(meals: Sequence[Any]) -> List[Any]:
    """
    Longest contiguous run of in-diet meals, in the order given.

    Single left-to-right scan. The best run is only replaced by a strictly
    longer one, so the first of several equally long runs wins.
    """
    best: List[Any] = []
    current: List[Any] = []
    for meal in meals:
        if meal.in_diet:
            current.append(meal)
            if len(current) > len(best):
                best = list(current)
        else:
            current = []
    return best


def build_diet_report(meals: Sequence[Any]) -> DietReport:
    """Aggregate counts and the best streak for meals in creation order"""
    in_diet_count = sum(1 for m in meals if m.in_diet)
    return DietReport(
        total=len(meals),
        in_diet_count=in_diet_count,
        off_diet_count=len(meals) - in_diet_count,
        best_sequence=best_diet_sequence(meals),
    )
