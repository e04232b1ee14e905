# regionkit/domain/models/score_quartiles.py
"""
Score quartile helpers for the quartile visibility filter.

A quartile selection is a 4-element indicator list, one flag per quarter of
the score-sorted region collection (Q1 = lowest scores). The filter assumes
the selected flags form one contiguous run; toggle_quartile is the policy
that keeps them that way.
"""
import math
from typing import List, Sequence, Tuple

import numpy as np


QUARTILE_COUNT = 4


def selection_run(selected_q: Sequence[int]) -> Tuple[int, int]:
    """
    Locate the selected run.

    Returns:
        (start, length): index of the first selected quartile (-1 when none
        is selected) and the number of selected quartiles
    """
    start = -1
    length = 0
    for i, flag in enumerate(selected_q):
        if start == -1 and flag == 1:
            start = i
        length += flag
    return start, length


def quartile_bounds(scores: Sequence[float], selected_q: Sequence[int]) -> Tuple[float, float]:
    """
    Compute the inclusive score bounds of the selected quartiles.

    lower = sorted[ceil(start / 4 * n)]
    upper = sorted[ceil((start + len) / 4 * n) - 1]

    Indices are clamped into the score array. With nothing selected the lower
    bound is placed above the highest score so every region is filtered out.
    Non-contiguous selections still yield bounds (spanning from the first
    selected quartile) but are not a meaningful filter.

    Args:
        scores: Region scores in any order, at least one
        selected_q: Quartile indicator flags

    Returns:
        (lower, upper)
    """
    ordered = np.sort(np.asarray(scores, dtype=float))
    n = len(ordered)
    if n == 0:
        raise ValueError("quartile bounds need at least one score")

    start, length = selection_run(selected_q)
    last = n - 1

    lower_idx = min(max(math.ceil(start / QUARTILE_COUNT * n), 0), last)
    upper_idx = min(max(math.ceil((start + length) / QUARTILE_COUNT * n) - 1, 0), last)

    lower = float(ordered[lower_idx])
    upper = float(ordered[upper_idx])
    if start == -1:
        lower = float(ordered[last]) + 1
    return lower, upper


def toggle_quartile(selected_q: Sequence[int], ind: int) -> List[int]:
    """
    Toggle one quartile without ever producing two disjoint selected ranges.

    Deselecting:
        an end quartile (Q1/Q4) just clears it; an interior quartile with both
        neighbours selected clears it and every quartile after it.
    Selecting:
        a quartile not adjacent to the current non-empty block clears the
        block first.

    Args:
        selected_q: Current indicator flags (not modified)
        ind: Quartile index 0..3

    Returns:
        The new indicator flags

    Raises:
        ValueError: If ind is not a quartile index
    """
    if not 0 <= ind < QUARTILE_COUNT:
        raise ValueError(f"Quartile index out of range: {ind}")

    flags = list(selected_q)
    last = QUARTILE_COUNT - 1

    if flags[ind] == 1:
        if ind in (0, last):
            flags[ind] = 0
        elif flags[ind - 1] + flags[ind + 1] == 2:
            for i in range(ind, QUARTILE_COUNT):
                flags[i] = 0
        else:
            flags[ind] = 0
        return flags

    if sum(flags) != 0:
        left = flags[ind - 1] if ind > 0 else 0
        right = flags[ind + 1] if ind < last else 0
        if not (left == 1 or right == 1):
            flags = [0] * QUARTILE_COUNT
    flags[ind] = 1
    return flags
