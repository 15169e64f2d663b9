"""Rounding, dispersion and inequality helpers shared by the sub-scores."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

SCORE_MIN = 0
SCORE_MAX = 100


def round_half_up(value: float | Decimal) -> int:
    """Round to the nearest integer with ties going away from zero.

    Built-in ``round`` uses banker's rounding (``round(2.5) == 2``), which
    would move scores sitting exactly on a .5 boundary.
    """
    if isinstance(value, Decimal):
        dec = value
    else:
        dec = Decimal(repr(float(value)))
    return int(dec.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def clamp_score(value: int) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, value))


def coefficient_of_variation(values: Iterable[float]) -> float:
    """Population standard deviation divided by the mean.

    Returns 0.0 for an empty input, a zero mean, or zero variance.
    """
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    mean = float(arr.mean())
    if mean == 0:
        return 0.0
    std = float(arr.std())
    if std == 0:
        return 0.0
    return std / mean


def gini(values: Iterable[float]) -> float:
    """Gini coefficient of non-negative quantities.

    Pairwise mean absolute difference ``sum_i sum_j |a_i - a_j| / (2 * n * sum(a))``
    accumulated over the values in descending order. Exact .5 scores must
    not drift below the tie, which the sorted closed form can do.
    """
    amounts = sorted((float(v) for v in values), reverse=True)
    n = len(amounts)
    total = 0.0
    for amount in amounts:
        total += amount
    if n == 0 or total == 0:
        return 0.0
    diff_sum = 0.0
    for a in amounts:
        for b in amounts:
            diff_sum += abs(a - b)
    return diff_sum / (2 * n * total)
