"""EcoIndex score calculator.

Locates each metric inside its reference distribution, combines
the three positions into a weighted 0-100 score, and derives the
letter grade and the estimated environmental impact.  Pure
functions only: no I/O, no logging on the hot path.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from ecoindex_analyzer.analysis.scoring import quantiles
from ecoindex_analyzer.models import ecoindex, metrics

# ── Impact model ───────────────────────────────────────────

# Per page view, at score 100 and at score 0:
#   ghg   2 gCO2e -> 4 gCO2e
#   water 3 cl    -> 6 cl
_GHG_BASE = 2.0
_WATER_BASE = 3.0


def get_quantile_position(value: float, breakpoints: Sequence[float]) -> float:
    """Return the fractional position of *value* in *breakpoints*.

    The position is ``i`` exactly at ``breakpoints[i]`` and linear in
    between.  Values at or below the first breakpoint map to 0,
    values at or above the last one map to ``len(breakpoints) - 1``.

    Args:
        value: The raw metric value.
        breakpoints: Ascending reference distribution.

    Returns:
        A float in ``[0, len(breakpoints) - 1]``.
    """
    last = len(breakpoints) - 1
    if math.isnan(value) or value <= breakpoints[0]:
        return 0.0
    if value >= breakpoints[last]:
        return float(last)

    for i in range(1, len(breakpoints)):
        if value < breakpoints[i]:
            lower = breakpoints[i - 1]
            upper = breakpoints[i]
            return (i - 1) + (value - lower) / (upper - lower)
    return float(last)


def get_grade(score: float) -> ecoindex.Grade:
    """Map a score to its letter grade (scores below 0 or NaN are ``G``)."""
    for threshold, grade in quantiles.GRADE_THRESHOLDS:
        if score >= threshold:
            return grade  # type: ignore[return-value]
    return "G"


def get_color_for_score(score: float) -> str:
    """Return the display colour of the grade *score* falls in."""
    return quantiles.GRADE_COLORS[get_grade(score)]


def get_grade_label(grade: str) -> str:
    """Return the human label for *grade* (``"A"`` gives ``"Excellent"``)."""
    return quantiles.GRADE_LABELS.get(grade, "Unknown")


def compute_raw_score(page: metrics.PageMetrics) -> float:
    """Return the clamped, unrounded score for *page*."""
    q_dom = get_quantile_position(page.dom_elements, quantiles.DOM_QUANTILES)
    q_req = get_quantile_position(page.requests, quantiles.REQUEST_QUANTILES)
    q_size = get_quantile_position(page.size_kb, quantiles.SIZE_QUANTILES)

    total_weight = quantiles.DOM_WEIGHT + quantiles.REQUEST_WEIGHT + quantiles.SIZE_WEIGHT
    weighted = (
        quantiles.DOM_WEIGHT * q_dom
        + quantiles.REQUEST_WEIGHT * q_req
        + quantiles.SIZE_WEIGHT * q_size
    )
    score = 100 - 5 * weighted / total_weight
    return min(100.0, max(0.0, score))


def compute_score(page: metrics.PageMetrics) -> ecoindex.ScoreResult:
    """Compute the EcoIndex score and grade for *page*.

    ``score = 100 - 5 * (3*Q_dom + 2*Q_req + Q_size) / 6``, clamped to
    ``[0, 100]``.  The grade is taken from the unrounded score.
    """
    score = compute_raw_score(page)
    return ecoindex.ScoreResult(score=score, grade=get_grade(score))


def compute_impact(score: float) -> ecoindex.ImpactResult:
    """Estimate greenhouse gas (gCO2e) and water (cl) per page view.

    Both grow linearly from their base value at score 100 to twice
    that value at score 0.
    """
    clamped = min(100.0, max(0.0, score))
    degradation = (100 - clamped) / 100
    return ecoindex.ImpactResult(
        ghg=_GHG_BASE + _GHG_BASE * degradation,
        water=_WATER_BASE + _WATER_BASE * degradation,
    )
