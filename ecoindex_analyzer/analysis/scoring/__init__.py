"""EcoIndex scoring package.

Reference distributions live in :mod:`quantiles`; the pure scoring
functions in :mod:`calculator`.  The public API is
:func:`compute_score`, :func:`compute_impact` and :func:`get_grade`.
"""

from __future__ import annotations

from ecoindex_analyzer.analysis.scoring.calculator import (
    compute_impact,
    compute_score,
    get_color_for_score,
    get_grade,
    get_quantile_position,
)

__all__ = [
    "compute_impact",
    "compute_score",
    "get_color_for_score",
    "get_grade",
    "get_quantile_position",
]
