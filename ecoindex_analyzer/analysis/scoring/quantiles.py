"""EcoIndex reference tables.

The three 21-point breakpoint tables come from the EcoIndex
methodology (HTTP Archive distributions).  They are versioned
constants: changing any value changes every score.
"""

from __future__ import annotations

# Number of DOM elements.
DOM_QUANTILES: tuple[float, ...] = (
    0, 47, 75, 159, 233, 298, 358, 417, 476, 537, 603,
    674, 753, 843, 949, 1076, 1237, 1459, 1801, 2479, 594601,
)

# Number of HTTP requests.
REQUEST_QUANTILES: tuple[float, ...] = (
    0, 2, 15, 25, 34, 42, 49, 56, 63, 70, 78,
    86, 95, 105, 117, 130, 147, 170, 205, 281, 3920,
)

# Transferred page weight in KB.
SIZE_QUANTILES: tuple[float, ...] = (
    0, 1.37, 144.7, 319.53, 479.46, 631.97, 783.38, 937.91, 1098.62, 1265.47, 1448.32,
    1648.27, 1876.08, 2142.06, 2465.37, 2866.31, 3401.59, 4155.73, 5400.08, 8037.54, 223212.26,
)

# Weights of the three quantile positions in the composite score.
DOM_WEIGHT = 3
REQUEST_WEIGHT = 2
SIZE_WEIGHT = 1

# (minimum score, grade), checked from the top; the first match wins.
GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (81, "A"),
    (71, "B"),
    (61, "C"),
    (51, "D"),
    (41, "E"),
    (31, "F"),
    (0, "G"),
)

GRADE_COLORS: dict[str, str] = {
    "A": "#349a47",
    "B": "#51b84b",
    "C": "#cadb2a",
    "D": "#f6eb15",
    "E": "#fecd06",
    "F": "#f99839",
    "G": "#ed2124",
}

GRADE_LABELS: dict[str, str] = {
    "A": "Excellent",
    "B": "Very Good",
    "C": "Good",
    "D": "Average",
    "E": "Below Average",
    "F": "Poor",
    "G": "Very Poor",
}
