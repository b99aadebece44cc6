"""Per-deliverable complexity multipliers and the adjusted values derived from them"""

import math
import re
from typing import Any
from sprint_pricing.domain.models import AdjustedLine
from sprint_pricing.domain.pricing import hours_from_points

COMPLEXITY_MIN = 0.5
COMPLEXITY_MAX = 2.0
DEFAULT_COMPLEXITY = 1.0

COMPLEXITY_LEVELS = {
    "simple": 0.75,
    "normal": 1.0,
    "complex": 1.5,
    "very_complex": 2.0,
}

# Longest leading decimal literal, as JavaScript parseFloat reads it
_LEADING_NUMBER = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_complexity(value: Any) -> float:
    """
    Parse a client-supplied complexity score.

    Numbers are clamped to [0.5, 2.0]. Strings are read like JavaScript
    parseFloat: the leading number counts ("1.5x" → 1.5, "Infinity" → 2.0)
    and trailing text is ignored. Anything else (missing, no leading number,
    NaN) falls back to 1.0, i.e. no adjustment.
    """
    if isinstance(value, bool):
        return DEFAULT_COMPLEXITY

    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            # int too large for a float
            return COMPLEXITY_MAX if value > 0 else COMPLEXITY_MIN
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value.lstrip())
        if match is None:
            return DEFAULT_COMPLEXITY
        parsed = float(match.group(0))
    else:
        return DEFAULT_COMPLEXITY

    if math.isnan(parsed):
        return DEFAULT_COMPLEXITY

    return max(COMPLEXITY_MIN, min(COMPLEXITY_MAX, parsed))


def round_points(value: float) -> float:
    """Round to one decimal place, halves rounding up (2.25 → 2.3)"""
    return math.floor(value * 10 + 0.5) / 10


def adjust_points(base_points: float, complexity: float) -> float:
    return round_points(base_points * complexity)


def adjusted_line(base_points: float, complexity: float) -> AdjustedLine:
    """Adjusted points and hours stored on a sprint deliverable row"""
    points = adjust_points(base_points, complexity)
    return AdjustedLine(
        complexity_score=complexity,
        custom_estimate_points=points,
        custom_hours=hours_from_points(points),
    )


def complexity_level(complexity: float) -> str:
    """Highest named level the score reaches, or "below_simple" """
    level = "below_simple"
    for name, threshold in sorted(COMPLEXITY_LEVELS.items(), key=lambda kv: kv[1]):
        if complexity >= threshold:
            level = name
    return level
