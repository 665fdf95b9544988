"""Per-feature slider bounds derived from session averages."""

from __future__ import annotations

import math
from typing import Dict, NamedTuple, Optional, Sequence

from examstress import config
from examstress.engine.sessions import ExamSession


class FeatureRange(NamedTuple):
    min: int
    max: int
    initial: int


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def feature_range(sessions: Sequence[ExamSession], feature: str) -> FeatureRange:
    """Integer bounds for one feature: floor of the lowest average, ceil of the highest."""
    averages = [s.avg.get(feature) for s in sessions]
    defined = [a for a in averages if a is not None]
    if not defined:
        raise ValueError(f"No session has a defined {feature} average")
    lo, hi = min(defined), max(defined)
    return FeatureRange(min=math.floor(lo), max=math.ceil(hi), initial=_round_half_up((lo + hi) / 2))


def estimate_ranges(
    sessions: Sequence[ExamSession], features: Optional[Sequence[str]] = None
) -> Dict[str, FeatureRange]:
    """Bounds per feature; a feature with no defined average anywhere is left out."""
    if not sessions:
        raise ValueError("Cannot estimate feature ranges from an empty session set")
    ranges: Dict[str, FeatureRange] = {}
    for feature in features or config.FEATURES:
        if any(s.avg.get(feature) is not None for s in sessions):
            ranges[feature] = feature_range(sessions, feature)
    return ranges


__all__ = ["FeatureRange", "feature_range", "estimate_ranges"]
