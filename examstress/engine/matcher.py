"""Nearest-session lookup over a partial target vector.

Distance is Euclidean over the target's features only. A session whose
average is undefined for any queried feature is skipped outright. Ties keep
the first session in iteration order (strict ``<``), so callers should pass
sessions in the aggregator's exam-major, student-minor order.
"""

from __future__ import annotations

import logging
import math
from typing import FrozenSet, Iterable, Mapping, NamedTuple, Optional, Sequence

from examstress import config
from examstress.engine.sessions import ExamSession

logger = logging.getLogger(__name__)

STRESS_ONLY: FrozenSet[str] = frozenset({config.STRESS})
PHYSIOLOGICAL: FrozenSet[str] = frozenset(config.NON_STRESS_FEATURES)


class MatchResult(NamedTuple):
    session: ExamSession
    distance: float
    target: Mapping[str, float]


def active_features_for(control: Optional[str]) -> FrozenSet[str]:
    """Active dimensions given the most recently changed control.

    Moving the STRESS control queries STRESS alone; any other control, or no
    control yet, queries the four physiological features together.
    """
    if control == config.STRESS:
        return STRESS_ONLY
    return PHYSIOLOGICAL


def available_features(active_features: Iterable[str], values: Mapping[str, Optional[float]]) -> list:
    """Active features whose control currently holds a value, in feature order.

    A control without a value belongs to a feature no session has data for.
    """
    wanted = set(active_features)
    return [f for f in config.FEATURES if f in wanted and values.get(f) is not None]


def build_target(active_features: Iterable[str], values: Mapping[str, Optional[float]]) -> dict:
    active = available_features(active_features, values)
    if not active:
        raise ValueError("No active feature has a current value")
    return {f: float(values[f]) for f in active}


def session_distance(session: ExamSession, target: Mapping[str, float]) -> Optional[float]:
    """Euclidean distance over the target's features, or None if any average is undefined."""
    total = 0.0
    for feature, wanted in target.items():
        if feature not in session.avg:
            raise KeyError(feature)
        have = session.avg[feature]
        if have is None:
            return None
        total += (have - wanted) ** 2
    return math.sqrt(total)


def _closest(target: Mapping[str, float], sessions: Sequence[ExamSession]):
    if not target:
        raise ValueError("Target vector must name at least one feature")
    best: Optional[ExamSession] = None
    best_dist = math.inf
    unknown = [f for f in target if f not in config.FEATURES]
    if unknown:
        raise KeyError(unknown[0])
    for session in sessions:
        if not session.has_averages(target):
            continue
        dist = session_distance(session, target)
        if best is None or dist < best_dist:
            best, best_dist = session, dist
    return best, best_dist


def find_closest(target: Mapping[str, float], sessions: Sequence[ExamSession]) -> Optional[ExamSession]:
    """Session nearest to ``target``; None only when every session is disqualified."""
    best, _ = _closest(target, sessions)
    return best


def resolve(
    sessions: Sequence[ExamSession],
    active_features: Iterable[str],
    values: Mapping[str, Optional[float]],
) -> Optional[MatchResult]:
    """Build the target from current control values and return the closest session."""
    if not available_features(active_features, values):
        logger.debug("No value for any of %s", sorted(active_features))
        return None
    target = build_target(active_features, values)
    best, dist = _closest(target, sessions)
    result = MatchResult(session=best, distance=dist, target=target) if best is not None else None
    if result is None:
        logger.debug("No session has defined averages for %s", sorted(target))
    else:
        logger.debug(
            "Target %s -> %s (distance %.3f)", target, result.session.label, result.distance
        )
    return result


__all__ = [
    "STRESS_ONLY",
    "PHYSIOLOGICAL",
    "MatchResult",
    "active_features_for",
    "available_features",
    "build_target",
    "session_distance",
    "find_closest",
    "resolve",
]
