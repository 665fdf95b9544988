"""Exam session model and aggregation of loaded feature tables into sessions.

One ``ExamSession`` exists per (student, exam). Sessions are produced
exam-major, student-minor (``config.EXAMS`` then ``config.STUDENTS``); that
order is what the nearest-session lookup uses to break exact ties, so keep it
stable.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, NamedTuple, Optional, Tuple

import numpy as np
import pandas as pd

from examstress import config
from examstress.engine.loader import MINUTE_COLUMN, FeatureTables
from examstress.errors import ConfigurationError

logger = logging.getLogger(__name__)


class SeriesPoint(NamedTuple):
    minute: Optional[float]
    value: Optional[float]


@dataclass(frozen=True)
class FeatureSeries:
    """Time-ordered readings for one (student, exam, feature); ``None`` marks a gap."""

    points: Tuple[SeriesPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def minutes(self) -> List[Optional[float]]:
        return [p.minute for p in self.points]

    def values(self) -> List[Optional[float]]:
        return [p.value for p in self.points]

    def mean(self) -> Optional[float]:
        defined = [p.value for p in self.points if p.value is not None]
        if not defined:
            return None
        return float(np.mean(defined))


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ExamSession:
    student: str
    exam: str
    grade: int
    time_series: Mapping[str, FeatureSeries] = field(repr=False)
    avg: Mapping[str, Optional[float]]

    @property
    def key(self) -> Tuple[str, str]:
        return (self.student, self.exam)

    @property
    def duration(self) -> int:
        return config.exam_duration(self.exam)

    @property
    def label(self) -> str:
        return f"{self.student.upper()} · {config.EXAM_LABELS.get(self.exam, self.exam)}"

    def has_averages(self, features: Iterable[str]) -> bool:
        return all(self.avg.get(f) is not None for f in features)


def column_name(student: str, exam: str, feature: str) -> str:
    """Column naming scheme of the source tables (``s1_final_HR``, ``s1_stress``)."""
    if feature == config.STRESS:
        return f"{student}_stress"
    return f"{student}_{exam}_{feature}"


def _cell(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def extract_series(table: pd.DataFrame, column: str) -> FeatureSeries:
    """Pull one student's column out of a table, keeping row order."""
    if column not in table.columns:
        return FeatureSeries()
    minutes = table[MINUTE_COLUMN].tolist()
    values = table[column].tolist()
    # A blank minute still carries a reading; it counts toward the mean.
    points = tuple(SeriesPoint(_cell(m), _cell(v)) for m, v in zip(minutes, values))
    return FeatureSeries(points)


def make_session(student: str, exam: str, grade: int, time_series: Mapping[str, FeatureSeries]) -> ExamSession:
    """Build a session, filling any unknown feature with an empty series."""
    series = {f: time_series.get(f, FeatureSeries()) for f in config.FEATURES}
    avg = {f: s.mean() for f, s in series.items()}
    return ExamSession(
        student=student,
        exam=exam,
        grade=int(grade),
        time_series=_freeze(series),
        avg=_freeze(avg),
    )


def build_sessions(tables: FeatureTables) -> List[ExamSession]:
    """Aggregate loaded tables into one session per (student, exam)."""
    sessions: List[ExamSession] = []
    missing_columns = 0
    for exam in config.EXAMS:
        for student in config.STUDENTS:
            grade = config.grade_for(exam, student)
            series = {}
            for feature in config.FEATURES:
                table = tables.get((feature, exam))
                if table is None:
                    raise ConfigurationError(f"No {feature} table loaded for exam {exam!r}")
                column = column_name(student, exam, feature)
                if column not in table.columns:
                    missing_columns += 1
                    logger.debug("Column %s absent from %s/%s table", column, feature, exam)
                series[feature] = extract_series(table, column)
            sessions.append(make_session(student, exam, grade, series))
    logger.info(
        "Aggregated %d exam sessions (%d absent student columns)", len(sessions), missing_columns
    )
    return sessions


__all__ = [
    "SeriesPoint",
    "FeatureSeries",
    "ExamSession",
    "column_name",
    "extract_series",
    "make_session",
    "build_sessions",
]
