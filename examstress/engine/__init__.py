"""Engine package exports."""

from .loader import load_all_tables, load_feature_table, prepare_table
from .matcher import active_features_for, build_target, find_closest, resolve, session_distance
from .ranges import FeatureRange, estimate_ranges
from .sessions import ExamSession, FeatureSeries, SeriesPoint, build_sessions

__all__ = [
    "load_all_tables",
    "load_feature_table",
    "prepare_table",
    "active_features_for",
    "build_target",
    "find_closest",
    "resolve",
    "session_distance",
    "FeatureRange",
    "estimate_ranges",
    "ExamSession",
    "FeatureSeries",
    "SeriesPoint",
    "build_sessions",
]
