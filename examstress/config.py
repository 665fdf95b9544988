"""Configuration constants, reference tables and default paths for examstress."""

import os
from pathlib import Path
from typing import Dict, List

from examstress.errors import ConfigurationError

# Project root inferred from this file's location.
ROOT_DIR = Path(__file__).resolve().parent.parent

# Default paths
DATA_DIR = Path(os.environ.get("EXAMSTRESS_DATA_DIR") or ROOT_DIR / "data" / "CleanData")
ASSETS_DIR = Path(__file__).resolve().parent / "ui"

# {feature}/{feature}{exam}.csv, e.g. HR/HRfinal.csv
TABLE_PATH_PATTERN: str = "{feature}/{feature}{exam}.csv"
LOAD_MAX_WORKERS: int = 8

# Features
STRESS: str = "STRESS"
FEATURES: List[str] = ["HR", "EDA", "BVP", "TEMP", STRESS]
NON_STRESS_FEATURES: List[str] = [f for f in FEATURES if f != STRESS]

# Unit normalisation applied once at ingestion.
FEATURE_SCALE: Dict[str, float] = {"HR": 1.0, "EDA": 100.0, "BVP": 5.0, "TEMP": 5.0, STRESS: 1.0}
FEATURE_UNITS: Dict[str, str] = {
    "HR": "bpm",
    "EDA": "μS × 100",
    "BVP": "× 5",
    "TEMP": "°C × 5",
    STRESS: "level",
}
FEATURE_COLORS: Dict[str, str] = {
    "HR": "#ff5fb2",
    "EDA": "#5bc0de",
    "BVP": "#a66cff",
    "TEMP": "#ffc107",
    STRESS: "#00e676",
}

# Reference data
STUDENTS: List[str] = [f"s{i}" for i in range(1, 11)]
EXAMS: List[str] = ["midterm1", "midterm2", "final"]
EXAM_LABELS: Dict[str, str] = {"midterm1": "Midterm 1", "midterm2": "Midterm 2", "final": "Final"}
EXAM_DURATIONS: Dict[str, int] = {"midterm1": 90, "midterm2": 90, "final": 180}

GRADES: Dict[str, Dict[str, int]] = {
    "midterm1": {
        "s1": 78, "s2": 82, "s3": 77, "s4": 75, "s5": 67,
        "s6": 71, "s7": 64, "s8": 92, "s9": 80, "s10": 89,
    },
    "midterm2": {
        "s1": 82, "s2": 85, "s3": 90, "s4": 77, "s5": 77,
        "s6": 64, "s7": 33, "s8": 88, "s9": 39, "s10": 64,
    },
    "final": {
        "s1": 182, "s2": 180, "s3": 188, "s4": 149, "s5": 157,
        "s6": 175, "s7": 110, "s8": 184, "s9": 126, "s10": 116,
    },
}


def table_path(feature: str, exam: str, data_dir: Path | None = None) -> Path:
    """Return the CSV path for one (feature, exam) table."""
    base = Path(data_dir) if data_dir is not None else DATA_DIR
    return base / TABLE_PATH_PATTERN.format(feature=feature, exam=exam)


def grade_for(exam: str, student: str) -> int:
    """Look up a grade; a gap in the table is a fatal configuration error."""
    try:
        return int(GRADES[exam][student])
    except KeyError as exc:
        raise ConfigurationError(f"No grade configured for {student} in {exam}") from exc


def exam_duration(exam: str) -> int:
    try:
        return int(EXAM_DURATIONS[exam])
    except KeyError as exc:
        raise ConfigurationError(f"No duration configured for exam {exam!r}") from exc


__all__ = [
    "ROOT_DIR",
    "DATA_DIR",
    "ASSETS_DIR",
    "TABLE_PATH_PATTERN",
    "LOAD_MAX_WORKERS",
    "STRESS",
    "FEATURES",
    "NON_STRESS_FEATURES",
    "FEATURE_SCALE",
    "FEATURE_UNITS",
    "FEATURE_COLORS",
    "STUDENTS",
    "EXAMS",
    "EXAM_LABELS",
    "EXAM_DURATIONS",
    "GRADES",
    "table_path",
    "grade_for",
    "exam_duration",
]
