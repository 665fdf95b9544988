import pandas as pd
import pytest

from examstress import config
from examstress.engine.sessions import FeatureSeries, SeriesPoint, make_session, column_name


def series_of(*values, start=0.0):
    return FeatureSeries(tuple(SeriesPoint(float(start + i), v) for i, v in enumerate(values)))


def session_with(avgs=None, student="s1", exam="final", grade=100):
    """Session whose series for each feature is one reading equal to the wanted average."""
    avgs = avgs or {}
    series = {}
    for feature in config.FEATURES:
        value = avgs.get(feature)
        series[feature] = series_of(value) if value is not None else FeatureSeries()
    return make_session(student, exam, grade, series)


RAW_BASE = {"HR": 70.0, "EDA": 0.5, "BVP": 1.0, "TEMP": 6.0, config.STRESS: 1.0}


def write_dataset(root, minutes=(0, 1, 2), skip=(), empty_features=()):
    """Write a full synthetic CleanData tree.

    ``skip`` holds (feature, exam) pairs to leave out; tables for
    ``empty_features`` keep only the minute column.
    """
    for feature in config.FEATURES:
        for exam in config.EXAMS:
            if (feature, exam) in skip:
                continue
            frame = pd.DataFrame({"minute": list(minutes)})
            students = [] if feature in empty_features else config.STUDENTS
            for i, student in enumerate(students):
                frame[column_name(student, exam, feature)] = [RAW_BASE[feature] + i for _ in minutes]
            path = config.table_path(feature, exam, root)
            path.parent.mkdir(parents=True, exist_ok=True)
            frame.to_csv(path, index=False)
    return root


@pytest.fixture
def dataset_dir(tmp_path):
    return write_dataset(tmp_path / "CleanData")
