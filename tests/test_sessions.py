import pytest

from examstress import config
from examstress.engine.loader import load_all_tables, load_feature_table
from examstress.engine.sessions import FeatureSeries, SeriesPoint, build_sessions, column_name, extract_series
from examstress.errors import ConfigurationError

from conftest import series_of, session_with


def test_mean_of_complete_series():
    assert series_of(10, 20, 30).mean() == 20


def test_mean_skips_missing_values():
    assert series_of(10, None, 30).mean() == 20


def test_mean_of_empty_series_is_undefined():
    assert FeatureSeries().mean() is None
    assert series_of(None, None).mean() is None


def test_column_names():
    assert column_name("s1", "final", "HR") == "s1_final_HR"
    assert column_name("s10", "midterm2", "TEMP") == "s10_midterm2_TEMP"
    assert column_name("s4", "midterm1", config.STRESS) == "s4_stress"


def test_every_student_exam_pair_built_once(dataset_dir):
    sessions = build_sessions(load_all_tables(dataset_dir))
    keys = [s.key for s in sessions]
    assert len(sessions) == len(config.STUDENTS) * len(config.EXAMS) == 30
    assert len(set(keys)) == 30
    for s in sessions:
        assert s.grade == config.GRADES[s.exam][s.student]
        assert set(s.time_series) == set(config.FEATURES)
        assert set(s.avg) == set(config.FEATURES)


def test_sessions_are_exam_major(dataset_dir):
    sessions = build_sessions(load_all_tables(dataset_dir))
    expected = [(st, ex) for ex in config.EXAMS for st in config.STUDENTS]
    assert [s.key for s in sessions] == expected


def test_series_keep_row_order_and_scaling(dataset_dir):
    sessions = build_sessions(load_all_tables(dataset_dir))
    s3_final = next(s for s in sessions if s.key == ("s3", "final"))
    assert s3_final.time_series["HR"].minutes() == [0.0, 1.0, 2.0]
    assert s3_final.avg["HR"] == pytest.approx(72.0)
    # raw EDA 0.5 + 2 for the third student, scaled by 100
    assert s3_final.avg["EDA"] == pytest.approx(250.0)
    assert s3_final.duration == 180


def test_absent_student_column_gives_undefined_average(dataset_dir):
    tables = load_all_tables(dataset_dir)
    tables[("BVP", "midterm1")] = tables[("BVP", "midterm1")].drop(columns=["s7_midterm1_BVP"])
    sessions = build_sessions(tables)
    s7 = next(s for s in sessions if s.key == ("s7", "midterm1"))
    assert len(s7.time_series["BVP"]) == 0
    assert s7.avg["BVP"] is None
    assert s7.avg["HR"] is not None
    assert len(sessions) == 30


def test_missing_table_is_a_configuration_error(dataset_dir):
    tables = load_all_tables(dataset_dir)
    del tables[("HR", "final")]
    with pytest.raises(ConfigurationError):
        build_sessions(tables)


def test_missing_grade_is_fatal():
    with pytest.raises(ConfigurationError):
        config.grade_for("final", "s99")


def test_blank_minute_keeps_its_reading(tmp_path):
    path = tmp_path / "HRfinal.csv"
    path.write_text("minute,s1_final_HR\n0,10\n,50\n2,30\n")
    series = extract_series(load_feature_table(path, "HR"), "s1_final_HR")
    assert series.points == (SeriesPoint(0.0, 10.0), SeriesPoint(None, 50.0), SeriesPoint(2.0, 30.0))
    assert series.mean() == 30


def test_has_averages_reports_undefined_features():
    session = session_with({"HR": 80, "EDA": 12})
    assert session.has_averages(["HR", "EDA"])
    assert not session.has_averages(["HR", "TEMP"])
    assert session.has_averages([])
