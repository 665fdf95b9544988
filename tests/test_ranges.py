import pytest

from examstress.engine.ranges import estimate_ranges, feature_range

from conftest import session_with


def test_bounds_snap_outward_to_integers():
    sessions = [session_with({"HR": v}) for v in (90.4, 150.0, 110.9)]
    rng = feature_range(sessions, "HR")
    assert (rng.min, rng.max) == (90, 150)
    assert rng.initial == 120


def test_undefined_averages_are_ignored():
    sessions = [session_with({"HR": 80.2}), session_with({}), session_with({"HR": 99.1})]
    rng = feature_range(sessions, "HR")
    assert (rng.min, rng.max) == (80, 100)


def test_estimate_ranges_covers_requested_features():
    sessions = [session_with({"HR": 70, "EDA": 12.5, "BVP": 3, "TEMP": 160, "STRESS": 2})]
    ranges = estimate_ranges(sessions)
    assert set(ranges) == {"HR", "EDA", "BVP", "TEMP", "STRESS"}
    assert ranges["EDA"].min == 12 and ranges["EDA"].max == 13


def test_empty_session_set_rejected():
    with pytest.raises(ValueError):
        estimate_ranges([])


def test_feature_without_any_average_rejected():
    with pytest.raises(ValueError):
        feature_range([session_with({"HR": 70})], "EDA")


def test_feature_without_any_average_left_out_of_estimate():
    ranges = estimate_ranges([session_with({"HR": 70.4}), session_with({"HR": 81})])
    assert set(ranges) == {"HR"}
    assert (ranges["HR"].min, ranges["HR"].max) == (70, 81)
