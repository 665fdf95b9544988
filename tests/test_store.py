import pytest

from examstress.engine.store import SessionStore
from examstress.errors import TableLoadError

from conftest import write_dataset


def test_store_loads_once_and_serves_ranges(dataset_dir):
    store = SessionStore(data_dir=dataset_dir)
    assert not store.is_loaded()
    sessions = store.get_sessions()
    assert len(sessions) == 30
    assert store.get_sessions()[0] is sessions[0]
    ranges = store.get_ranges()
    assert (ranges["HR"].min, ranges["HR"].max) == (70, 79)
    status = store.get_status()
    assert status["loaded"] and status["session_count"] == 30


def test_store_stays_empty_when_load_fails(tmp_path):
    root = write_dataset(tmp_path / "CleanData", skip={("HR", "final")})
    store = SessionStore(data_dir=root)
    with pytest.raises(TableLoadError):
        store.load()
    assert not store.is_loaded()


def test_store_loads_when_a_feature_has_no_student_columns(tmp_path):
    root = write_dataset(tmp_path / "CleanData", empty_features={"STRESS"})
    store = SessionStore(data_dir=root)
    store.load()
    sessions = store.get_sessions()
    assert len(sessions) == 30
    assert all(s.avg["STRESS"] is None for s in sessions)
    ranges = store.get_ranges()
    assert "STRESS" not in ranges
    assert set(ranges) == {"HR", "EDA", "BVP", "TEMP"}
