"""Feature table loading: one CSV per (feature, exam), read concurrently and joined."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from examstress import config
from examstress.errors import TableLoadError

logger = logging.getLogger(__name__)

MINUTE_COLUMN = "minute"

FeatureTables = Dict[Tuple[str, str], pd.DataFrame]


def prepare_table(frame: pd.DataFrame, feature: str) -> pd.DataFrame:
    """Coerce cells to numbers and apply the feature's ingestion scale.

    Unparseable cells become NaN. Row order is kept as read.
    """
    if MINUTE_COLUMN not in frame.columns:
        raise TableLoadError(f"{feature} table has no '{MINUTE_COLUMN}' column")
    scale = config.FEATURE_SCALE.get(feature)
    if scale is None:
        raise TableLoadError(f"Unknown feature {feature!r}")
    out = frame.apply(pd.to_numeric, errors="coerce")
    value_cols = [c for c in out.columns if c != MINUTE_COLUMN]
    if value_cols and scale != 1.0:
        out[value_cols] = out[value_cols] * scale
    return out.reset_index(drop=True)


def load_feature_table(path: Path, feature: str) -> pd.DataFrame:
    """Read and prepare a single table; any failure raises TableLoadError."""
    path = Path(path)
    if not path.exists():
        raise TableLoadError(f"Missing table: {path}", paths=[path])
    try:
        frame = pd.read_csv(path)
    except (OSError, ValueError) as exc:
        raise TableLoadError(f"Could not read {path}: {exc}", paths=[path]) from exc
    frame.columns = [str(c).strip() for c in frame.columns]
    try:
        return prepare_table(frame, feature)
    except TableLoadError as exc:
        raise TableLoadError(f"{path}: {exc}", paths=[path]) from exc


def load_all_tables(data_dir: Optional[Path] = None, max_workers: Optional[int] = None) -> FeatureTables:
    """Load every (feature, exam) table and wait for all of them.

    Partial results are never returned: if any read fails the whole load
    fails with a TableLoadError listing every failed path.
    """
    base = Path(data_dir) if data_dir is not None else config.DATA_DIR
    jobs = [(feature, exam) for feature in config.FEATURES for exam in config.EXAMS]
    workers = max_workers or config.LOAD_MAX_WORKERS
    logger.info("Loading %d feature tables from %s", len(jobs), base)
    started = time.perf_counter()

    tables: FeatureTables = {}
    failures: List[Tuple[Path, Exception]] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="table-load") as pool:
        futures = {
            key: pool.submit(load_feature_table, config.table_path(key[0], key[1], base), key[0])
            for key in jobs
        }
        for key, future in futures.items():
            try:
                tables[key] = future.result()
            except TableLoadError as exc:
                logger.error("Table load failed for %s/%s: %s", key[0], key[1], exc)
                failures.append((config.table_path(key[0], key[1], base), exc))

    if failures:
        paths = [p for p, _ in failures]
        raise TableLoadError(
            f"{len(failures)} of {len(jobs)} tables failed to load: " + ", ".join(str(p) for p in paths),
            paths=paths,
        )
    logger.info("Loaded %d tables in %.2fs", len(tables), time.perf_counter() - started)
    return tables


__all__ = ["MINUTE_COLUMN", "FeatureTables", "prepare_table", "load_feature_table", "load_all_tables"]
