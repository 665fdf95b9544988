"""Load-once cache of exam sessions and slider ranges for the dashboard."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional

from examstress import config
from examstress.engine.loader import load_all_tables
from examstress.engine.ranges import FeatureRange, estimate_ranges
from examstress.engine.sessions import ExamSession, build_sessions

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the immutable session set; loading happens once, on first use."""

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = Path(data_dir) if data_dir is not None else None
        self._lock = threading.Lock()
        self._sessions: Optional[List[ExamSession]] = None
        self._ranges: Optional[Dict[str, FeatureRange]] = None
        self._loaded_at: Optional[float] = None

    # Public API
    def load(self) -> None:
        with self._lock:
            if self._sessions is not None:
                return
            data_dir = self._data_dir or config.DATA_DIR
            tables = load_all_tables(data_dir)
            sessions = build_sessions(tables)
            ranges = estimate_ranges(sessions)
            self._sessions = sessions
            self._ranges = ranges
            self._loaded_at = time.time()

    def set_sessions(self, sessions: List[ExamSession]) -> None:
        """Install an already-built session set (used by tests and offline tooling)."""
        with self._lock:
            self._sessions = list(sessions)
            self._ranges = estimate_ranges(self._sessions)
            self._loaded_at = time.time()

    def is_loaded(self) -> bool:
        with self._lock:
            return self._sessions is not None

    def get_sessions(self) -> List[ExamSession]:
        self.load()
        return list(self._sessions or [])

    def get_ranges(self) -> Dict[str, FeatureRange]:
        self.load()
        return dict(self._ranges or {})

    def get_status(self) -> Dict[str, object]:
        with self._lock:
            return {
                "loaded": self._sessions is not None,
                "data_dir": str(self._data_dir or config.DATA_DIR),
                "session_count": len(self._sessions or []),
                "loaded_at": self._loaded_at,
            }


__all__ = ["SessionStore"]
