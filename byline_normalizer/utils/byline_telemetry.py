"""
Telemetry for byline cleaning decisions.

Captures the transformations each raw byline went through and the stage
that decided its outcome, for tuning the heuristics against real pages.
Collection is in-memory; persistence through a ``TelemetryStore`` is
optional and best-effort.
"""

import logging
import time
import uuid
from collections import Counter, deque
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from sqlalchemy import text

from byline_normalizer.telemetry.store import TelemetryStore

logger = logging.getLogger(__name__)

# Finished sessions kept in memory; older ones are only in the store.
RECENT_SESSION_LIMIT = 100

SESSION_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS byline_cleaning_telemetry (
    id TEXT PRIMARY KEY,
    raw_byline TEXT,
    raw_byline_length INTEGER,
    outcome TEXT,
    reason TEXT,
    cleaned_byline TEXT,
    steps_count INTEGER,
    processing_time_ms REAL,
    created_at TIMESTAMP
)
"""

STEP_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS byline_transformation_steps (
    id TEXT PRIMARY KEY,
    telemetry_id TEXT NOT NULL,
    step_number INTEGER,
    step_name TEXT,
    input_text TEXT,
    output_text TEXT,
    removed_content TEXT,
    notes TEXT,
    created_at TIMESTAMP
)
"""

SESSION_INSERT_SQL = """
INSERT INTO byline_cleaning_telemetry (
    id, raw_byline, raw_byline_length, outcome, reason, cleaned_byline,
    steps_count, processing_time_ms, created_at
) VALUES (
    :id, :raw_byline, :raw_byline_length, :outcome, :reason, :cleaned_byline,
    :steps_count, :processing_time_ms, :created_at
)
"""

STEP_INSERT_SQL = """
INSERT INTO byline_transformation_steps (
    id, telemetry_id, step_number, step_name, input_text, output_text,
    removed_content, notes, created_at
) VALUES (
    :id, :telemetry_id, :step_number, :step_name, :input_text, :output_text,
    :removed_content, :notes, :created_at
)
"""


class BylineCleaningTelemetry:
    """Collect per-byline cleaning sessions and optionally persist them."""

    def __init__(
        self,
        enable_telemetry: bool = True,
        store: Optional[TelemetryStore] = None,
        history_size: int = RECENT_SESSION_LIMIT,
    ) -> None:
        """
        Initialize telemetry collector.

        Args:
            enable_telemetry: Whether to actually collect telemetry
            store: Optional store that finished sessions are written to
            history_size: How many finished sessions to keep in memory
        """
        self.enable_telemetry = enable_telemetry
        self._store = store

        self.current_session: Optional[Dict[str, Any]] = None
        self.transformation_steps: List[Dict[str, Any]] = []
        self.sessions: Deque[Dict[str, Any]] = deque(maxlen=history_size)
        self._outcome_counts: Counter = Counter()

    def start_cleaning_session(self, raw_byline: str) -> str:
        """Start a new session and return its telemetry id."""
        telemetry_id = str(uuid.uuid4())
        if not self.enable_telemetry:
            return telemetry_id

        self.current_session = {
            "telemetry_id": telemetry_id,
            "raw_byline": raw_byline,
            "raw_byline_length": len(raw_byline),
            "start_time": time.perf_counter(),
            "created_at": datetime.now().isoformat(),
        }
        self.transformation_steps = []
        return telemetry_id

    def log_transformation_step(
        self,
        step_name: str,
        input_text: str,
        output_text: str,
        removed_content: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Log a single transformation step in the cleaning process."""
        if not self.enable_telemetry or not self.current_session:
            return

        self.transformation_steps.append(
            {
                "id": str(uuid.uuid4()),
                "telemetry_id": self.current_session["telemetry_id"],
                "step_number": len(self.transformation_steps) + 1,
                "step_name": step_name,
                "input_text": input_text,
                "output_text": output_text,
                "removed_content": removed_content,
                "notes": notes,
                "created_at": datetime.now().isoformat(),
            }
        )

    def finalize_cleaning_session(self, outcome) -> None:
        """Close the current session with its outcome and store it."""
        if not self.enable_telemetry or not self.current_session:
            return

        session = self.current_session
        session.update(
            {
                "outcome": outcome.kind.value,
                "reason": outcome.reason,
                "cleaned_byline": outcome.text,
                "steps_count": len(self.transformation_steps),
                "processing_time_ms": (time.perf_counter() - session.pop("start_time"))
                * 1000,
                "steps": self.transformation_steps,
            }
        )
        self.sessions.append(session)
        self._outcome_counts[session["outcome"]] += 1

        if self._store is not None:
            self._store_telemetry_data(session)

        self.current_session = None
        self.transformation_steps = []

    def _store_telemetry_data(self, session: Dict[str, Any]) -> None:
        row = {key: value for key, value in session.items() if key != "steps"}
        row["id"] = row.pop("telemetry_id")
        steps = [dict(step) for step in session["steps"]]

        def writer(conn):
            conn.execute(text(SESSION_INSERT_SQL), row)
            if steps:
                conn.execute(text(STEP_INSERT_SQL), steps)

        try:
            self._store.submit(writer, ensure=(SESSION_TABLE_DDL, STEP_TABLE_DDL))
        except Exception:
            # Telemetry must never change a cleaning result.
            logger.exception("Failed to store byline telemetry %s", row["id"])

    def flush(self) -> None:
        if self._store is not None:
            self._store.flush()

    def get_session_summary(self) -> Optional[Dict[str, Any]]:
        """Summarize the most recently finished session."""
        if not self.sessions:
            return None

        last = self.sessions[-1]
        return {
            "telemetry_id": last["telemetry_id"],
            "raw_byline": last["raw_byline"],
            "outcome": last["outcome"],
            "reason": last["reason"],
            "steps_completed": last["steps_count"],
        }

    def outcome_counts(self) -> Dict[str, int]:
        """Count every finished session per outcome kind."""
        return dict(self._outcome_counts)
