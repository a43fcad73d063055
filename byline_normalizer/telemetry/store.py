"""Shared telemetry persistence helpers."""

from __future__ import annotations

import atexit
import logging
import queue
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import NullPool

from byline_normalizer.config import TELEMETRY_ASYNC_WRITES, TELEMETRY_DATABASE_URL


def _mask_database_url(url: str | None) -> str:
    if not url:
        return "<empty>"

    if "://" not in url:
        return url

    scheme, remainder = url.split("://", 1)
    if "@" not in remainder:
        return f"{scheme}://{remainder}"

    credentials, host = remainder.split("@", 1)
    if ":" in credentials:
        return f"{scheme}://***:***@{host}"
    return f"{scheme}://***@{host}"


class TelemetryStore:
    """Queue + connection manager for telemetry writers.

    Tasks are callables that receive an open SQLAlchemy ``Connection``
    inside a transaction. With ``async_writes`` they run on a single
    background thread in submission order; otherwise they run inline.
    """

    _STOP = object()

    def __init__(
        self,
        database: str | None = None,
        *,
        async_writes: bool = TELEMETRY_ASYNC_WRITES,
        thread_name: str = "TelemetryStoreWriter",
        engine: Engine | None = None,
    ) -> None:
        self.database_url = database or TELEMETRY_DATABASE_URL
        self.async_writes = async_writes
        self._logger = logging.getLogger(__name__)

        if engine is not None:
            self._engine = engine
            self._owns_engine = False
        else:
            self._engine = create_engine(
                self.database_url,
                poolclass=NullPool if async_writes else None,
                echo=False,
            )
            self._owns_engine = True

        self._logger.debug(
            "TelemetryStore using %s", _mask_database_url(self.database_url)
        )

        self._queue: queue.Queue | None = None
        self._writer_thread: threading.Thread | None = None
        self._owns_thread = False

        self._ddl_cache: set[str] = set()
        self._ddl_lock = threading.Lock()

        if async_writes:
            self._queue = queue.Queue()
            self._writer_thread = threading.Thread(
                target=self._worker_loop,
                name=thread_name,
                daemon=True,
            )
            self._writer_thread.start()
            self._owns_thread = True
            atexit.register(self.shutdown)

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    def submit(
        self,
        task: Callable[[Connection], None],
        *,
        ensure: Sequence[str] | None = None,
    ) -> None:
        """Submit a task to be executed against the database.

        Args:
            task: Callable that accepts an open SQLAlchemy connection
            ensure: Optional DDL statements to run (once) before the task
        """
        job = (task, tuple(ensure) if ensure else tuple())
        if self.async_writes and self._queue is not None:
            self._queue.put(job)
        else:
            self._execute(job)

    def flush(self) -> None:
        """Wait for all pending async writes to complete."""
        if self.async_writes and self._queue is not None:
            self._queue.join()

    def shutdown(self, wait: bool = False) -> None:
        """Stop the writer thread and release the engine we created."""
        if self.async_writes and self._queue is not None and self._owns_thread:
            if wait:
                self.flush()
            self._queue.put(self._STOP)
            if self._writer_thread:
                self._writer_thread.join(timeout=5)
            self._owns_thread = False

        if self._owns_engine:
            self._engine.dispose()

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Yield a connection for reads (tests, CLI summaries)."""
        conn = self._engine.connect()
        try:
            yield conn
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------
    def _ensure_schema(self, conn: Connection, ddls: Sequence[str]) -> None:
        with self._ddl_lock:
            for ddl in ddls:
                if ddl not in self._ddl_cache:
                    conn.execute(text(ddl))
                    self._ddl_cache.add(ddl)

    def _execute(self, job: tuple[Callable[[Connection], None], tuple[str, ...]]) -> None:
        task, ddls = job
        with self._engine.begin() as conn:
            if ddls:
                self._ensure_schema(conn, ddls)
            task(conn)

    def _worker_loop(self) -> None:
        """Background worker thread that processes queued tasks."""
        assert self._queue is not None
        while True:
            job = self._queue.get()
            if job is self._STOP:
                self._queue.task_done()
                break
            try:
                self._execute(job)
            except Exception as exc:  # pragma: no cover
                # Keep the writer alive; the failed batch is only logged.
                self._logger.exception(
                    "Telemetry background write failed, continuing",
                    exc_info=exc,
                )
            finally:
                self._queue.task_done()


_default_store_lock = threading.Lock()
_default_store: TelemetryStore | None = None


def get_store(
    database: str | None = None,
    *,
    engine: Engine | None = None,
) -> TelemetryStore:
    """Return a process-wide shared telemetry store."""
    global _default_store
    with _default_store_lock:
        if _default_store is None:
            _default_store = TelemetryStore(database=database, engine=engine)
    return _default_store


def reset_store() -> None:
    """Shut down and forget the shared store."""
    global _default_store
    with _default_store_lock:
        if _default_store is not None:
            _default_store.shutdown(wait=True)
        _default_store = None


def describe_rows(conn: Connection, sql: str, **params: Any) -> list[dict[str, Any]]:
    """Run a read query and return rows as plain dicts."""
    result = conn.execute(text(sql), params)
    return [dict(row._mapping) for row in result]
