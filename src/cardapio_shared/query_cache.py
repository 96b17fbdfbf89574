"""
Keyed result cache for remote reads plus the interval refetcher.

Entries are keyed by the full parameter tuple of a read (``("products",
restaurant_id, category_id)``) so a change in any parameter is a different
entry. Errors are never cached: a failed fetch leaves the previous entry in
place and the exception reaches the caller.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from cardapio_shared.constants import QUERY_GC_SECONDS
from cardapio_shared.datetime_utils import utcnow

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]


class QueryStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class QueryResult:
    status: QueryStatus
    data: Any = None
    error: Exception | None = None
    updated_at: datetime | None = None

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def is_fetched(self) -> bool:
        return self.status is not QueryStatus.LOADING

    @classmethod
    def loading(cls) -> QueryResult:
        return cls(status=QueryStatus.LOADING)

    @classmethod
    def success(cls, data: Any, updated_at: datetime | None = None) -> QueryResult:
        return cls(status=QueryStatus.SUCCESS, data=data, updated_at=updated_at or utcnow())

    @classmethod
    def failure(cls, error: Exception) -> QueryResult:
        return cls(status=QueryStatus.ERROR, error=error)


@dataclass
class _Entry:
    data: Any
    updated_at: datetime
    last_used: datetime
    keep_for: timedelta


class QueryCache:
    """
    Thread-safe in-process cache of query results.

    Every write evicts entries that nobody has read or written for
    ``gc_seconds`` (or their own stale time, when longer), so keys built from
    request parameters do not accumulate.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utcnow,
        gc_seconds: float = QUERY_GC_SECONDS,
    ):
        self._clock = clock
        self._gc_seconds = gc_seconds
        self._entries: dict[QueryKey, _Entry] = {}
        self._lock = threading.Lock()

    def fetch(
        self,
        key: QueryKey,
        fetcher: Callable[[], Any],
        stale_time: float = 0,
    ) -> Any:
        """
        Return the cached value for ``key`` while it is younger than
        ``stale_time`` seconds, otherwise run ``fetcher`` and store its result.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.last_used = now
        if entry is not None and stale_time > 0:
            if now - entry.updated_at < timedelta(seconds=stale_time):
                return entry.data

        data = fetcher()
        self.set(key, data, stale_time)
        return data

    def set(self, key: QueryKey, data: Any, stale_time: float = 0) -> None:
        now = self._clock()
        keep_for = timedelta(seconds=max(stale_time, self._gc_seconds))
        with self._lock:
            self._collect(now)
            self._entries[key] = _Entry(
                data=data, updated_at=now, last_used=now, keep_for=keep_for
            )

    def _collect(self, now: datetime) -> None:
        expired = [
            key for key, entry in self._entries.items() if now - entry.last_used >= entry.keep_for
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Evicted %d unused query entries", len(expired))

    def get_state(self, key: QueryKey) -> QueryResult:
        """Snapshot of an entry; keys never fetched report ``loading``."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.last_used = self._clock()
        if entry is None:
            return QueryResult.loading()
        return QueryResult.success(entry.data, entry.updated_at)

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Drop every entry whose key starts with ``prefix``; returns the count."""
        with self._lock:
            doomed = [key for key in self._entries if key[: len(prefix)] == prefix]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@dataclass
class RefetchTask:
    func: Callable[[], Any]
    interval: timedelta
    next_run: datetime
    last_run: datetime | None = None
    run_count: int = 0
    last_error: str | None = None


class QueryRefetcher:
    """
    Runs registered refetch tasks at fixed intervals on a daemon thread.

    State is ephemeral: tasks are registered by whoever first needs the data
    and disappear with the process.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow, poll_seconds: float = 1.0):
        self._clock = clock
        self._poll_seconds = poll_seconds
        self._tasks: dict[str, RefetchTask] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def add_task(self, name: str, func: Callable[[], Any], interval_seconds: int) -> bool:
        """Register ``func``; returns False when a task with that name exists."""
        with self._lock:
            if name in self._tasks:
                return False
            interval = timedelta(seconds=interval_seconds)
            self._tasks[name] = RefetchTask(
                func=func, interval=interval, next_run=self._clock() + interval
            )
        logger.info("Refetch task '%s' scheduled every %ss", name, interval_seconds)
        return True

    def remove_task(self, name: str) -> None:
        with self._lock:
            self._tasks.pop(name, None)

    def has_task(self, name: str) -> bool:
        with self._lock:
            return name in self._tasks

    def run_pending(self, now: datetime | None = None) -> list[str]:
        """Run every task whose next run is due; returns the names that ran."""
        now = now or self._clock()
        with self._lock:
            due = [(name, task) for name, task in self._tasks.items() if now >= task.next_run]

        ran = []
        for name, task in due:
            try:
                task.func()
                task.last_error = None
                logger.debug("Refetch task '%s' completed", name)
            except Exception as exc:
                task.last_error = str(exc)
                logger.error("Refetch task '%s' failed: %s", name, exc)
            task.last_run = now
            task.run_count += 1
            task.next_run = now + task.interval
            ran.append(name)
        return ran

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="query-refetcher", daemon=True)
        self._thread.start()
        logger.info("Query refetcher started")

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self._poll_seconds * 2)
            self._thread = None

    def _loop(self) -> None:
        while not self._stop.wait(self._poll_seconds):
            self.run_pending()

    def get_status(self) -> dict[str, dict[str, Any]]:
        with self._lock:
            tasks = dict(self._tasks)
        return {
            name: {
                "last_run": t.last_run.isoformat() if t.last_run else None,
                "next_run": t.next_run.isoformat(),
                "interval_seconds": int(t.interval.total_seconds()),
                "run_count": t.run_count,
                "last_error": t.last_error,
            }
            for name, t in tasks.items()
        }
