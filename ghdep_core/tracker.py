"""In-flight operation counting for the TUI.

Thread-safe: operations are started from the Textual event loop, while
their completions are counted down from worker threads.
"""

import threading


class OperationTracker:
    """Count running background operations per review unit.

    Keys are operation keys (``repository/number``). A key is present only
    while its count is at least one.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def mark_in_progress(self, key: str) -> None:
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + 1

    def mark_done(self, key: str) -> None:
        """Count one operation down.  Unknown keys are ignored."""
        with self._lock:
            count = self._counts.get(key)
            if count is None:
                return
            if count <= 1:
                del self._counts[key]
            else:
                self._counts[key] = count - 1

    def has_work_in_progress(self) -> bool:
        with self._lock:
            return bool(self._counts)

    def count(self, key: str) -> int:
        """Return the number of running operations for *key* (0 if none)."""
        with self._lock:
            return self._counts.get(key, 0)

    def snapshot(self) -> dict[str, int]:
        """Return a copy of all counts."""
        with self._lock:
            return dict(self._counts)
