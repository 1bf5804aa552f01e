"""
Thread-safe counters for concurrent adapter calls.

Used by the fan-out helper to count completed, failed, timed-out and
cancelled calls while worker threads report back.
"""

from threading import Lock


class ExecutionStats:
    """
    Named integer counters guarded by one lock.

    Example:
        stats = ExecutionStats(completed=0, failed=0)
        stats.increment("failed")
        stats["failed"]  # 1
    """

    def __init__(self, **initial_values: int):
        self._lock = Lock()
        self._counters: dict[str, int] = dict(initial_values)

    @property
    def lock(self) -> Lock:
        return self._lock

    def increment(self, key: str, amount: int = 1) -> None:
        """Thread-safe increment of a counter (created at 0 if missing)."""
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def get(self, key: str, default: int = 0) -> int:
        with self._lock:
            return self._counters.get(key, default)

    def total(self) -> int:
        """Sum of every counter."""
        with self._lock:
            return sum(self._counters.values())

    def merge(self, other: "ExecutionStats") -> None:
        """Add another tracker's counters into this one."""
        for key, value in other.to_dict().items():
            self.increment(key, value)

    def to_dict(self) -> dict[str, int]:
        with self._lock:
            return self._counters.copy()

    def __getitem__(self, key: str) -> int:
        return self.get(key)

    def __repr__(self) -> str:
        with self._lock:
            items = ", ".join(f"{k}={v}" for k, v in sorted(self._counters.items()))
            return f"ExecutionStats({items})"
