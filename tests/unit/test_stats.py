"""
Unit tests for abs_investigator.utils.stats module.
"""

import threading

from abs_investigator.utils.stats import ExecutionStats


class TestExecutionStats:
    """Test ExecutionStats class."""

    def test_initialization(self):
        stats = ExecutionStats(completed=0, failed=0, timed_out=5)

        assert stats.get("completed") == 0
        assert stats.get("timed_out") == 5

    def test_increment(self):
        stats = ExecutionStats(completed=0)

        stats.increment("completed")
        stats.increment("completed", amount=2)
        stats.increment("failed")

        assert stats["completed"] == 3
        assert stats["failed"] == 1

    def test_thread_safety(self):
        """Increments from many threads are not lost."""
        stats = ExecutionStats(counter=0)

        def increment_many():
            for _ in range(1000):
                stats.increment("counter")

        threads = [threading.Thread(target=increment_many) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert stats.get("counter") == 10000

    def test_to_dict_is_copy(self):
        stats = ExecutionStats(completed=10, failed=5)

        stats_dict = stats.to_dict()
        stats_dict["new"] = 1

        assert stats.to_dict() == {"completed": 10, "failed": 5}

    def test_get_with_default(self):
        stats = ExecutionStats()

        assert stats.get("nonexistent") == 0
        assert stats.get("nonexistent", default=99) == 99

    def test_total_and_merge(self):
        first = ExecutionStats(completed=2, failed=1)
        second = ExecutionStats(completed=3, cancelled=4)

        first.merge(second)

        assert first.to_dict() == {"completed": 5, "failed": 1, "cancelled": 4}
        assert first.total() == 10

    def test_lock_property(self):
        stats = ExecutionStats()

        assert hasattr(stats.lock, "acquire")
        assert hasattr(stats.lock, "release")

    def test_repr(self):
        stats = ExecutionStats(completed=5, failed=2)

        assert repr(stats) == "ExecutionStats(completed=5, failed=2)"
