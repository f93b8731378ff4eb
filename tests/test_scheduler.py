"""Tests for the next-tick task queue."""

from goldenpane import TaskQueue


class TestTaskQueue:
    """Deferred callbacks."""

    def test_runs_in_order(self):
        queue = TaskQueue()
        calls = []
        queue.schedule(calls.append, 1)
        queue.schedule(calls.append, 2)

        assert calls == []
        assert queue.run_pending() == 2
        assert calls == [1, 2]
        assert len(queue) == 0

    def test_tasks_scheduled_while_draining_wait(self):
        queue = TaskQueue()
        calls = []

        def first():
            calls.append("first")
            queue.schedule(calls.append, "second")

        queue.schedule(first)

        assert queue.run_pending() == 1
        assert calls == ["first"]
        assert queue.run_pending() == 1
        assert calls == ["first", "second"]

    def test_failure_does_not_stop_queue(self, caplog):
        queue = TaskQueue()
        calls = []

        def broken():
            raise RuntimeError("boom")

        queue.schedule(broken)
        queue.schedule(calls.append, "after")

        assert queue.run_pending() == 2
        assert calls == ["after"]
        assert "failed" in caplog.text

    def test_clear(self):
        queue = TaskQueue()
        queue.schedule(print)
        queue.clear()

        assert queue.run_pending() == 0
