import asyncio
import pytest
from memoryboard.editor import Debouncer


class TestDebouncer:
    """Tests for last-write-wins deferred calls."""

    def test_fires_immediately_without_loop(self):
        calls = []
        debounced = Debouncer(calls.append, 0.5)
        debounced("a")
        debounced("b")
        assert calls == ["a", "b"]
        assert not debounced.pending

    @pytest.mark.asyncio
    async def test_last_call_wins(self):
        calls = []
        debounced = Debouncer(calls.append, 0.05)
        for value in ["a", "b", "c"]:
            debounced(value)
        assert debounced.pending
        assert calls == []
        await asyncio.sleep(0.2)
        assert calls == ["c"]
        assert not debounced.pending

    @pytest.mark.asyncio
    async def test_cancel(self):
        calls = []
        debounced = Debouncer(calls.append, 0.05)
        debounced("a")
        debounced.cancel()
        await asyncio.sleep(0.2)
        assert calls == []

    @pytest.mark.asyncio
    async def test_flush_runs_pending_once(self):
        calls = []
        debounced = Debouncer(calls.append, 10)
        debounced("a")
        debounced.flush()
        debounced.flush()
        assert calls == ["a"]

    @pytest.mark.asyncio
    async def test_zero_delay(self):
        calls = []
        debounced = Debouncer(lambda: calls.append(1), 0)
        debounced()
        assert calls == [1]
