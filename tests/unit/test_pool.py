"""
Test the bounded concurrency runner
"""
import asyncio
import pytest
from zos_search.search.pool import async_pool


class ConcurrencyGate:
    """Counts how many workers are running at once"""

    def __init__(self, delay=0.01):
        self.delay = delay
        self.running = 0
        self.peak = 0
        self.seen = []

    async def __call__(self, item):
        self.running += 1
        self.peak = max(self.peak, self.running)
        try:
            await asyncio.sleep(self.delay)
            self.seen.append(item)
        finally:
            self.running -= 1


class TestAsyncPool:
    """Test async_pool"""

    @pytest.mark.parametrize("limit", [0, None, 1, 3, 10, 50])
    def test_every_item_processed_once(self, limit):
        """Test each item is handed to the worker exactly once"""
        gate = ConcurrencyGate()
        items = list(range(10))

        errors = asyncio.run(async_pool(limit, items, gate))

        assert errors == []
        assert sorted(gate.seen) == items

    @pytest.mark.parametrize("limit", [1, 2, 4])
    def test_limit_is_respected(self, limit):
        """Test no more than limit workers run at once"""
        gate = ConcurrencyGate()

        asyncio.run(async_pool(limit, range(12), gate))

        assert gate.peak == limit

    def test_zero_limit_runs_everything_at_once(self):
        """Test 0 means no limit"""
        gate = ConcurrencyGate()

        asyncio.run(async_pool(0, range(8), gate))

        assert gate.peak == 8

    def test_single_worker_keeps_input_order(self):
        """Test items are submitted in order"""
        gate = ConcurrencyGate(delay=0)

        asyncio.run(async_pool(1, ["c", "a", "b"], gate))

        assert gate.seen == ["c", "a", "b"]

    def test_empty_input(self):
        """Test nothing to do completes immediately"""
        gate = ConcurrencyGate()

        assert asyncio.run(async_pool(2, [], gate)) == []
        assert gate.seen == []

    def test_failure_does_not_stop_siblings(self):
        """Test a raising worker is reported and the others still run"""
        done = []

        async def worker(item):
            await asyncio.sleep(0)
            if item == 2:
                raise RuntimeError("boom")
            done.append(item)

        errors = asyncio.run(async_pool(2, range(5), worker))

        assert sorted(done) == [0, 1, 3, 4]
        assert len(errors) == 1
        assert errors[0][0] == 2
        assert isinstance(errors[0][1], RuntimeError)


if __name__ == '__main__':
    pytest.main([__file__])
