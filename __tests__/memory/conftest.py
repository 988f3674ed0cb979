import asyncio
import copy
import pytest


class FakeMemoryClient:
    """In-memory stand-in for the persistence collaborator."""

    def __init__(self):
        self.stored: dict[str, dict] = {}
        self.created: list[dict] = []
        self.updated: list[tuple[str, dict]] = []
        self.fail_with: Exception | None = None
        self.response_override: dict | None = None
        # per-call outcomes for update_memory, consumed in call order
        self.update_delays: list[float] = []
        self.update_failures: list[Exception | None] = []
        self._next_id = 1

    async def create_memory(self, data):
        if self.fail_with is not None:
            raise self.fail_with
        self.created.append(copy.deepcopy(data))
        memory_id = f"m{self._next_id}"
        self._next_id += 1
        self.stored[memory_id] = {**copy.deepcopy(data), "_id": memory_id}
        return copy.deepcopy(self.stored[memory_id])

    async def update_memory(self, memory_id, data):
        delay = self.update_delays.pop(0) if self.update_delays else 0
        failure = self.update_failures.pop(0) if self.update_failures else self.fail_with
        if delay:
            await asyncio.sleep(delay)
        if failure is not None:
            raise failure
        self.updated.append((memory_id, copy.deepcopy(data)))
        if self.response_override is not None:
            return copy.deepcopy(self.response_override)
        self.stored[memory_id] = {**copy.deepcopy(data), "_id": memory_id}
        return copy.deepcopy(self.stored[memory_id])

    async def get_memory_by_id(self, memory_id):
        return copy.deepcopy(self.stored[memory_id])


@pytest.fixture
def client():
    return FakeMemoryClient()
