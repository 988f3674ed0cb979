"""
The persistence collaborator, as seen from this package.

Transport, authentication and storage are the host's business; it supplies an
object with these coroutines. `data` is the payload built by
MemoryDraft.to_payload(); responses are memory dicts carrying an `id` (or
`_id`) and the stored content.
"""

from __future__ import annotations
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MemoryClient(Protocol):

    async def create_memory(self, data: dict[str, Any]) -> dict[str, Any]:
        ...

    async def update_memory(self, memory_id: str, data: dict[str, Any]) -> dict[str, Any]:
        ...

    async def get_memory_by_id(self, memory_id: str) -> dict[str, Any]:
        ...
