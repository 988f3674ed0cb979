"""
MemoryViewerSession - viewing a stored memory with live checklist toggles.

A toggle is applied to the local document at once and persisted through
update_memory. Saves run one at a time: each sends the last document the
collaborator confirmed with the blocks still waiting to be saved applied on
top, and the returned document becomes the new confirmed state. When a save
fails its block is dropped and the remaining unsaved blocks are re-applied to
the confirmed state.
"""

from __future__ import annotations
import asyncio
import logging

from ..block.block import Block
from ..block.placement import replace_block
from ..errors import MemoryBoardError
from ..viewer.base import BlockView, render_document
from ..viewer.checklist import ChecklistBlockView
from .client import MemoryClient
from .models import Memory


logger = logging.getLogger(__name__)


class MemoryNotLoadedError(MemoryBoardError):
    pass


class MemoryViewerSession:

    def __init__(self, client: MemoryClient, memory_id: str, accent_color: str | None = None):
        self.client = client
        self.memory_id = memory_id
        self.accent_color = accent_color
        self.memory: Memory | None = None
        self._confirmed: Memory | None = None
        self._unsaved: list[tuple[int, Block]] = []
        self._seq = 0
        self._generation = 0
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()

    def _require_memory(self) -> Memory:
        if self.memory is None:
            raise MemoryNotLoadedError(f"Memory {self.memory_id} is not loaded")
        return self.memory

    async def load(self) -> Memory:
        data = await self.client.get_memory_by_id(self.memory_id)
        self.memory = Memory.from_payload(data)
        self._confirmed = self.memory
        self._unsaved = []
        self._generation += 1
        return self.memory

    def views(self) -> list[BlockView]:
        memory = self._require_memory()
        return render_document(
            memory.content,
            accent_color=self.accent_color or memory.color,
            on_block_update=self.on_block_update,
        )

    def render(self) -> str:
        return "".join(view.render() for view in self.views())

    def _apply_unsaved(self, base: Memory, upto: int | None = None) -> Memory:
        blocks = [block for seq, block in self._unsaved if upto is None or seq <= upto]
        if not blocks:
            return base
        content = base.content
        for block in blocks:
            content = replace_block(content, block)
        return base.model_copy(update={"content": content})

    async def update_block(self, updated: Block) -> Memory:
        """Apply an updated block locally, persist it and adopt the stored document."""
        memory = self._require_memory()
        self._seq += 1
        seq, generation = self._seq, self._generation
        self._unsaved.append((seq, updated))
        self.memory = memory.model_copy(update={"content": replace_block(memory.content, updated)})

        async with self._lock:
            if generation != self._generation:
                logger.debug(f"Memory {self.memory_id} was reloaded; dropping save {seq}")
                return self._require_memory()
            payload = self._apply_unsaved(self._confirmed, upto=seq)
            try:
                response = await self.client.update_memory(self.memory_id, payload.to_payload())
            except Exception:
                logger.warning(f"Failed to persist block {updated.id}; reverting")
                if generation == self._generation:
                    self._unsaved = [(s, b) for s, b in self._unsaved if s != seq]
                    self.memory = self._apply_unsaved(self._confirmed)
                raise
            if generation != self._generation:
                logger.debug(f"Memory {self.memory_id} was reloaded; ignoring response {seq}")
                return self._require_memory()
            self._confirmed = Memory.from_payload(response) if response else payload
            self._unsaved = [(s, b) for s, b in self._unsaved if s > seq]
            self.memory = self._apply_unsaved(self._confirmed)
        return self.memory

    def on_block_update(self, updated: Block) -> None:
        """Callback handed to interactive views; persistence runs as a task."""
        loop = asyncio.get_running_loop()
        task = loop.create_task(self.update_block(updated))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def wait_pending(self) -> None:
        """Wait for in-flight persistence tasks, re-raising the first failure."""
        if self._pending:
            results = await asyncio.gather(*list(self._pending), return_exceptions=True)
            for result in results:
                if isinstance(result, BaseException):
                    raise result

    async def toggle_checklist_item(self, block_id: str, item_index: int) -> Memory:
        memory = self._require_memory()
        for index, block in enumerate(memory.content):
            if block.id == block_id:
                view = ChecklistBlockView(block, index=index, on_block_update=lambda b: None)
                updated = view.toggle(item_index)
                if updated is None:
                    return memory
                return await self.update_block(updated)
        logger.debug(f"No block {block_id} in memory {self.memory_id}")
        return memory
