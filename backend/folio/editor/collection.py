"""Ordered, in-memory block list for one section.

The list held here is the source of truth for block order and content
during an editing session; any UI renders from it. Nothing in this module
talks to the server: persistence goes through :mod:`folio.editor.session`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator

from .blocks import Block, BlockKind

log = logging.getLogger(__name__)


class ConfirmationKind(str, Enum):
    DELETE_BLOCK = "delete_block"
    LEAVE = "leave"


@dataclass
class PendingConfirmation:
    kind: ConfirmationKind
    prompt: str
    block: Block | None = None


class BlockNotInCollection(LookupError):
    pass


class BlockCollection:
    def __init__(self) -> None:
        self._blocks: list[Block] = []
        self.dirty: bool = False
        self.pending: PendingConfirmation | None = None

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def is_empty(self) -> bool:
        return not self._blocks

    def index_of(self, block: Block) -> int:
        for index, candidate in enumerate(self._blocks):
            if candidate is block:
                return index
        raise BlockNotInCollection(f"Block {block.key} is not in this collection")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, items: Iterable[dict[str, Any]]) -> None:
        """Replace every block with one block per item, in order_index order.

        An empty iterable leaves a valid, empty section.
        """
        ordered = sorted(items, key=lambda item: item.get("order_index", 0))
        self._blocks = [Block.from_item(item) for item in ordered]
        self.pending = None
        self.dirty = False

    def adopt(self, items: Iterable[dict[str, Any]]) -> None:
        """Load the server's canonical list after a save.

        Blocks whose upload is still running were never sent; they are put
        back near their old position and keep the collection dirty.
        """
        uploading = [(index, b) for index, b in enumerate(self._blocks) if b.upload_pending]
        self.load(items)

        for index, block in uploading:
            self._blocks.insert(min(index, len(self._blocks)), block)
        if uploading:
            self.dirty = True

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def mark_dirty(self) -> None:
        self.dirty = True

    def add_text_block(self, html: str = "") -> Block:
        block = Block.text(html)
        self._blocks.append(block)
        self.mark_dirty()
        return block

    def add_image_block(self) -> Block:
        block = Block.image()
        self._blocks.append(block)
        self.mark_dirty()
        return block

    def move_up(self, block: Block) -> bool:
        index = self.index_of(block)
        if index == 0:
            return False

        self._blocks[index - 1], self._blocks[index] = self._blocks[index], self._blocks[index - 1]
        self.mark_dirty()
        return True

    def move_down(self, block: Block) -> bool:
        index = self.index_of(block)
        if index == len(self._blocks) - 1:
            return False

        self._blocks[index], self._blocks[index + 1] = self._blocks[index + 1], self._blocks[index]
        self.mark_dirty()
        return True

    # ------------------------------------------------------------------
    # Content edits
    # ------------------------------------------------------------------

    def _require(self, block: Block, kind: BlockKind) -> None:
        self.index_of(block)
        if block.kind is not kind:
            raise ValueError(f"Block {block.key} is a {block.kind.value} block")

    def set_text(self, block: Block, html: str) -> None:
        self._require(block, BlockKind.TEXT)
        if block.html != html:
            block.html = html
            self.mark_dirty()

    def select_image(self, block: Block, src: str, alt: str | None = None) -> None:
        self._require(block, BlockKind.IMAGE)
        block.src = src
        block.upload_pending = False
        if alt is not None:
            block.alt = alt
        self.mark_dirty()

    def set_alt_text(self, block: Block, alt: str) -> None:
        self._require(block, BlockKind.IMAGE)
        if block.alt != alt:
            block.alt = alt
            self.mark_dirty()

    def begin_upload(self, block: Block, preview: str) -> None:
        """Show a local preview while the file is uploading.

        The block stays out of every save until :meth:`complete_upload`.
        """
        self._require(block, BlockKind.IMAGE)
        block.src = preview
        block.upload_pending = True
        self.mark_dirty()

    def complete_upload(self, block: Block, stored_path: str) -> None:
        self._require(block, BlockKind.IMAGE)
        block.src = stored_path
        block.upload_pending = False
        self.mark_dirty()

    def fail_upload(self, block: Block) -> None:
        self._require(block, BlockKind.IMAGE)
        block.src = None
        block.upload_pending = False
        self.mark_dirty()

    # ------------------------------------------------------------------
    # Deletion (two-step)
    # ------------------------------------------------------------------

    def request_delete(self, block: Block) -> PendingConfirmation | None:
        """Ask before removing *block*. Returns ``None`` if it is already being deleted."""
        self.index_of(block)
        if block.deleting:
            log.debug("Block %s already mid-deletion, ignoring", block.key)
            return None

        if self.pending is not None and self.pending.block is not None:
            self.pending.block.deleting = False

        block.deleting = True
        self.pending = PendingConfirmation(
            kind=ConfirmationKind.DELETE_BLOCK,
            prompt="Are you sure you want to delete this content block?",
            block=block,
        )
        return self.pending

    def confirm(self) -> bool:
        pending = self.pending
        if pending is None or pending.kind is not ConfirmationKind.DELETE_BLOCK:
            return False

        self.pending = None
        block = pending.block
        index = self.index_of(block)
        del self._blocks[index]
        block.deleting = False
        self.mark_dirty()
        return True

    def cancel(self) -> bool:
        pending = self.pending
        if pending is None:
            return False

        self.pending = None
        if pending.block is not None:
            pending.block.deleting = False
        return True

    # ------------------------------------------------------------------
    # Save preparation
    # ------------------------------------------------------------------

    def cleanup_empty_blocks(self) -> list[Block]:
        """Drop every empty block. Blocks with an upload in flight are kept."""
        removed = [b for b in self._blocks if b.is_empty() and not b.upload_pending]
        if not removed:
            return []

        for block in removed:
            log.debug("Removing empty %s block %s", block.kind.value, block.item_id or "(new)")

        self._blocks = [b for b in self._blocks if not any(b is r for r in removed)]
        if self.pending is not None and any(self.pending.block is r for r in removed):
            self.pending = None
        return removed

    def serialize(self) -> list[dict[str, Any]]:
        """Transmission payload in visual order.

        Empty blocks and blocks whose upload is still running never appear.
        """
        survivors = [b for b in self._blocks if not b.upload_pending and not b.is_empty()]
        return [block.to_item(order_index) for order_index, block in enumerate(survivors)]
