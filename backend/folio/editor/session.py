"""One editing session over one section.

:class:`EditorSession` ties a :class:`BlockCollection` to a content gateway
(normally :class:`folio.editor.transport.ContentClient`). It is created per
section and passed around explicitly; there is no module-level session.

Save lifecycle:

1. Remove empty blocks from the collection.
2. Serialize the survivors in visual order.
3. Send them as a replace-all ``PUT``.
4. On success, adopt the canonical list returned by the server; blocks
   whose upload is still running stay in place.
5. On failure, keep the blocks as they are, keep the dirty flag and notify.

Only one save runs at a time. A save requested while another is running is
recorded and answered with :attr:`SaveStatus.DEFERRED`; the running save
then performs one follow-up save if the collection is still dirty.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Protocol

from .blocks import Block
from .collection import BlockCollection, ConfirmationKind, PendingConfirmation
from .drafts import MemoryDraftStore
from .errors import ContentLoadError, EditorError, ErrorCode

log = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

_FAILURE_MESSAGES = {
    ErrorCode.AUTH_EXPIRED: "Your session has expired. Log in again; your changes were kept as a draft.",
    ErrorCode.CONTENT_REJECTED: "The content was rejected by the server.",
    ErrorCode.SERVER_ERROR: "The server could not save the content.",
    ErrorCode.TIMEOUT: "Saving took too long and was abandoned.",
    ErrorCode.NETWORK_ERROR: "The server could not be reached.",
}


class ContentGateway(Protocol):
    def fetch_section(self, section: str) -> list[dict[str, Any]]: ...

    def replace_section(self, section: str, items: list[dict[str, Any]]) -> list[dict[str, Any]]: ...


class SaveStatus(str, Enum):
    SAVED = "saved"
    DEFERRED = "deferred"
    SKIPPED = "skipped"
    FAILED = "failed"
    AUTH_REQUIRED = "auth_required"


@dataclass
class SaveOutcome:
    status: SaveStatus
    items: list[dict[str, Any]] = field(default_factory=list)
    removed: list[Block] = field(default_factory=list)
    error: EditorError | None = None

    @property
    def ok(self) -> bool:
        return self.status is SaveStatus.SAVED


def _log_notifier(level: str, message: str) -> None:
    log.log(logging.getLevelName(level.upper()), message)


class EditorSession:
    def __init__(
        self,
        section: str,
        gateway: ContentGateway,
        *,
        notifier: Notifier | None = None,
        drafts: MemoryDraftStore | None = None,
    ) -> None:
        self.section = section
        self.gateway = gateway
        self.collection = BlockCollection()
        self.drafts = drafts if drafts is not None else MemoryDraftStore()
        self.pending_leave: PendingConfirmation | None = None

        self._notify = notifier or _log_notifier
        self._edit_lock = threading.RLock()
        self._state_lock = threading.Lock()
        self._saving = False
        self._resave_requested = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def open(self) -> BlockCollection:
        """Load the section from the server.

        An empty section is a normal result; a failed request raises
        :class:`ContentLoadError`.
        """
        try:
            items = self.gateway.fetch_section(self.section)
        except EditorError as exc:
            raise ContentLoadError(f"Could not load section {self.section}: {exc.message}", cause=exc) from exc

        with self._edit_lock:
            self.collection.load(items)
        log.info("Opened section %s with %d block(s)", self.section, len(items))
        return self.collection

    def recover_draft(self) -> bool:
        """Restore a payload stashed when the session expired.

        The recovered blocks are dirty; the next save sends them.
        """
        items = self.drafts.peek(self.section)
        if items is None:
            return False

        with self._edit_lock:
            self.collection.load(items)
            self.collection.mark_dirty()
        self.drafts.discard(self.section)
        log.info("Recovered %d draft block(s) for section %s", len(items), self.section)
        return True

    # ------------------------------------------------------------------
    # Edits (wait while a save is running)
    # ------------------------------------------------------------------

    @property
    def dirty(self) -> bool:
        return self.collection.dirty

    @property
    def saving(self) -> bool:
        with self._state_lock:
            return self._saving

    def add_text_block(self, html: str = "") -> Block:
        with self._edit_lock:
            return self.collection.add_text_block(html)

    def add_image_block(self) -> Block:
        with self._edit_lock:
            return self.collection.add_image_block()

    def move_up(self, block: Block) -> bool:
        with self._edit_lock:
            return self.collection.move_up(block)

    def move_down(self, block: Block) -> bool:
        with self._edit_lock:
            return self.collection.move_down(block)

    def set_text(self, block: Block, html: str) -> None:
        with self._edit_lock:
            self.collection.set_text(block, html)

    def select_image(self, block: Block, src: str, alt: str | None = None) -> None:
        with self._edit_lock:
            self.collection.select_image(block, src, alt)

    def set_alt_text(self, block: Block, alt: str) -> None:
        with self._edit_lock:
            self.collection.set_alt_text(block, alt)

    def begin_upload(self, block: Block, preview: str) -> None:
        with self._edit_lock:
            self.collection.begin_upload(block, preview)

    def complete_upload(self, block: Block, stored_path: str) -> None:
        with self._edit_lock:
            self.collection.complete_upload(block, stored_path)

    def fail_upload(self, block: Block) -> None:
        with self._edit_lock:
            self.collection.fail_upload(block)
        self._notify("warning", "The image could not be uploaded.")

    def request_delete(self, block: Block) -> PendingConfirmation | None:
        with self._edit_lock:
            return self.collection.request_delete(block)

    # ------------------------------------------------------------------
    # Confirmations
    # ------------------------------------------------------------------

    def request_leave(self) -> PendingConfirmation | None:
        """Ask before navigating away with unsaved changes.

        Returns ``None`` when there is nothing to lose and the caller may
        leave right away.
        """
        if not self.collection.dirty:
            return None

        self.pending_leave = PendingConfirmation(
            kind=ConfirmationKind.LEAVE,
            prompt="You have unsaved changes. Leave without saving?",
        )
        return self.pending_leave

    def confirm(self) -> bool:
        if self.pending_leave is not None:
            self.pending_leave = None
            log.info("Leaving section %s with unsaved changes", self.section)
            return True

        with self._edit_lock:
            return self.collection.confirm()

    def cancel(self) -> bool:
        if self.pending_leave is not None:
            self.pending_leave = None
            return True

        with self._edit_lock:
            return self.collection.cancel()

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(self) -> SaveOutcome:
        with self._state_lock:
            if self._saving:
                self._resave_requested = True
                log.debug("Save already running for %s, deferring", self.section)
                return SaveOutcome(SaveStatus.DEFERRED)
            self._saving = True

        try:
            outcome = self._save_once()
            while True:
                with self._state_lock:
                    again = (
                        self._resave_requested
                        and outcome.status is SaveStatus.SAVED
                        and self.collection.dirty
                    )
                    self._resave_requested = False
                if not again:
                    return outcome
                log.debug("Running deferred save for %s", self.section)
                outcome = self._save_once()
        finally:
            with self._state_lock:
                self._saving = False
                self._resave_requested = False

    def autosave_tick(self) -> SaveOutcome:
        if not self.collection.dirty:
            return SaveOutcome(SaveStatus.SKIPPED)
        return self.save()

    def _save_once(self) -> SaveOutcome:
        with self._edit_lock:
            removed = self.collection.cleanup_empty_blocks()
            payload = self.collection.serialize()

            try:
                canonical = self.gateway.replace_section(self.section, payload)
            except EditorError as exc:
                return self._save_failed(exc, payload, removed)

            self.collection.adopt(canonical)

        log.info(
            "Saved section %s: sent=%d stored=%d removed_empty=%d",
            self.section,
            len(payload),
            len(canonical),
            len(removed),
        )
        self._notify("info", "Content saved.")
        return SaveOutcome(SaveStatus.SAVED, items=canonical, removed=removed)

    def _save_failed(
        self,
        exc: EditorError,
        payload: list[dict[str, Any]],
        removed: list[Block],
    ) -> SaveOutcome:
        if removed:
            self.collection.dirty = True

        message = _FAILURE_MESSAGES.get(exc.code, "The content could not be saved.")
        log.warning("Save of section %s failed (%s): %s", self.section, exc.code, exc.message)

        if exc.code == ErrorCode.AUTH_EXPIRED:
            self.drafts.stash(self.section, payload)
            self._notify("error", message)
            return SaveOutcome(SaveStatus.AUTH_REQUIRED, removed=removed, error=exc)

        self._notify("error", message)
        return SaveOutcome(SaveStatus.FAILED, removed=removed, error=exc)
