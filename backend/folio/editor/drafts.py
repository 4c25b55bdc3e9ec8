"""Ephemeral storage for payloads that could not be saved.

When the admin session expires mid-save the serialized payload is parked
here so it can be restored after logging in again. Nothing here survives
the process.
"""
from __future__ import annotations

import copy
import threading
from typing import Any


class MemoryDraftStore:
    def __init__(self) -> None:
        self._drafts: dict[str, list[dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def stash(self, section: str, items: list[dict[str, Any]]) -> None:
        with self._lock:
            self._drafts[section] = copy.deepcopy(items)

    def peek(self, section: str) -> list[dict[str, Any]] | None:
        with self._lock:
            draft = self._drafts.get(section)
            return copy.deepcopy(draft) if draft is not None else None

    def discard(self, section: str) -> None:
        with self._lock:
            self._drafts.pop(section, None)

    def __contains__(self, section: str) -> bool:
        with self._lock:
            return section in self._drafts
