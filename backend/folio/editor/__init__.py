"""Client-side block editor: collection model, session and API client."""
from .autosave import Autosaver
from .blocks import Block, BlockKind
from .collection import BlockCollection, BlockNotInCollection, ConfirmationKind, PendingConfirmation
from .config import AUTOSAVE_INTERVAL, EditorSettings
from .drafts import MemoryDraftStore
from .errors import (
    AuthenticationExpired,
    ContentLoadError,
    ContentRejected,
    EditorError,
    ErrorCode,
    NetworkError,
    SaveTimeout,
    ServerError,
)
from .session import ContentGateway, EditorSession, SaveOutcome, SaveStatus
from .transport import ContentClient

__all__ = [
    "AUTOSAVE_INTERVAL",
    "AuthenticationExpired",
    "Autosaver",
    "Block",
    "BlockCollection",
    "BlockKind",
    "BlockNotInCollection",
    "ConfirmationKind",
    "ContentClient",
    "ContentGateway",
    "ContentLoadError",
    "ContentRejected",
    "EditorError",
    "EditorSettings",
    "EditorSession",
    "ErrorCode",
    "MemoryDraftStore",
    "NetworkError",
    "PendingConfirmation",
    "SaveOutcome",
    "SaveStatus",
    "SaveTimeout",
    "ServerError",
]
