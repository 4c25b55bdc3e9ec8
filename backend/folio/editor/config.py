"""Editor-side settings.

:class:`EditorSettings` collects the knobs of an editing session: where the
API lives, how long a request may take and how often autosave fires.
"""
from __future__ import annotations

from dataclasses import dataclass

AUTOSAVE_INTERVAL = 30.0
"""Seconds between autosave ticks."""


@dataclass
class EditorSettings:
    """
    Parameters
    ----------
    base_url:
        Root URL of the backend, without the API prefix.
    api_prefix:
        Path prefix of the versioned API.
    timeout:
        Per-request timeout in seconds. A save that exceeds it is reported as
        a timeout, not as a server error.
    autosave_interval:
        Seconds between autosave ticks.
    """

    base_url: str = "http://localhost:5000"
    api_prefix: str = "/api/v1"
    timeout: float = 10.0
    autosave_interval: float = AUTOSAVE_INTERVAL

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.autosave_interval <= 0:
            raise ValueError("autosave_interval must be positive")
