"""Background autosave for an editor session."""
from __future__ import annotations

import logging
import threading

from .session import EditorSession, SaveOutcome

log = logging.getLogger(__name__)


class Autosaver:
    """Calls :meth:`EditorSession.autosave_tick` every *interval* seconds.

    A tick saves only when the collection is dirty. Failures are left to the
    session's notifier; the next tick tries again only if still dirty.
    """

    def __init__(self, session: EditorSession, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.session = session
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> SaveOutcome | None:
        try:
            return self.session.autosave_tick()
        except Exception:
            log.exception("Autosave of section %s crashed", self.session.section)
            return None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.tick()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"autosave-{self.session.section}",
            daemon=True,
        )
        self._thread.start()
        log.debug("Autosave started for %s every %.1fs", self.session.section, self.interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def __enter__(self) -> Autosaver:
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()
