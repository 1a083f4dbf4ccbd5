"""Installation event pipeline.

One InstallerEventEmitter tracks one ``install`` / ``install-modules`` run.
The process runner feeds it raw stdout via ``progress()``; the emitter parses
each chunk, keeps the latest status per module, and fans out four kinds of
notification to listeners:

    ERROR      error events from the chunk (hub ``Error:`` lines)
    PROGRESS   every non-error event from the chunk
    COMPLETED  the chunk's events, when all of them are Installed
    CANCELLED  empty list, on ``cancel()``

Per chunk the order is always ERROR -> PROGRESS -> COMPLETED.

The ``completed`` future settles once, on the first terminal notification:
resolved with the COMPLETED payload, failed with UnityInstallationError on
ERROR, failed with InstallationCancelledError on CANCELLED.

The emitter only reacts to text it is given. It never sees the process exit,
so a run that stops without a terminal batch leaves ``completed`` pending;
use ``wait(timeout=...)`` to bound it.
"""

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Future

from .exceptions import InstallationCancelledError
from .exceptions import UnityInstallationError
from .parser import parse_installer_output
from .schema import InstallerEvent
from .schema import InstallerEventType
from .schema import InstallerStatus

logger = logging.getLogger(__name__)

Listener = Callable[[list[InstallerEvent]], None]


class InstallerEventEmitter:
    """
    Event sequencer for a single installation operation.

    Not reentrant: feed ``progress()`` from one source, one call at a time.
    Never reuse an instance across installer processes.

    Example:
        >>> emitter = InstallerEventEmitter()
        >>> _ = emitter.on(InstallerEventType.PROGRESS, lambda events: print(events[0].progress))
        >>> emitter.progress("[Android] Downloading 10%")
        10.0
        >>> emitter.progress("[Android] Installed 100%")
        100.0
        >>> emitter.completed.result()[0].module
        'Android'
    """

    def __init__(self) -> None:
        self._module_status: dict[str, InstallerStatus | str] = {}
        self._listeners: dict[InstallerEventType, list[Listener]] = {kind: [] for kind in InstallerEventType}
        self._completed: Future[list[InstallerEvent]] = Future()
        self._subscribe_completion()

    # Subscription

    def on(self, kind: InstallerEventType, listener: Listener) -> "InstallerEventEmitter":
        """Register a listener for one notification kind (called in registration order)."""
        self._listeners[InstallerEventType(kind)].append(listener)
        return self

    def once(self, kind: InstallerEventType, listener: Listener) -> "InstallerEventEmitter":
        """Register a listener that is removed after its first call."""

        def wrapper(events: list[InstallerEvent]) -> None:
            self.off(kind, wrapper)
            listener(events)

        return self.on(kind, wrapper)

    def off(self, kind: InstallerEventType, listener: Listener) -> "InstallerEventEmitter":
        """Remove a listener. Unknown listeners are ignored."""
        listeners = self._listeners[InstallerEventType(kind)]
        if listener in listeners:
            listeners.remove(listener)
        return self

    def emit(self, kind: InstallerEventType, events: list[InstallerEvent]) -> None:
        """
        Call every listener for ``kind`` synchronously.

        A failing listener is logged and does not stop the others, so
        ingestion never raises because of a subscriber.
        """
        for listener in list(self._listeners[InstallerEventType(kind)]):
            try:
                listener(events)
            except Exception:
                logger.exception(f"Listener for '{kind}' notification failed")

    # Ingestion

    def progress(self, raw: str) -> None:
        """
        Ingest one chunk of installer stdout.

        Chunks need not align with lines; each chunk is parsed on its own.

        Args:
            raw: Raw text received from the installer process
        """
        events = parse_installer_output(raw)
        if not events:
            return

        logger.debug(f"Parsed {len(events)} installer event(s)")

        error_events = [e for e in events if e.is_error]
        if error_events:
            self.emit(InstallerEventType.ERROR, error_events)

        progress_events = [e for e in events if not e.is_error]
        if not progress_events:
            return

        self.emit(InstallerEventType.PROGRESS, progress_events)

        for event in events:
            self._module_status[event.module] = event.status

        # Completion is judged on this chunk only, not on the module history
        installed = [e for e in progress_events if e.status == InstallerStatus.INSTALLED]
        if installed and len(installed) == len(progress_events):
            self.emit(InstallerEventType.COMPLETED, installed)

    def cancel(self) -> None:
        """
        Stop tracking the installation.

        Does not stop the installer process. Each call emits CANCELLED; only
        the first can settle ``completed``.
        """
        self._module_status.clear()
        self.emit(InstallerEventType.CANCELLED, [])

    def module_status(self, module: str) -> InstallerStatus | str | None:
        """Latest status seen for ``module``, or None if never reported (or cancelled)."""
        return self._module_status.get(module)

    # Completion

    @property
    def completed(self) -> Future[list[InstallerEvent]]:
        """Single-settle future for the whole operation (read-only)."""
        return self._completed

    async def wait(self, timeout: float | None = None) -> list[InstallerEvent]:
        """
        Await ``completed`` from asyncio code.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Returns:
            Installed events from the COMPLETED notification

        Raises:
            UnityInstallationError: Installer reported an error
            InstallationCancelledError: ``cancel()`` was called
            TimeoutError: Timeout elapsed first (the operation keeps running)
        """
        # shield: a timeout must not cancel the shared future
        return await asyncio.wait_for(asyncio.shield(asyncio.wrap_future(self._completed)), timeout)

    def _subscribe_completion(self) -> None:
        def cleanup() -> None:
            self.off(InstallerEventType.COMPLETED, on_completed)
            self.off(InstallerEventType.ERROR, on_error)
            self.off(InstallerEventType.CANCELLED, on_cancelled)

        def on_completed(events: list[InstallerEvent]) -> None:
            cleanup()
            self._completed.set_result(events)

        def on_error(events: list[InstallerEvent]) -> None:
            cleanup()
            messages = "; ".join(e.error or f"{e.module}: {e.status}" for e in events)
            self._completed.set_exception(
                UnityInstallationError(
                    f"Installation failed: {messages}",
                    events=events,
                    context={"modules": [e.module for e in events]},
                )
            )

        def on_cancelled(events: list[InstallerEvent]) -> None:
            cleanup()
            self._completed.set_exception(InstallationCancelledError())

        self.on(InstallerEventType.COMPLETED, on_completed)
        self.on(InstallerEventType.ERROR, on_error)
        self.on(InstallerEventType.CANCELLED, on_cancelled)
