"""
Event emission — synchronous, in-process listeners per event name.

Every generator is an event source. The run engine emits:

    method  (step_name)             before each step
    error   (cause)                 when a step fails or validation fails
    step    (StepCompleted | StepFailed)  after each step
    end     (RunReport)             once the pipeline is finished

Listeners run in registration order on the emitting thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


@dataclass(frozen=True)
class StepCompleted:
    """A step ran to completion."""

    step: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class StepFailed:
    """A step signalled an error or raised; remaining steps were skipped."""

    step: str
    cause: Any

    @property
    def ok(self) -> bool:
        return False


class EventEmitter:
    """Minimal pub/sub keyed by event name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> EventEmitter:
        """Subscribe ``listener`` to ``event``. Returns self for chaining."""
        self._listeners.setdefault(event, []).append(listener)
        return self

    def once(self, event: str, listener: Listener) -> EventEmitter:
        """Subscribe ``listener`` for the next emission of ``event`` only."""

        def _wrapper(*args: Any) -> Any:
            self.off(event, _wrapper)
            return listener(*args)

        return self.on(event, _wrapper)

    def off(self, event: str, listener: Listener) -> EventEmitter:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)
        return self

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of ``event`` with ``args``.

        An ``error`` with nobody listening is logged rather than raised:
        validation failures must not abort construction.

        Returns:
            True if at least one listener ran.
        """
        listeners = list(self._listeners.get(event, []))
        if not listeners:
            if event == "error":
                logger.error("Unhandled generator error: %s", args[0] if args else "")
            return False

        for listener in listeners:
            listener(*args)
        return True
