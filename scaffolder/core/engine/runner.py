"""
Run engine — drives a generator's steps to completion.

Flow per step:
    emit method → call step → await its awaitable / completion token
    → (emit error on failure) → one conflicter pass → emit step

A conflicter pass that raises fails its step the same way, unless the
step had already failed.

A failed step stops the pipeline. The failure is only visible through
the ``error`` event and the returned report; the run's completion
callback is still called exactly once, with no argument.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from scaffolder.core.engine.steps import Step, positional_for
from scaffolder.core.errors import CompletionTokenError
from scaffolder.core.events import StepCompleted, StepFailed
from scaffolder.core.models.conflict import ConflictResult
from scaffolder.core.observability.logging_config import step_scope

if TYPE_CHECKING:
    from scaffolder.core.generator import Generator

logger = logging.getLogger(__name__)


class CompletionToken:
    """Single-use signal a step hands out to finish asynchronously.

    Call it once, with an optional error, from any thread. A second call
    raises CompletionTokenError. Calling it after its run has ended is a
    no-op.
    """

    def __init__(self, step: str):
        self.step = step
        self._loop = asyncio.get_running_loop()
        self._future: asyncio.Future[Any] = self._loop.create_future()
        self._lock = threading.Lock()
        self._used = False

    @property
    def used(self) -> bool:
        return self._used

    def __call__(self, err: Any = None) -> None:
        with self._lock:
            if self._used:
                raise CompletionTokenError(
                    f"Completion token for step '{self.step}' was already used"
                )
            self._used = True
        try:
            self._loop.call_soon_threadsafe(self._settle, err)
        except RuntimeError:
            # Loop already closed; the step finished without this token.
            logger.debug("Completion token for step '%s' called after its run ended", self.step)

    def _settle(self, err: Any) -> None:
        if not self._future.done():
            self._future.set_result(err)

    async def wait(self) -> Any:
        """Suspend until the token is called; return the error it carried."""
        return await self._future

    def __repr__(self) -> str:
        return f"<CompletionToken step={self.step!r} used={self._used}>"


@dataclass
class RunReport:
    """Outcome of one run of a generator's pipeline."""

    generator: str = ""
    steps: list[StepCompleted | StepFailed] = field(default_factory=list)
    conflicts: list[ConflictResult] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(not s.ok for s in self.steps)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def error(self) -> Any:
        """The error that stopped the run, or None."""
        for s in self.steps:
            if isinstance(s, StepFailed):
                return s.cause
        return None

    def to_dict(self) -> dict:
        return {
            "generator": self.generator,
            "status": "ok" if self.ok else "failed",
            "steps": [s.step for s in self.steps],
            "error": None if self.error is None else str(self.error),
            "conflicts": [c.model_dump(mode="json") for c in self.conflicts],
        }


async def execute_steps(
    generator: Generator,
    steps: list[Step],
    args: list[Any],
) -> RunReport:
    """Run ``steps`` on ``generator`` strictly one after another.

    Args:
        generator: The generator the steps are bound to.
        steps: Ordered steps from discover_steps.
        args: Positional arguments offered to each step.

    Returns:
        RunReport with one outcome per executed step.
    """
    report = RunReport(generator=generator.resolved)

    for step in steps:
        generator.emit("method", step.name)
        logger.debug("→ %s:%s", generator.resolved, step.name)

        with step_scope(generator.resolved, step.name):
            outcome = await _run_step(generator, step, args)
            if isinstance(outcome, StepFailed):
                logger.warning("✗ %s:%s → %s", generator.resolved, step.name, outcome.cause)
                generator.emit("error", outcome.cause)

            try:
                report.conflicts.extend(generator.conflicter.resolve())
            except Exception as e:
                logger.warning("✗ %s:%s conflicts → %s", generator.resolved, step.name, e)
                if isinstance(outcome, StepCompleted):
                    outcome = StepFailed(step=step.name, cause=e)
                    generator.emit("error", e)

        report.steps.append(outcome)
        generator.emit("step", outcome)

        if isinstance(outcome, StepFailed):
            break

    return report


async def _run_step(
    generator: Generator,
    step: Step,
    args: list[Any],
) -> StepCompleted | StepFailed:
    generator._current_step = step.name
    generator._token = None
    try:
        result = step.bind(generator)(*positional_for(step.func, args))
        if inspect.isawaitable(result):
            await result

        token = generator._token
        if token is not None:
            err = await token.wait()
            if err:
                return StepFailed(step=step.name, cause=err)
    except Exception as e:
        return StepFailed(step=step.name, cause=e)
    finally:
        generator._current_step = None
        generator._token = None

    return StepCompleted(step=step.name)
