"""
Step discovery — the ordered list of steps a generator class runs.

Each generator class contributes its own step list, taken from its class
body in declaration order (or from an explicit ``steps`` tuple). Lists
are concatenated along the MRO, most basic class first; a subclass
overriding an ancestor's step keeps the ancestor's slot.

Phase groups
────────────
A class member named after a lifecycle phase is either one step or a
group of steps (a nested class or a dict of functions). When a generator
has any phase-named member, its steps run in phase order below, and
every other step runs in the ``default`` slot. Otherwise declaration
order is kept untouched.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

PHASES: tuple[str, ...] = (
    "initializing",
    "prompting",
    "configuring",
    "default",
    "writing",
    "conflicts",
    "install",
    "end",
)

_DEFAULT_RANK = PHASES.index("default")


@dataclass(frozen=True)
class Step:
    """One executable unit of a generator."""

    name: str
    func: Callable[..., Any]
    phase: str | None = None

    @property
    def rank(self) -> int:
        return PHASES.index(self.phase) if self.phase else _DEFAULT_RANK

    def bind(self, generator: Any) -> Callable[..., Any]:
        """Bind the step function to ``generator`` like a method."""
        return self.func.__get__(generator, type(generator))


def discover_steps(cls: type, base: type) -> list[Step]:
    """Collect the ordered steps of generator class ``cls``.

    Args:
        cls: Concrete generator class.
        base: The generator base class; it and its ancestors contribute
            no steps, and none of the names it defines can be steps.

    Returns:
        Steps in execution order.
    """
    reserved = set(dir(base))
    ordered: dict[str, Step] = {}

    for klass in reversed(cls.__mro__):
        if klass is base or not issubclass(klass, base):
            continue
        for step in _own_steps(klass, reserved):
            # dict keeps the first insertion slot on reassignment
            ordered[step.name] = step

    steps = list(ordered.values())
    if any(step.phase for step in steps):
        steps.sort(key=lambda s: s.rank)

    logger.debug("%s steps: %s", cls.__name__, [s.name for s in steps])
    return steps


def _own_steps(klass: type, reserved: set[str]) -> list[Step]:
    body = vars(klass)
    declared = body.get("steps")

    if declared is not None:
        names = list(declared)
        missing = [n for n in names if n not in body]
        if missing:
            raise TypeError(f"{klass.__name__}.steps names undefined members: {missing}")
    else:
        names = [n for n in body if not n.startswith("_") and n not in reserved]

    steps: list[Step] = []
    for name in names:
        value = body[name]
        phase = name if name in PHASES else None

        if _is_step_function(value):
            steps.append(Step(name=name, func=value, phase=phase))
        elif phase and isinstance(value, (type, dict)):
            steps.extend(_group_steps(name, value))
    return steps


def _group_steps(phase: str, group: type | dict) -> list[Step]:
    members = group if isinstance(group, dict) else vars(group)
    return [
        Step(name=f"{phase}.{name}", func=value, phase=phase)
        for name, value in members.items()
        if not name.startswith("_") and _is_step_function(value)
    ]


def _is_step_function(value: Any) -> bool:
    return inspect.isfunction(value)


def positional_for(func: Callable[..., Any], args: list[Any]) -> list[Any]:
    """Slice ``args`` down to what an unbound step function accepts.

    ``self`` is not counted; ``*args`` takes everything.
    """
    params = list(inspect.signature(func).parameters.values())[1:]
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return list(args)

    positional = [
        p for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    return list(args[:len(positional)])
