"""
Mock doubles — scripted prompter and dummy generators for tests.
"""

from __future__ import annotations

from typing import Any

from scaffolder.adapters.base import Decision, Prompter
from scaffolder.core.generator import Generator
from scaffolder.core.models.conflict import ConflictEntry


class MockPrompter(Prompter):
    """Prompter that answers from a script instead of the terminal.

    Decisions are consumed in order; once the script runs out,
    ``default`` is returned for every further conflict.
    """

    def __init__(self, decisions: list[Decision] | None = None, default: Decision = Decision.SKIP):
        self._decisions = list(decisions or [])
        self._default = default
        self._asked: list[ConflictEntry] = []
        self._diffs: list[str] = []

    @property
    def asked(self) -> list[ConflictEntry]:
        """Every entry confirm() was called with."""
        return self._asked

    @property
    def diffs(self) -> list[str]:
        return self._diffs

    def confirm(self, entry: ConflictEntry) -> Decision:
        self._asked.append(entry)
        if self._decisions:
            return self._decisions.pop(0)
        return self._default

    def show_diff(self, entry: ConflictEntry, diff: str) -> None:
        self._diffs.append(diff)


def create_dummy_generator() -> type[Generator]:
    """A fresh generator class with a single ``test`` step.

    The step records that it ran in ``should_run``; each call returns a
    new class so tests can patch it freely.
    """

    class DummyGenerator(Generator):
        def test(self) -> None:
            self.should_run = True

    return DummyGenerator


def create_generator(
    name: str,
    dependencies: list[tuple[Any, str]],
    args: list[Any] | None = None,
    options: dict[str, Any] | None = None,
    prompter: Prompter | None = None,
) -> Generator:
    """Register ``dependencies`` in a fresh registry and create ``name``.

    Args:
        name: Namespace to instantiate.
        dependencies: ``(generator_or_function, namespace)`` pairs.
        args: Positional arguments for the generator.
        options: Options for the generator.
        prompter: Prompter for the registry (default: MockPrompter()).
    """
    from scaffolder.adapters.registry import GeneratorRegistry

    registry = GeneratorRegistry(prompter=prompter or MockPrompter())
    for dependency, namespace in dependencies:
        registry.register_stub(dependency, namespace)
    return registry.create(name, args, options)
