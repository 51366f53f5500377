"""
Generator registry — namespace → generator class lookup.

The registry is the collaborator hooks go through to find the generator
they delegate to. Names are colon-separated (``ember:all``); a name that
is not registered falls back to shorter prefixes, so ``hook1:ember:all``
resolves to ``hook1:ember`` or ``hook1`` when only those exist.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from scaffolder.adapters.base import Prompter
from scaffolder.core.engine.runner import RunReport
from scaffolder.core.errors import RegistryError
from scaffolder.core.generator import Generator

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Registry and factory for generators.

    Args:
        prompter: Conflict prompter handed to every generator created
            here (and so to every hook generator).
    """

    def __init__(self, prompter: Prompter | None = None):
        self._generators: dict[str, type[Generator]] = {}
        self.prompter = prompter

    def register(self, generator: type[Generator], namespace: str) -> None:
        """Register a generator class under ``namespace``."""
        if namespace in self._generators:
            logger.warning("Overwriting existing generator: %s", namespace)
        self._generators[namespace] = generator
        logger.debug("Registered generator: %s", namespace)

    def register_stub(
        self,
        stub: type[Generator] | Callable[[Generator], Any],
        namespace: str,
    ) -> type[Generator]:
        """Register a generator class, or a plain function run as its only step."""
        if isinstance(stub, type) and issubclass(stub, Generator):
            generator = stub
        else:
            generator = type(
                f"Stub_{namespace.replace(':', '_').replace('-', '_')}",
                (Generator,),
                {"run_stub": lambda self: stub(self)},
            )
        self.register(generator, namespace)
        return generator

    def unregister(self, namespace: str) -> None:
        self._generators.pop(namespace, None)

    def get(self, namespace: str) -> type[Generator] | None:
        """Exact lookup, no fallback."""
        return self._generators.get(namespace)

    def namespaces(self) -> list[str]:
        return list(self._generators)

    def match(self, name: str) -> str | None:
        """The registered namespace ``name`` resolves to, or None.

        Tries the exact name, then drops trailing ``:segments`` one at a time.
        """
        candidate = name
        while candidate:
            if candidate in self._generators:
                return candidate
            if ":" not in candidate:
                break
            candidate = candidate.rsplit(":", 1)[0]
        return None

    def resolve(self, name: str) -> type[Generator] | None:
        namespace = self.match(name)
        return self._generators[namespace] if namespace else None

    def create(
        self,
        name: str,
        args: list[Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Generator:
        """Instantiate the generator ``name`` resolves to.

        Raises:
            RegistryError: If nothing is registered for ``name``.
        """
        namespace = self.match(name)
        if namespace is None:
            raise RegistryError(f"No generator registered for '{name}'")

        opts = dict(options or {})
        opts["env"] = self
        opts["resolved"] = namespace
        opts.setdefault("namespace", namespace)
        return self._generators[namespace](list(args or []), opts)

    def run(
        self,
        name: str,
        args: list[Any] | None = None,
        options: dict[str, Any] | None = None,
        callback: Callable[[], Any] | None = None,
    ) -> RunReport:
        """Create and run the generator ``name`` resolves to."""
        return self.create(name, args, options).run(callback=callback)
