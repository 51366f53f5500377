"""
Generator base — the unit of execution.

Subclasses declare their positional arguments, options and hooks in
``__init__`` and their steps as public methods:

    class AppGenerator(Generator):
        def __init__(self, args=None, options=None):
            super().__init__(args, options)
            self.argument("name")
            self.hook_for("test-framework")

        def package_json(self):
            self.write("package.json", "{}")

        def install(self):
            done = self.defer()
            threading.Timer(0.1, done).start()

    AppGenerator(["my-app"], {"env": registry}).run()

Once ``run`` starts, no argument or hook may be declared any more.
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Any, Callable

from scaffolder.core.config.loader import (
    MARKER_FILE,
    find_project_root,
    load_project_config,
    lookup,
)
from scaffolder.core.engine import hooks as hook_engine
from scaffolder.core.engine.runner import CompletionToken, RunReport, execute_steps
from scaffolder.core.engine.steps import Step, discover_steps
from scaffolder.core.errors import ArgumentError, GeneratorError, SetupError
from scaffolder.core.events import EventEmitter
from scaffolder.core.models.conflict import ConflictEntry
from scaffolder.core.models.spec import ArgumentSpec, HookEntry, OptionSpec
from scaffolder.core.persistence.storage import Storage
from scaffolder.core.services.conflicter import Conflicter
from scaffolder.core.services.usage import render_help, render_usage

logger = logging.getLogger(__name__)

_COERCIBLE = (str, int, float)


class Generator(EventEmitter):
    """Base class for every generator.

    Args:
        args: Positional input values.
        options: Named option values. Besides user options it carries:
            env               registry the generator was created from
            resolved          registry name it was resolved under
            namespace         name shown in usage
            destination_root  directory to start root discovery from
            prompter          conflict confirmation collaborator
            force             overwrite conflicts without asking
    """

    # Explicit step order for this class; None means "declaration order".
    steps: tuple[str, ...] | None = None

    # Section name in the rc file; defaults to the first resolved segment.
    storage_name: str | None = None

    def __init__(self, args: list[Any] | None = None, options: dict[str, Any] | None = None):
        super().__init__()
        self.args: list[Any] = list(args or [])
        self.options: dict[str, Any] = dict(options or {})
        self.env = self.options.get("env")
        self.resolved: str = self.options.get("resolved") or type(self).__name__.lower()
        self.namespace: str = self.options.get("namespace") or self.resolved
        self.description = ""

        self._running = False
        self._arguments: list[ArgumentSpec] = []
        self._options: list[OptionSpec] = []
        self._hooks: list[HookEntry] = []
        self._current_step: str | None = None
        self._token: CompletionToken | None = None
        self._project_config: dict[str, Any] | None = None

        prompter = self.options.get("prompter") or getattr(self.env, "prompter", None)
        self.conflicter = Conflicter(prompter, force=bool(self.options.get("force")))

        start = self.options.get("destination_root")
        self._destination_root = find_project_root(Path(start) if start else None)
        self._set_storage()

        self.option("help", description="Print generator's options and usage")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} resolved={self.resolved!r}>"

    # ── Declarations ────────────────────────────────────────────

    def desc(self, description: str) -> Generator:
        self.description = description
        return self

    def argument(
        self,
        name: str,
        *,
        type: Any = str,
        required: bool | None = None,
        description: str = "",
        default: Any = None,
    ) -> Generator:
        """Declare a positional argument and bind it as ``self.<name>``.

        The n-th declared argument takes the n-th positional value,
        coerced for ``str``/``int``/``float``. A ``list`` argument takes
        the whole positional list. A missing required value emits an
        ``error`` event instead of raising; with ``--help`` nothing is
        required.
        """
        if self._running:
            raise SetupError("argument must be used within the constructor only")

        help_requested = bool(self.options.get("help"))
        if required is None:
            required = not help_requested

        spec = ArgumentSpec(
            name=name,
            type=type,
            required=required,
            description=description,
            default=default,
        )
        position = len(self._arguments)
        self._arguments.append(spec)

        value = default
        if spec.type is list:
            value = list(self.args)
            if not value and default is not None:
                value = default
            missing = not self.args
        elif position < len(self.args):
            value = self._coerce(spec, self.args[position])
            missing = False
        else:
            missing = True

        if missing and spec.required and not help_requested:
            self.emit("error", ArgumentError(f"Did not provide required argument '{name}'"))

        setattr(self, name, value)
        return self

    def option(
        self,
        name: str,
        *,
        description: str | None = None,
        type: Any = bool,
        default: Any = False,
        hidden: bool = False,
    ) -> Generator:
        """Declare a named option. Re-declaring a name replaces its spec."""
        spec = OptionSpec(
            name=name,
            description=description or f"Description for {name}",
            type=type,
            default=default,
            hidden=hidden,
        )
        for i, existing in enumerate(self._options):
            if existing.name == name:
                self._options[i] = spec
                break
        else:
            self._options.append(spec)

        if self.options.get(name) is None:
            self.options[name] = default
        return self

    def hook_for(
        self,
        name: str,
        *,
        context: str | None = None,
        args: list[Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Generator:
        """Declare a hook: an option-backed delegation to another generator.

        Raises:
            SetupError: If the generator is already running.
        """
        if self._running:
            raise SetupError("hook_for must be used within the constructor only")

        self.option(
            name,
            description="Something to be invoked",
            type=bool,
            default=self.default_for(name),
        )
        self._hooks.append(HookEntry(name=name, context=context, args=args, options=options))
        return self

    def default_for(self, name: str) -> Any:
        """Instantiation option first, then scaffold.yml; None if neither has it."""
        value = self.options.get(name)
        if value is not None:
            return value
        return lookup(self.project_config, name)

    # ── Help ────────────────────────────────────────────────────

    def usage(self) -> str:
        return render_usage(self.namespace, self._options, self._arguments)

    def help(self) -> str:
        return render_help(self.namespace, self.description, self._options, self._arguments)

    # ── Destination root and storage ────────────────────────────

    def destination_root(self, path: str | Path | None = None) -> Path:
        """Return the destination root, optionally moving it first.

        A relative ``path`` is taken from the current root. Storage is
        rebound only when the root actually changes.
        """
        if path is not None:
            root = (self._destination_root / Path(path)).resolve()
            if root != self._destination_root:
                root.mkdir(parents=True, exist_ok=True)
                self._destination_root = root
                self._project_config = None
                self._set_storage()
        return self._destination_root

    def destination_path(self, *parts: str | Path) -> Path:
        return self._destination_root.joinpath(*parts)

    def _set_storage(self) -> None:
        name = self.storage_name or self.resolved.split(":")[0]
        self.config = Storage(name, self._destination_root / MARKER_FILE)
        logger.debug("Storage for %s bound to %s", self.resolved, self.config.path)

    @property
    def appname(self) -> str:
        """Destination directory name with non-alphanumerics as spaces."""
        return re.sub(r"[^A-Za-z0-9 ]", " ", self._destination_root.name)

    @property
    def project_config(self) -> dict[str, Any]:
        if self._project_config is None:
            self._project_config = load_project_config(self._destination_root)
        return self._project_config

    # ── File intents ────────────────────────────────────────────

    def write(self, path: str | Path, content: str | bytes) -> ConflictEntry:
        """Queue a write; it lands when the current step's conflicts resolve."""
        return self.conflicter.add(self.destination_path(path), content)

    def read(self, path: str | Path, encoding: str = "utf-8") -> str:
        return self.destination_path(path).read_text(encoding=encoding)

    # ── Running ─────────────────────────────────────────────────

    def defer(self) -> CompletionToken:
        """Ask the engine to wait for the returned token before moving on."""
        if self._current_step is None:
            raise GeneratorError("defer() can only be called while a step is running")
        if self._token is None:
            self._token = CompletionToken(self._current_step)
        return self._token

    @classmethod
    def step_list(cls) -> list[Step]:
        return discover_steps(cls, Generator)

    async def arun(
        self,
        args: list[Any] | None = None,
        callback: Callable[[], Any] | None = None,
    ) -> RunReport:
        """Run every step in order; see scaffolder.core.engine.runner."""
        self._running = True
        run_args = list(self.args if args is None else args)

        try:
            report = await execute_steps(self, self.step_list(), run_args)
            self.emit("end", report)
        finally:
            if callback is not None:
                callback()
        return report

    def run(
        self,
        args: list[Any] | None = None,
        callback: Callable[[], Any] | None = None,
    ) -> RunReport:
        """Synchronous form of ``arun``; not usable inside a running event loop."""
        self._running = True
        return asyncio.run(self.arun(args, callback))

    async def arun_hooks(self, callback: Callable[[Any], Any] | None = None) -> Any:
        """Run declared hooks in series; return (and pass) the first error."""
        err = await hook_engine.run_hooks(self)
        if callback is not None:
            callback(err)
        return err

    def run_hooks(self, callback: Callable[[Any], Any] | None = None) -> Any:
        return asyncio.run(self.arun_hooks(callback))

    # ── Internals ───────────────────────────────────────────────

    def _coerce(self, spec: ArgumentSpec, value: Any) -> Any:
        if spec.type not in _COERCIBLE or isinstance(value, spec.type):
            return value
        try:
            return spec.type(value)
        except (TypeError, ValueError):
            self.emit(
                "error",
                ArgumentError(f"Argument '{spec.name}' expects {spec.type.__name__}, got {value!r}"),
            )
            return value
