"""
Hook engine — resolves and runs delegated sub-generators in series.

For every declared hook, in declaration order:

    option value → target name → "{target}:{context}" lookup key
    → registry.create → full run of the sub-generator

Each hook generator finishes its whole pipeline (including its own
conflict passes) before the next hook starts. The first failure stops
the series and is returned to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from scaffolder.core.errors import GeneratorError
from scaffolder.core.models.spec import HookEntry

if TYPE_CHECKING:
    from scaffolder.core.generator import Generator

logger = logging.getLogger(__name__)

# Options that describe the calling generator itself, never inherited by hooks
_OWN_OPTIONS = ("env", "resolved", "namespace", "destination_root")


def hook_key(generator: Generator, hook: HookEntry) -> str | None:
    """Registry lookup key for ``hook``, or None if the hook is disabled.

    The target is the hook option's value when it is a non-empty string,
    otherwise the hook's own name. ``False`` disables the hook.
    """
    value = generator.options.get(hook.name)
    if value is False:
        return None

    target = value if isinstance(value, str) and value else hook.name
    context = hook.context or generator.resolved
    return f"{target}:{context}" if context else target


def hook_options(generator: Generator, hook: HookEntry) -> dict[str, Any]:
    """Options handed to the hook generator."""
    source = hook.options if hook.options is not None else generator.options
    options = {k: v for k, v in source.items() if k not in _OWN_OPTIONS}
    options["destination_root"] = Path(generator.destination_root())
    return options


async def run_hooks(generator: Generator) -> Any:
    """Run every hook of ``generator`` in declaration order.

    Returns:
        The first error encountered (a registry failure or the error a
        hook generator reported), or None when all hooks succeeded.
    """
    env = generator.env
    for hook in list(generator._hooks):
        key = hook_key(generator, hook)
        if key is None:
            logger.debug("Hook '%s' disabled, skipping", hook.name)
            continue

        if env is None:
            return GeneratorError(f"Cannot run hook '{hook.name}': generator has no registry")

        args = hook.args if hook.args is not None else generator.args
        try:
            sub = env.create(key, args=list(args), options=hook_options(generator, hook))
        except GeneratorError as e:
            logger.warning("Hook '%s' could not be resolved: %s", hook.name, e)
            return e

        logger.info("Running hook '%s' → %s", hook.name, sub.resolved)
        report = await sub.arun()
        if report.failed:
            return report.error

    return None
