"""
Declaration models — arguments, options and hooks.

These are the declarative metadata a generator builds up during setup.
They drive both value assignment and help/usage rendering, and are
never mutated once created.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

# Python types accepted as argument/option types, and how help renders them.
TYPE_LABELS: dict[type, str] = {
    bool: "Boolean",
    str: "String",
    int: "Number",
    float: "Number",
    list: "Array",
}


def type_label(value_type: Any) -> str:
    """Human label for a declared type (``int`` → ``Number``)."""
    if value_type in TYPE_LABELS:
        return TYPE_LABELS[value_type]
    return getattr(value_type, "__name__", str(value_type))


class ArgumentSpec(BaseModel):
    """A positional argument declared with ``Generator.argument``."""

    name: str
    type: Any = str
    required: bool = True
    description: str = ""
    default: Any = None

    @property
    def banner(self) -> str:
        return f"[<{self.name}>]"


class OptionSpec(BaseModel):
    """A named option declared with ``Generator.option`` or ``hook_for``."""

    name: str
    description: str
    type: Any = bool
    default: Any = False
    hidden: bool = False


class HookEntry(BaseModel):
    """A delegation point declared with ``Generator.hook_for``.

    Attributes:
        name:    Hook name; also the name of its backing option.
        context: Overrides the caller's resolved name when composing
                 the registry lookup key.
        args:    Positional arguments for the hook generator
                 (default: the caller's).
        options: Options for the hook generator (default: the caller's).
    """

    name: str
    context: str | None = None
    args: list[Any] | None = None
    options: dict[str, Any] | None = None
