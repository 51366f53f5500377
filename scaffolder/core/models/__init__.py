"""
Core models — pydantic types for generator declarations and conflicts.

    from scaffolder.core.models import ArgumentSpec, OptionSpec, HookEntry
"""

from scaffolder.core.models.conflict import ConflictEntry, ConflictResult
from scaffolder.core.models.spec import (
    TYPE_LABELS,
    ArgumentSpec,
    HookEntry,
    OptionSpec,
    type_label,
)

__all__ = [
    # spec.py
    "TYPE_LABELS",
    "ArgumentSpec",
    # conflict.py
    "ConflictEntry",
    "ConflictResult",
    "HookEntry",
    "OptionSpec",
    "type_label",
]
