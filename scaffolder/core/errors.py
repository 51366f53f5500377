"""
Error taxonomy for the generator core.

Setup-contract violations are raised. Validation and step failures are
emitted as ``error`` events and never raised out of ``run``. Hook
failures come back through ``run_hooks``.
"""


class GeneratorError(Exception):
    """Base class for all generator core errors."""


class SetupError(GeneratorError):
    """Raised when a declaration is made after the generator started running."""


class ArgumentError(GeneratorError):
    """A positional argument failed validation (emitted, not raised)."""


class CompletionTokenError(GeneratorError):
    """Raised when a completion token is signalled more than once."""


class RegistryError(GeneratorError):
    """Raised when the registry cannot resolve a generator name."""

