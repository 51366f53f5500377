"""
scaffolder — execution core for project-scaffolding generators.

    from scaffolder import Generator, GeneratorRegistry
"""

__version__ = "0.1.0"

from scaffolder.adapters.registry import GeneratorRegistry  # noqa: E402
from scaffolder.core.generator import Generator  # noqa: E402

__all__ = ["Generator", "GeneratorRegistry", "__version__"]
