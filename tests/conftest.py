"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from scaffolder.adapters.mock import MockPrompter, create_dummy_generator
from scaffolder.adapters.registry import GeneratorRegistry


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """A project directory named temp.dev, made the cwd."""
    root = tmp_path / "temp.dev"
    root.mkdir()
    monkeypatch.chdir(root)
    return root.resolve()


@pytest.fixture
def prompter() -> MockPrompter:
    return MockPrompter()


@pytest.fixture
def dummy_cls():
    return create_dummy_generator()


@pytest.fixture
def registry(project_dir: Path, prompter: MockPrompter, dummy_cls) -> GeneratorRegistry:
    """Registry with the ember generator and four hook targets."""
    env = GeneratorRegistry(prompter=prompter)
    env.register_stub(dummy_cls, "ember:all")
    env.register_stub(dummy_cls, "hook1:ember")
    env.register_stub(dummy_cls, "hook2:ember:all")
    env.register_stub(dummy_cls, "hook3")
    env.register_stub(
        lambda gen: gen.write("app/scripts/models/application-model.js", "// ..."),
        "hook4",
    )
    return env


@pytest.fixture
def dummy(registry: GeneratorRegistry, dummy_cls):
    """A dummy generator with positional args and four hooks declared."""
    gen = dummy_cls(
        ["bar", "baz", "bom"],
        {
            "foo": False,
            "something": "else",
            "resolved": "ember:all",
            "namespace": "dummy",
            "env": registry,
        },
    )
    gen.hook_for("hook1").hook_for("hook2").hook_for("hook3").hook_for("hook4")
    return gen
