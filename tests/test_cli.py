"""
Tests for the CLI — run and usage commands, global options.
"""

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from scaffolder.main import cli

_GENERATORS = textwrap.dedent('''\
    from scaffolder import Generator


    class AppGenerator(Generator):
        def __init__(self, args=None, options=None):
            super().__init__(args, options)
            self.desc("Sample app generator")
            self.argument("name", required=False, default="app")
            self.option("style", type=str, default="css", description="Stylesheet flavour")

        def readme(self):
            self.write("README.md", f"# {self.name}\\n")

        def styles(self):
            self.write(f"styles.{self.options['style']}", "body {}\\n")


    class FailingGenerator(Generator):
        def boom(self):
            self.defer()("it broke")
''')


@pytest.fixture
def sample(tmp_path: Path, monkeypatch) -> Path:
    """Importable module ``cli_sample_generators``; returns a project dir."""
    (tmp_path / "cli_sample_generators.py").write_text(_GENERATORS)
    monkeypatch.syspath_prepend(str(tmp_path))
    project = tmp_path / "project"
    project.mkdir()
    return project


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "run project generators" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestRunCommand:
    def test_run_writes_files(self, sample: Path):
        result = CliRunner().invoke(
            cli, ["run", "cli_sample_generators:AppGenerator", "blog", "--cwd", str(sample)]
        )
        assert result.exit_code == 0, result.output
        assert (sample / "README.md").read_text() == "# blog\n"
        assert (sample / "styles.css").is_file()
        assert "create" in result.output

    def test_option_values(self, sample: Path):
        result = CliRunner().invoke(
            cli,
            ["run", "cli_sample_generators:AppGenerator", "-o", "style=sass", "--cwd", str(sample)],
        )
        assert result.exit_code == 0, result.output
        assert (sample / "styles.sass").is_file()

    def test_json_output(self, sample: Path):
        result = CliRunner().invoke(
            cli, ["run", "cli_sample_generators:AppGenerator", "--json", "--cwd", str(sample)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["status"] == "ok"
        assert data["steps"] == ["readme", "styles"]

    def test_rerun_is_identical(self, sample: Path):
        args = ["run", "cli_sample_generators:AppGenerator", "--cwd", str(sample)]
        CliRunner().invoke(cli, args)
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 0
        assert "identical" in result.output

    def test_failure_exits_nonzero(self, sample: Path):
        result = CliRunner().invoke(
            cli, ["run", "cli_sample_generators:FailingGenerator", "--cwd", str(sample)]
        )
        assert result.exit_code == 1
        assert "it broke" in result.output

    def test_bad_target(self):
        result = CliRunner().invoke(cli, ["run", "not-a-target"])
        assert result.exit_code == 2
        assert "module:ClassName" in result.output

    def test_bad_option(self, sample: Path):
        result = CliRunner().invoke(
            cli, ["run", "cli_sample_generators:AppGenerator", "-o", "novalue"]
        )
        assert result.exit_code == 2


class TestUsageCommand:
    def test_prints_help(self, sample: Path):
        result = CliRunner().invoke(cli, ["usage", "cli_sample_generators:AppGenerator"])
        assert result.exit_code == 0, result.output
        assert "scaffold appgenerator [options] [<name>]" in result.output
        assert "Sample app generator" in result.output
        assert "--style" in result.output
