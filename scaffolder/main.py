"""
scaffold — CLI entrypoint.

Usage:
    scaffold --help
    scaffold run mypkg.generators:AppGenerator my-app -o style=sass
    scaffold usage mypkg.generators:AppGenerator
"""

from __future__ import annotations

import importlib
import json
import os
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from scaffolder import __version__
from scaffolder.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="scaffold")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """Scaffold — run project generators."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("SCAFFOLD_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("SCAFFOLD_LOG_FILE"),
        log_file_level=os.environ.get("SCAFFOLD_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


@cli.command()
@click.argument("target")
@click.argument("args", nargs=-1)
@click.option("--option", "-o", "raw_options", multiple=True, help="Generator option as key=value.")
@click.option("--namespace", "-n", default=None, help="Registry name to run the generator as.")
@click.option("--cwd", "cwd", type=click.Path(file_okay=False), default=None,
              help="Directory to start looking for the project root from.")
@click.option("--force", is_flag=True, help="Overwrite conflicting files without asking.")
@click.option("--hooks/--no-hooks", default=True, help="Run declared hooks after the steps.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the run report as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    target: str,
    args: tuple[str, ...],
    raw_options: tuple[str, ...],
    namespace: str | None,
    cwd: str | None,
    force: bool,
    hooks: bool,
    as_json: bool,
) -> None:
    """Run the generator TARGET (``package.module:ClassName``)."""
    from scaffolder.adapters.registry import GeneratorRegistry

    generator_cls = _load_generator(target)
    namespace = namespace or generator_cls.__name__.lower()

    options = _parse_options(raw_options)
    options["force"] = force
    if cwd:
        options["destination_root"] = Path(cwd)

    registry = GeneratorRegistry()
    registry.register(generator_cls, namespace)
    generator = registry.create(namespace, list(args), options)

    errors: list[Any] = []
    generator.on("error", errors.append)
    report = generator.run()

    hook_error = None
    if hooks and report.ok:
        hook_error = generator.run_hooks()

    if as_json:
        data = report.to_dict()
        data["hook_error"] = None if hook_error is None else str(hook_error)
        click.echo(json.dumps(data, indent=2))
    else:
        quiet = ctx.obj.get("quiet", False)
        colors = {"create": "green", "force": "yellow", "write": "yellow", "skip": "white", "identical": "cyan"}
        for result in report.conflicts:
            if quiet and result.status == "identical":
                continue
            click.secho(f"   {result.status:<9}", fg=colors[result.status], nl=False)
            click.echo(f" {result.path}")
        for err in errors:
            click.secho(f"❌ {err}", fg="red")
        if hook_error is not None:
            click.secho(f"❌ {hook_error}", fg="red")

    if report.failed or hook_error is not None:
        sys.exit(1)


@cli.command()
@click.argument("target")
@click.option("--namespace", "-n", default=None, help="Name shown in the usage line.")
def usage(target: str, namespace: str | None) -> None:
    """Print the options and arguments of generator TARGET."""
    generator_cls = _load_generator(target)
    generator = generator_cls(
        [],
        {"help": True, "namespace": namespace or generator_cls.__name__.lower()},
    )
    click.echo(generator.help())


# ── Helpers ─────────────────────────────────────────────────────


def _load_generator(target: str) -> type:
    """Import ``package.module:ClassName`` and check it is a Generator."""
    from scaffolder.core.generator import Generator

    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"expected 'module:ClassName', got '{target}'", param_hint="TARGET")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import '{module_name}': {e}", param_hint="TARGET") from e

    generator_cls = getattr(module, attr, None)
    if not (isinstance(generator_cls, type) and issubclass(generator_cls, Generator)):
        raise click.BadParameter(f"'{target}' is not a Generator subclass", param_hint="TARGET")
    return generator_cls


def _parse_options(raw_options: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``key=value`` pairs into a dict; values are read as YAML scalars."""
    options: dict[str, Any] = {}
    for raw in raw_options:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got '{raw}'", param_hint="--option")
        try:
            options[key] = yaml.safe_load(value) if value else ""
        except yaml.YAMLError:
            options[key] = value
    return options


if __name__ == "__main__":
    cli()
