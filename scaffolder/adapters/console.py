"""
Console prompter — asks about conflicting writes on the terminal.
"""

from __future__ import annotations

import click

from scaffolder.adapters.base import Decision, Prompter
from scaffolder.core.models.conflict import ConflictEntry

_CHOICES = {
    "y": Decision.WRITE,
    "n": Decision.SKIP,
    "a": Decision.WRITE_ALL,
    "d": Decision.DIFF,
}


class ConsolePrompter(Prompter):
    """Prompter backed by ``click.prompt``.

    Answers: ``y`` overwrite, ``n`` skip, ``a`` overwrite this and all
    others, ``d`` show the differences.
    """

    def confirm(self, entry: ConflictEntry) -> Decision:
        click.secho(f"conflict {entry.path}", fg="red", err=True)
        answer = click.prompt(
            f"Overwrite {entry.path.name}? (y)es, (n)o, (a)ll, (d)iff",
            type=click.Choice(list(_CHOICES)),
            default="y",
            show_choices=False,
            err=True,
        )
        return _CHOICES[answer]

    def show_diff(self, entry: ConflictEntry, diff: str) -> None:
        for line in diff.splitlines():
            if line.startswith("+") and not line.startswith("+++"):
                click.secho(line, fg="green", err=True)
            elif line.startswith("-") and not line.startswith("---"):
                click.secho(line, fg="red", err=True)
            else:
                click.echo(line, err=True)
