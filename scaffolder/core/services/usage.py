"""
Usage and help rendering for generator declarations.
"""

from __future__ import annotations

from scaffolder.core.models.spec import ArgumentSpec, OptionSpec, type_label

PROG_NAME = "scaffold"


def render_usage(
    namespace: str,
    options: list[OptionSpec],
    arguments: list[ArgumentSpec],
    prog: str = PROG_NAME,
) -> str:
    """One-line invocation: ``scaffold <namespace> [options] [<arg>] ...``.

    ``[options]`` appears only when at least one option is registered;
    every argument adds its placeholder whether required or not.
    """
    parts = [prog]
    if namespace:
        parts.append(namespace)
    if options:
        parts.append("[options]")
    parts.extend(arg.banner for arg in arguments)
    return " ".join(parts)


def render_help(
    namespace: str,
    description: str,
    options: list[OptionSpec],
    arguments: list[ArgumentSpec],
    prog: str = PROG_NAME,
) -> str:
    """Full help text: usage, description, options and arguments."""
    lines = ["Usage:", f"  {render_usage(namespace, options, arguments, prog)}", ""]

    if description:
        lines += [description, ""]

    visible = [opt for opt in options if not opt.hidden]
    if visible:
        width = max(len(opt.name) for opt in visible)
        lines.append("Options:")
        for opt in visible:
            line = f"  --{opt.name.ljust(width)}  # {opt.description}"
            if opt.default is not None and opt.default is not False:
                line += f"  Default: {opt.default}"
            lines.append(line)
        lines.append("")

    if arguments:
        width = max(len(arg.name) for arg in arguments)
        lines.append("Arguments:")
        for arg in arguments:
            about = f"{arg.description}  " if arg.description else ""
            lines.append(
                f"  {arg.name.ljust(width)}  # {about}Type: {type_label(arg.type)}"
                f"  Required: {str(arg.required).lower()}"
            )
        lines.append("")

    return "\n".join(lines)
