"""
Command line echo for the generation comment of generated files.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Any

import click

COMMAND_NAME = "allof_merge"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the allof_merge invocation that produced the current output.

    Input and output files are reduced to their names so the comment stays the
    same whichever machine ran the merge. Options left at their default are
    omitted.

    Args:
        click_command: The command whose parameters are echoed

    Returns:
        The command line, or the bare command name outside of a click context
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return COMMAND_NAME

    positional: list[str] = []
    flags: list[str] = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if value is None or value is False or value == "":
            continue
        if isinstance(param, click.Argument):
            positional.append(_format_value(value))
        elif isinstance(param, click.Option) and value != param.default:
            flags.extend(_format_option(param, value))

    return shlex.join([COMMAND_NAME, *positional, *flags])


def _format_option(param: click.Option, value: Any) -> list[str]:
    flag = param.opts[0] if param.opts else f"--{param.name}"
    if param.is_flag:
        return [flag]
    return [flag, _format_value(value)]


def _format_value(value: Any) -> str:
    """Existing paths are shown by name only."""
    if isinstance(value, (str, Path)) and Path(value).exists():
        return Path(value).name
    return str(value)
