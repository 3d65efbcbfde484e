"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "xsd_to_code"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        # Paths are shown by name only so the output does not depend on the machine
        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted_value)
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            elif param.count:
                options.append("-" + flag.lstrip("-")[0] * value)
            else:
                options.extend([flag, formatted_value])

    return " ".join([PROGRAM_NAME, *arguments, *options])
