"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "asyncapi_to_code"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    The result is written in the generation comment of every file, so
    paths are reduced to file names to keep output identical across machines.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    arguments = []
    options = []

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]
        if not value:
            continue

        formatted_value = str(value)

        if isinstance(param, click.Argument):
            # Arguments are paths
            arguments.append(Path(formatted_value).name)

        elif isinstance(param, click.Option):
            # Skip defaults, flags and the config file path
            if value == param.default or param.is_flag or param_name == "config":
                continue
            flag = param.opts[0] if param.opts else f"--{param_name}"
            options.extend([flag, formatted_value])

    return " ".join([PROGRAM_NAME, *arguments, *options])
