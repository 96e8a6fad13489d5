"""
redwall CLI Utilities

This module contains utilities shared by the click commands: the object passed between the group
and its subcommands, and discovery of the commands found in the subcommands directory.
"""

import inspect
import importlib
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Iterable
from typing import Optional

import click

from redwall import config as redwall_config
from redwall.config import RedwallConfig
from redwall.cli_utils.console import warn


SUBCOMMANDS_DIR = Path(__file__).parent.parent / "subcommands"


@dataclass
class RedwallContext:
    """
    Stored on the click context object. The config file is only read when a subcommand asks for
    it, so that 'init' still works when the existing file is broken.
    """

    config_file: Optional[Path] = None

    def load(self) -> RedwallConfig:
        if self.config_file is not None:
            return redwall_config.load_config(self.config_file)

        return redwall_config.init()


def import_commands(module_paths: Iterable = None) -> list[click.Command]:
    """
    Retrieve a set of click Commands from module_paths. Default is every module in the built in
    subcommands directory.

    A valid redwall command module defines a "cli" function that is wrapped as a click Command
    object. Set the 'name' keyword argument in the @click.command decorator to set the name of the
    command intended for the end user.
    """

    if module_paths is None:
        module_paths = sorted(SUBCOMMANDS_DIR.glob("*.py"))

    commands = []

    for path in module_paths:
        name = inspect.getmodulename(str(path))
        if name is None or name == "__init__":
            continue

        module = importlib.import_module(f"redwall.subcommands.{name}")

        try:
            commands.append(getattr(module, "cli"))

        except AttributeError:
            warn(f"Cannot add command {name}: no 'cli' function found.")

    return commands


def attach_commands(group: click.Group, commands: list[click.Command]):
    """
    Attach each command in a list of click Command objects to a provided group. Useful when
    retrieving a dynamic list of subcommands with import_commands().
    """

    for command in commands:
        group.add_command(command)
