"""
redwall init

This module defines the 'init' subcommand, which writes a config.json holding the default settings.
"""

import click

from redwall.config import build_config
from redwall.config import get_config_file
from redwall.cli_utils.decorators import catch_errors
from redwall.cli_utils.console import confirm_success
from redwall.cli_utils.console import warn
from redwall.cli_utils.utils import RedwallContext


@click.command(name="init")
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite an existing config file.",
)
@click.pass_obj
@catch_errors
def cli(obj: RedwallContext, force):
    """
    Write a config file with the default settings.
    """

    config_file = obj.config_file or get_config_file()

    if config_file.exists() and not force:
        warn(f"{config_file} already exists, use --force to overwrite it")
        return config_file

    build_config().generate_config_json(config_file)
    confirm_success(f":floppy_disk-emoji: 'init' saved default settings to {config_file}")

    return config_file
