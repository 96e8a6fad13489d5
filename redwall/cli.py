"""
redwall

Fetch the best image posts from your favourite subreddits and make one of them your desktop wallpaper.

This module defines the entry point to the redwall CLI: a 'cli' command group that takes the
global options (config file, output verbosity) and hands a RedwallContext to the subcommands
found in the subcommands directory. Invoking the group without a subcommand performs 'run'.
"""

from io import StringIO
from pathlib import Path

import click

from redwall.cli_utils.console import console
from redwall.cli_utils.console import set_debug
from redwall.cli_utils.utils import RedwallContext
from redwall.cli_utils.utils import attach_commands
from redwall.cli_utils.utils import import_commands


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this file instead of ~/.config/redwall/config.json",
)
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    default=True,
    help="Print all output to stdout or the terminal",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output printed to stdout.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log details of each stage to stderr.",
)
@click.version_option(package_name="redwall")
def cli(ctx: click.Context, config_file, verbosity, debug):
    """
    redwall

    set a top rated subreddit image as your desktop wallpaper.


    ====================
    Quickstart
    ====================

    Change your wallpaper using the settings in ~/.config/redwall/config.json:

        $ redwall

    Pick the newest post from /r/wallpapers instead, even if it was downloaded before:

        $ redwall run --sort new -r wallpapers --no-shuffle

    See what would be chosen without downloading anything:

        $ redwall candidates --sort hot --limit 20

    Write a fresh config file with the default settings:

        $ redwall init --force
    """

    ctx.obj = RedwallContext(config_file=config_file)

    # if verbosity is set to quiet, capture all std_out to a junk stream.
    if verbosity == "quiet":
        console.file = StringIO()

    set_debug(debug)

    if ctx.invoked_subcommand is None:
        run = cli.get_command(ctx, "run")
        if run is None:
            raise click.UsageError("the 'run' command is not available", ctx=ctx)
        ctx.invoke(run)


def main():

    commands = import_commands()
    attach_commands(cli, commands)
    cli()


if __name__ == "__main__":
    main()
