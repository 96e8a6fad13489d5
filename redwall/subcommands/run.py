"""
redwall run

This module defines the 'run' subcommand, which fetches the configured subreddits, picks a winner
and makes it the desktop wallpaper. Running 'redwall' without a subcommand does the same.
"""

import click

from redwall import pipeline
from redwall.config import merge_config
from redwall.cli_utils.decorators import catch_errors
from redwall.cli_utils.decorators import overrides_from
from redwall.cli_utils.decorators import selection_options
from redwall.cli_utils.console import confirm_success
from redwall.cli_utils.utils import RedwallContext


@click.command(name="run")
@selection_options
@click.pass_obj
@catch_errors
def cli(obj: RedwallContext, **options):
    """
    Download the best matching image and set it as your desktop wallpaper.
    """

    config = merge_config(obj.load(), overrides_from(**options))
    result = pipeline.run(config)

    confirm_success(
        f":white_check_mark-emoji: 'run' updated wallpaper to {result.file}"
    )
    return result
