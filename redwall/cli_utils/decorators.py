"""
redwall Decorators

Shared decorators for the click commands: consistent error reporting and the group of options
that override the selection settings from the config file.
"""

from sys import exit
from functools import wraps

import click

from redwall.config import SORT_MODES
from redwall.config import TIME_WINDOWS
from redwall.pipeline import EmptySelectionError
from redwall.cli_utils.console import fail
from redwall.cli_utils.console import warn


# exit status for a run that worked but found nothing to download
EXIT_EMPTY_SELECTION = 2


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code. An empty selection is reported
    as a warning with its own exit code since nothing actually broke.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except EmptySelectionError as error:
            warn(str(error))
            exit(EXIT_EMPTY_SELECTION)
        except Exception as error:
            fail(str(error))
            exit(1)

    return wrapper


def selection_options(func):
    """
    Attach the options that override config file settings. Every option defaults to None, meaning
    "keep the configured value" (see config.merge_config).
    """

    options = [
        click.option(
            "--subreddit",
            "-r",
            "subreddits",
            multiple=True,
            help="Subreddit to take images from. Repeat for several, e.g. -r wallpapers -r earthporn",
        ),
        click.option(
            "--sort",
            type=click.Choice(SORT_MODES, case_sensitive=False),
            default=None,
            help="How to rank posts when picking the winner.",
        ),
        click.option(
            "--from",
            "time_window",
            type=click.Choice(TIME_WINDOWS, case_sensitive=False),
            default=None,
            help="Time window of the listing.",
        ),
        click.option(
            "--score",
            type=int,
            default=None,
            help="Minimum score a post needs (posts without a score always pass).",
        ),
        click.option(
            "--shuffle/--no-shuffle",
            default=None,
            help="Skip images that were already downloaded.",
        ),
        click.option(
            "--directory",
            "-d",
            type=click.Path(file_okay=False, path_type=str),
            default=None,
            help="Where downloaded wallpapers are stored.",
        ),
    ]

    for option in reversed(options):
        func = option(func)

    return func


def overrides_from(subreddits, sort, time_window, score, shuffle, directory) -> dict:
    """Translate selection_options values into a mapping for config.merge_config."""

    return {
        "subreddits": list(subreddits) if subreddits else None,
        "sort": sort,
        "from": time_window,
        "score": score,
        "shuffle": shuffle,
        "directory": directory,
    }
