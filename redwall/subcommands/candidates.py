"""
redwall candidates

This module defines the 'candidates' subcommand: a dry run that lists the posts which survive the
filters, ranked the way 'run' would rank them. Nothing is downloaded.
"""

from datetime import datetime, timezone

import click
from rich.markup import escape
from rich.table import Table

from redwall import pipeline
from redwall.config import merge_config
from redwall.selection import sort_key
from redwall.cli_utils.decorators import catch_errors
from redwall.cli_utils.decorators import overrides_from
from redwall.cli_utils.decorators import selection_options
from redwall.cli_utils.console import console
from redwall.cli_utils.console import warn
from redwall.cli_utils.utils import RedwallContext

# score and created_at are whole numbers. heat and controversy are fractional
RANK_FORMATS = {
    "top": lambda value: f"{value:.0f}",
    "new": lambda value: f"{value:.0f}",
    "hot": lambda value: f"{value:.2f}",
    "controversial": lambda value: f"{value:.2f}",
}


@click.command(name="candidates")
@selection_options
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="Number of candidates to list.",
)
@click.pass_obj
@catch_errors
def cli(obj: RedwallContext, limit, **options):
    """
    List the images 'run' would choose from, best first.
    """

    config = merge_config(obj.load(), overrides_from(**options))
    ranked = pipeline.preview(config)

    if not ranked:
        warn("no matching wallpaper found")
        return ranked

    key = sort_key(config.sort)
    as_text = RANK_FORMATS[config.sort]

    table = Table(title=f"{config.sort} candidates")
    table.add_column("#", justify="right")
    table.add_column(config.sort, justify="right", no_wrap=True)
    table.add_column("subreddit")
    table.add_column("posted")
    table.add_column("size")
    table.add_column("title", overflow="fold")

    for index, candidate in enumerate(ranked[:limit], start=1):
        posted = datetime.fromtimestamp(candidate.created_at, tz=timezone.utc)
        table.add_row(
            str(index),
            as_text(key(candidate)),
            escape(candidate.source_id),
            posted.strftime("%Y-%m-%d"),
            str(candidate.resolution or "?"),
            f"[link={candidate.url}]{escape(candidate.title)}[/link]",
        )

    console.print(table)
    return ranked
