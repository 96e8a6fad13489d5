"""
redwall pipeline

One run turns a configuration into a new desktop wallpaper:

    1) make sure the download directory exists
    2) fetch every subreddit listing (concurrently, all must succeed)
    3) normalize listing items into candidates and filter them
    4) select a winner, skipping already downloaded images when shuffle is on
    5) download the winner -> set it as wallpaper -> notify, strictly in that order

Every external step is a plain callable passed in by keyword, so a run can be driven without a
network, a GNOME session or a notification daemon. A failing step raises and the later steps
never start.
"""

from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from redwall import image_handler
from redwall import notify_handler
from redwall import reddit_handler
from redwall import wallpaper_handler
from redwall.candidates import Candidate
from redwall.candidates import is_empty_selection
from redwall.candidates import normalize
from redwall.config import RedwallConfig
from redwall.filters import filter_candidates
from redwall.selection import file_exists
from redwall.selection import exclude_existing
from redwall.selection import rank_candidates
from redwall.selection import select_candidate
from redwall.cli_utils.console import describe
from redwall.cli_utils.console import log


class EmptySelectionError(Exception):
    """Raise when no candidate is left after filtering and excluding downloaded images."""

    pass


@dataclass(frozen=True)
class RunResult:
    candidate: Candidate
    file: Path


def fetch_candidates(config: RedwallConfig, fetch=reddit_handler.fetch_listings) -> list[Candidate]:
    """Fetch all configured listings and return the candidates that pass the filters."""

    describe(
        f":earth_asia-emoji: fetching {config.sort} posts of the {config.time_window} "
        f"from {', '.join('/r/' + name for name in config.subreddits)} ..."
    )
    payloads = fetch(config.subreddits, config.sort, config.time_window)

    candidates = normalize(payloads)
    filtered = filter_candidates(candidates, config)
    log("%d candidates, %d passed the filters", len(candidates), len(filtered))

    return filtered


def preview(
    config: RedwallConfig, fetch=reddit_handler.fetch_listings, exists=file_exists
) -> list[Candidate]:
    """
    Return the eligible candidates ranked best first, without downloading anything. With shuffle
    enabled, already downloaded images are left out just as in run().
    """

    candidates = fetch_candidates(config, fetch=fetch)

    if config.shuffle:
        candidates = exclude_existing(candidates, config.directory, exists=exists)

    return rank_candidates(candidates, config.sort)


def run(
    config: RedwallConfig,
    *,
    fetch=reddit_handler.fetch_listings,
    exists=file_exists,
    download=image_handler.download_image,
    apply=wallpaper_handler.update_wallpaper,
    notifier=notify_handler.notify_candidate,
) -> RunResult:
    """
    Select, download and apply a new wallpaper. Raise EmptySelectionError when nothing matches.
    """

    image_handler.ensure_directory(config.directory)

    candidates = fetch_candidates(config, fetch=fetch)

    winner = select_candidate(
        candidates,
        config.sort,
        shuffle=config.shuffle,
        directory=config.directory,
        exists=exists,
    )

    if is_empty_selection(winner):
        raise EmptySelectionError("no matching wallpaper found")

    describe(f":framed_picture-emoji: selected '{escape(winner.title)}' from /r/{winner.source_id}")

    describe(f":floppy_disk-emoji: saving {winner.url} to {config.directory}")
    file = download(winner.url, config.directory)
    apply(file)
    notifier(winner, file)

    return RunResult(candidate=winner, file=file)
