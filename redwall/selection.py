"""
Candidate Selection

Selection is a left fold over the filtered candidates, seeded with DEFAULT_CANDIDATE, that keeps
whichever candidate ranks strictly higher under the configured sort mode. A tie keeps the
candidate seen first.

With shuffle enabled, candidates whose image already sits in the download directory are dropped
before the fold. Checking that takes one filesystem probe per candidate; the probes run together
in a thread pool and the fold starts only once every probe has settled. A probe that fails counts
as "file does not exist", so a flaky filesystem makes a candidate eligible rather than aborting
the run.
"""

import os
import stat
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from functools import reduce
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Optional

from redwall.candidates import Candidate
from redwall.candidates import DEFAULT_CANDIDATE
from redwall.config import ConfigurationError
from redwall.parsing import url_file_path
from redwall.scoring import controversy
from redwall.scoring import heat
from redwall.cli_utils.console import log


PROBE_WORKERS = 16

SORT_KEYS: dict[str, Callable[[Candidate], float]] = {
    "top": lambda candidate: candidate.score,
    "hot": heat,
    "controversial": controversy,
    "new": lambda candidate: candidate.created_at,
}


class ProbeError(Exception):
    """
    Raised when the filesystem cannot say whether a file exists. Never escapes this module:
    exclude_existing() treats it as "does not exist".
    """

    pass


def sort_key(sort: str) -> Callable[[Candidate], float]:
    """Return the ranking function for a sort mode. Unknown modes raise ConfigurationError."""

    try:
        return SORT_KEYS[sort]
    except KeyError:
        raise ConfigurationError(f"unknown sort mode '{sort}'") from None


def comparator(sort: str) -> Callable[[Candidate, Candidate], Candidate]:
    """
    Return the pairwise step of the selection fold: given the running winner and the next
    candidate, keep the next one only if it ranks strictly higher.
    """

    key = sort_key(sort)

    def select(winner: Candidate, candidate: Candidate) -> Candidate:
        return candidate if key(candidate) > key(winner) else winner

    return select


def file_exists(path: Optional[Path]) -> bool:
    """
    True if path names an existing regular file. A missing path (no file name could be derived)
    never exists. Raise ProbeError when the filesystem fails for any reason other than absence.
    """

    if path is None:
        return False

    try:
        return stat.S_ISREG(os.stat(path).st_mode)

    except (FileNotFoundError, NotADirectoryError):
        return False

    except OSError as error:
        raise ProbeError(f"could not check {path}: {error}") from error


def _probe(exists: Callable[[Optional[Path]], bool], path: Optional[Path]) -> bool:
    try:
        return bool(exists(path))

    except (ProbeError, OSError) as error:
        log("probe failed, treating %s as not downloaded: %s", path, error)
        return False


def exclude_existing(
    candidates: Sequence[Candidate],
    directory,
    exists: Callable[[Optional[Path]], bool] = file_exists,
    max_workers: int = PROBE_WORKERS,
) -> list[Candidate]:
    """
    Drop candidates whose image file is already present in directory. All probes run
    concurrently; each one that fails is counted as "not present".
    """

    if not candidates:
        return []

    paths = [url_file_path(candidate.url, directory) for candidate in candidates]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        present = list(executor.map(partial(_probe, exists), paths))

    kept = [candidate for candidate, found in zip(candidates, present) if not found]
    log("%d of %d candidates already downloaded", len(candidates) - len(kept), len(candidates))

    return kept


def select_candidate(
    candidates: Iterable[Candidate],
    sort: str,
    shuffle: bool = False,
    directory=None,
    exists: Callable[[Optional[Path]], bool] = file_exists,
) -> Candidate:
    """
    Pick the winning candidate. Returns DEFAULT_CANDIDATE when nothing beats it, which callers must
    treat as an empty selection (see candidates.is_empty_selection).
    """

    select = comparator(sort)
    candidates = list(candidates)

    if shuffle:
        if directory is None:
            raise ValueError("shuffle needs the download directory to look for existing files")
        candidates = exclude_existing(candidates, directory, exists=exists)

    return reduce(select, candidates, DEFAULT_CANDIDATE)


def rank_candidates(candidates: Iterable[Candidate], sort: str) -> list[Candidate]:
    """
    Order candidates best first under a sort mode.
    Candidates that cannot beat DEFAULT_CANDIDATE are left out, since run would never pick them.
    The first element is the candidate select_candidate() would pick.
    """

    key = sort_key(sort)
    floor = key(DEFAULT_CANDIDATE)
    eligible = [candidate for candidate in candidates if key(candidate) > floor]

    # sorted() is stable, so ties stay in listing order
    return sorted(eligible, key=key, reverse=True)
