"""
Filter Stage

A candidate passes when every configured constraint holds: score threshold, allowed domains,
allowed file types and minimum resolution. An empty or missing allow-list allows everything.
"""

from collections.abc import Iterable

from redwall.candidates import Candidate
from redwall.config import RedwallConfig


def passes_filters(candidate: Candidate, config: RedwallConfig) -> bool:

    # posts without a score (or a score of exactly 0) are never held to the threshold
    if candidate.score and candidate.score < config.score:
        return False

    if config.domains and candidate.domain.lower() not in config.domains:
        return False

    if config.types and candidate.file_type.lower() not in config.types:
        return False

    if config.resolution is not None:
        if candidate.resolution is None:
            return False

        if (
            candidate.resolution.width < config.resolution.width
            or candidate.resolution.height < config.resolution.height
        ):
            return False

    return True


def filter_candidates(candidates: Iterable[Candidate], config: RedwallConfig) -> list[Candidate]:
    """Return the candidates that pass every constraint in config, in their original order."""

    return [candidate for candidate in candidates if passes_filters(candidate, config)]
