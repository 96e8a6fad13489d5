"""
Candidates

Reddit answers a listing request with a tree of "things", each wrapped in a {"kind": ..., "data": ...}
envelope. This module decodes that envelope into explicit variants (Listing, Link, Other) and
flattens the links of one or more listings into Candidate objects, the uniform shape that the
filter and selection stages work with.

The decoder is defensive: anything it does not recognise becomes Other and is dropped by
normalize(), so a strange child in a listing never aborts a run.
"""

from dataclasses import dataclass, field
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from redwall.parsing import Resolution
from redwall.parsing import parse_file_type
from redwall.parsing import parse_resolution


LISTING_KIND = "listing"
LINK_KIND = "t3"

# reddit no longer reports downvotes reliably. a missing vote count is "unknown", which the
# controversy score treats as no signal.
UNKNOWN_VOTES = -1


@dataclass(frozen=True)
class Candidate:
    """A normalized image post from one of the requested subreddits."""

    url: str = ""
    source_id: str = ""
    permalink: str = ""
    title: str = ""
    author: str = ""
    score: int = 0
    upvotes: int = 0
    downvotes: int = 0
    created_at: float = 0
    domain: str = ""
    file_type: str = ""
    resolution: Optional[Resolution] = None

    @classmethod
    def from_link_data(cls, data: Mapping[str, Any]) -> "Candidate":
        url = data.get("url") or ""
        title = data.get("title") or ""

        return cls(
            url=url,
            source_id=data.get("subreddit") or "",
            permalink=data.get("permalink") or "",
            title=title,
            author=data.get("author") or "",
            score=_as_int(data.get("score"), 0),
            upvotes=_as_int(data.get("ups"), UNKNOWN_VOTES),
            downvotes=_as_int(data.get("downs"), UNKNOWN_VOTES),
            created_at=_as_number(data.get("created_utc")),
            domain=(data.get("domain") or "").lower(),
            file_type=parse_file_type(url),
            resolution=parse_resolution(title),
        )


# fold identity for selection. a run that ends on this candidate selected nothing.
DEFAULT_CANDIDATE = Candidate()


def is_empty_selection(candidate: Candidate) -> bool:
    return candidate is DEFAULT_CANDIDATE or not candidate.url


@dataclass(frozen=True)
class Link:
    data: Mapping[str, Any]


@dataclass(frozen=True)
class Listing:
    children: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class Other:
    kind: Any = None


Thing = Union[Listing, Link, Other]


def decode_thing(payload: Any) -> Thing:
    """
    Decode one kind/data envelope. Listings decode their children recursively. Kind tags are compared
    case-insensitively and an envelope without a data mapping is never a Link or Listing.
    """

    if not isinstance(payload, Mapping):
        return Other(kind=None)

    kind = payload.get("kind")
    data = payload.get("data")

    if not isinstance(kind, str) or not isinstance(data, Mapping):
        return Other(kind=kind)

    if kind.lower() == LINK_KIND:
        return Link(data=data)

    if kind.lower() == LISTING_KIND:
        children = data.get("children")
        if not isinstance(children, list):
            return Other(kind=kind)
        return Listing(children=tuple(decode_thing(child) for child in children))

    return Other(kind=kind)


def normalize(payloads: Iterable[Any]) -> list[Candidate]:
    """
    Flatten listing payloads into candidates, keeping the order of the payloads and of the links
    inside each one.
    """

    candidates = []

    for payload in payloads:
        thing = decode_thing(payload)
        if not isinstance(thing, Listing):
            continue

        for child in thing.children:
            if isinstance(child, Link):
                candidates.append(Candidate.from_link_data(child.data))

    return candidates


def _as_int(value, default: int) -> int:
    # bool is an int subclass but never a vote count
    if isinstance(value, bool) or value is None:
        return default

    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_number(value) -> float:
    if isinstance(value, bool) or value is None:
        return 0

    try:
        return float(value)
    except (TypeError, ValueError):
        return 0
