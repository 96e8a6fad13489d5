"""
Listing Text Parsers

Helpers that pull structured values out of the free text found in a listing: the file name and
extension at the end of an image url, and a declared "[1920x1080]" style resolution in a post title.
Nothing here inspects image content. A value that cannot be parsed comes back as None (or an
empty string for file types) so that callers can treat it as a failed filter rather than a crash.
"""

import re
from pathlib import Path
from typing import NamedTuple, Optional


# name may hold word chars, commas, whitespace and hyphens. the extension must be followed by a
# query string, a fragment or the end of the url.
FILE_PATTERN = re.compile(r"([\w,\s-]+)\.(\w+)(\?|$|#)", re.IGNORECASE)

RESOLUTION_PATTERN = re.compile(r"\[\s*(\d+)\s*[×x*]\s*(\d+)\s*\]", re.IGNORECASE)


class Resolution(NamedTuple):
    """Width and height in pixels as declared in a post title."""

    width: int
    height: int

    def __str__(self):
        return f"{self.width}x{self.height}"


def match_file(url: str) -> Optional[re.Match]:
    """
    Return the match for the 'name.ext' part of url, or None if the url does not end in something
    that looks like a file.
    """

    if not url:
        return None

    return FILE_PATTERN.search(url)


def parse_file_type(url: str) -> str:
    """Return the lower-cased file extension of url, or an empty string."""

    match = match_file(url)
    if match is None:
        return ""

    return match.group(2).lower()


def parse_resolution(title: str) -> Optional[Resolution]:
    """
    Return the first bracketed resolution found in title, e.g. '[1920 x 1080]', or None. Zero
    dimensions are not a resolution.
    """

    if not title:
        return None

    match = RESOLUTION_PATTERN.search(title)
    if match is None:
        return None

    width, height = int(match.group(1)), int(match.group(2))
    if width <= 0 or height <= 0:
        return None

    return Resolution(width=width, height=height)


def url_file_path(url: str, directory) -> Optional[Path]:
    """
    Build the local path an image at url would be saved to inside directory. Returns None when no
    file name can be derived from the url; such a url never has a local copy.
    """

    match = match_file(url)
    if match is None:
        return None

    return Path(directory) / f"{match.group(1)}.{match.group(2)}"
