"""
conftest.py

Test configuration for redwall tests.

Defines Pytest fixtures for supplying test data to tests across the entire test suite: candidate
and listing factories, a generated test image and a selection config. Fixtures used within only a
single module are defined directly in that module.
"""

import io
from pathlib import Path

import pytest
from PIL import Image

from redwall.candidates import Candidate
from redwall.config import build_config
from redwall.cli_utils.console import console


@pytest.fixture
def make_candidate():
    """
    Return a factory for Candidates. Every candidate gets a unique image url unless one is given,
    so that shuffle mode can tell them apart by file name.
    """

    counter = iter(range(1, 10_000))

    def factory(**fields) -> Candidate:
        number = next(counter)
        defaults = dict(
            url=f"https://i.imgur.com/image{number}.jpg",
            source_id="wallpapers",
            permalink=f"/r/wallpapers/comments/{number}/",
            title=f"Mountains number {number} [3840x2160]",
            author="someone",
            score=500,
            upvotes=500,
            downvotes=0,
            created_at=1_600_000_000,
            domain="i.imgur.com",
            file_type="jpg",
            resolution=None,
        )
        defaults.update(fields)
        return Candidate(**defaults)

    return factory


@pytest.fixture
def link_payload():
    """Return a factory for raw 't3' link envelopes as found in a reddit listing."""

    def factory(**fields) -> dict:
        data = dict(
            url="https://i.imgur.com/abc123.jpg",
            subreddit="wallpapers",
            permalink="/r/wallpapers/comments/abc123/mountains/",
            title="Mountains at dawn [3840x2160]",
            author="someone",
            score=1234,
            ups=1234,
            downs=0,
            created_utc=1_600_000_000.0,
            domain="i.imgur.com",
        )
        data.update(fields)
        return {"kind": "t3", "data": data}

    return factory


@pytest.fixture
def listing_payload():
    """Wrap link envelopes (or anything else) into a listing envelope."""

    def factory(*children) -> dict:
        return {"kind": "Listing", "data": {"children": list(children)}}

    return factory


@pytest.fixture
def config(tmp_path):
    """A selection config that downloads into a temporary directory and checks nothing else."""

    return build_config(
        {
            "subreddits": ["wallpapers"],
            "domains": [],
            "types": [],
            "resolution": None,
            "shuffle": False,
            "directory": str(tmp_path / "wallpapers"),
        }
    )


@pytest.fixture(scope="session")
def image_bytes() -> bytes:
    """JPEG encoded bytes of a small generated image."""

    buffer = io.BytesIO()
    Image.new("RGB", (64, 36), color=(40, 90, 160)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def test_image(tmp_path, image_bytes) -> Path:
    """Path to a generated JPEG image on disk."""

    path = tmp_path / "test_image.jpg"
    path.write_bytes(image_bytes)
    return path


@pytest.fixture(autouse=True)
def reset_console():
    """--quiet swaps the stdout console's file; restore it after every test."""

    yield
    console.file = None
