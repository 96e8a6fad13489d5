"""
Tests for pipeline.py

A whole run is driven with fake collaborators: a fetch function returning canned listings and
recorders standing in for download, apply and notify. This checks the stages are wired in the
right order and that a failing stage stops everything after it.
"""

import pytest

# following entities are tested in this module:
from redwall.pipeline import EmptySelectionError
from redwall.pipeline import RunResult
from redwall.pipeline import preview
from redwall.pipeline import run
from redwall.config import merge_config
from redwall.image_handler import DownloadError
from redwall.wallpaper_handler import ApplyError
from redwall.reddit_handler import FetchError


class Recorder:
    """Stands in for download/apply/notify and keeps the order they were called in."""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def download(self, url, directory):
        self.calls.append(("download", url))
        if self.fail_on == "download":
            raise DownloadError("404")
        return directory / url.rsplit("/", 1)[-1]

    def apply(self, file):
        self.calls.append(("apply", file.name))
        if self.fail_on == "apply":
            raise ApplyError("no gsettings")

    def notify(self, candidate, file):
        self.calls.append(("notify", candidate.title))


@pytest.fixture
def listings(link_payload, listing_payload):
    """Two subreddits worth of listings, scores [50, 200] and [150]."""

    return [
        listing_payload(
            link_payload(url="https://i.imgur.com/low.jpg", score=50, title="low", created_utc=100),
            link_payload(url="https://i.imgur.com/high.jpg", score=200, title="high", created_utc=300),
        ),
        listing_payload(
            link_payload(url="https://i.imgur.com/mid.jpg", score=150, title="mid", created_utc=200),
            {"kind": "t1", "data": {"body": "not a link"}},
        ),
    ]


def start(recorder, listings, config, **kwargs):
    def fetch(subreddits, sort, window):
        return listings

    return run(
        config,
        fetch=fetch,
        download=recorder.download,
        apply=recorder.apply,
        notifier=recorder.notify,
        **kwargs,
    )


def test_run_top(config, listings):
    recorder = Recorder()

    result = start(recorder, listings, config)

    assert isinstance(result, RunResult)
    assert result.candidate.score == 200
    assert result.file == config.directory / "high.jpg"
    assert recorder.calls == [
        ("download", "https://i.imgur.com/high.jpg"),
        ("apply", "high.jpg"),
        ("notify", "high"),
    ]


def test_run_creates_directory(config, listings):
    start(Recorder(), listings, config)

    assert config.directory.is_dir()


def test_run_new(config, listings):
    result = start(Recorder(), listings, merge_config(config, {"sort": "new"}))

    assert result.candidate.created_at == 300


def test_run_empty_selection(config, listings):
    recorder = Recorder()

    with pytest.raises(EmptySelectionError):
        start(recorder, listings, merge_config(config, {"score": 1000}))

    assert recorder.calls == []


def test_run_shuffle_skips_downloaded(config, listings):
    recorder = Recorder()
    shuffled = merge_config(config, {"shuffle": True})

    result = start(recorder, listings, shuffled, exists=lambda path: path.name == "high.jpg")

    assert result.candidate.title == "mid"


def test_run_shuffle_everything_downloaded(config, listings):
    recorder = Recorder()

    with pytest.raises(EmptySelectionError):
        start(recorder, listings, merge_config(config, {"shuffle": True}), exists=lambda path: True)

    assert recorder.calls == []


@pytest.mark.parametrize(
    "fail_on, expected_calls",
    [("download", ["download"]), ("apply", ["download", "apply"])],
)
def test_run_stops_at_failing_step(config, listings, fail_on, expected_calls):
    recorder = Recorder(fail_on=fail_on)

    with pytest.raises((DownloadError, ApplyError)):
        start(recorder, listings, config)

    assert [name for name, _ in recorder.calls] == expected_calls


def test_run_fetch_failure(config):
    recorder = Recorder()

    def fetch(subreddits, sort, window):
        raise FetchError("could not fetch /r/wallpapers")

    with pytest.raises(FetchError):
        run(config, fetch=fetch, download=recorder.download, apply=recorder.apply, notifier=recorder.notify)

    assert recorder.calls == []


def test_preview_ranks_candidates(config, listings):
    ranked = preview(config, fetch=lambda subreddits, sort, window: listings)

    assert [candidate.score for candidate in ranked] == [200, 150]


def test_preview_shuffle_hides_downloaded(config, listings):
    ranked = preview(
        merge_config(config, {"shuffle": True}),
        fetch=lambda subreddits, sort, window: listings,
        exists=lambda path: path.name == "high.jpg",
    )

    assert [candidate.title for candidate in ranked] == ["mid"]


def test_preview_leaves_out_what_run_cannot_pick(config, link_payload, listing_payload):
    listings = [listing_payload(link_payload(url="https://i.imgur.com/zero.jpg", score=0))]

    assert preview(config, fetch=lambda subreddits, sort, window: listings) == []
