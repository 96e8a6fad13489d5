"""
Test the CLI driver for redwall

cli.py is the entry point for the redwall program. Verify that standard invocation returns the
correct exit code on success or failure and that command line options reach the pipeline. The
pipeline itself is patched out; it is tested in test_core/test_pipeline.py.
"""

import json
from unittest.mock import patch

from click.testing import CliRunner

from redwall.cli import cli
from redwall.candidates import Candidate
from redwall.cli_utils.decorators import EXIT_EMPTY_SELECTION
from redwall.pipeline import EmptySelectionError
from redwall.pipeline import RunResult
from redwall.reddit_handler import FetchError

runner = CliRunner()


def fake_result(tmp_path):
    candidate = Candidate(url="https://i.imgur.com/abc.jpg", title="Castle", score=500)
    return RunResult(candidate=candidate, file=tmp_path / "abc.jpg")


def test_subcommands_attached():
    assert set(cli.commands) >= {"run", "candidates", "init"}


@patch("redwall.pipeline.run", autospec=True)
def test_invocation_no_args_runs(mock_run, config_file, tmp_path):
    mock_run.return_value = fake_result(tmp_path)

    result = runner.invoke(cli, ["--config", str(config_file)])

    assert result.exit_code == 0
    mock_run.assert_called_once()


@patch("redwall.pipeline.run", autospec=True)
def test_run_options_override_config(mock_run, config_file, tmp_path):
    mock_run.return_value = fake_result(tmp_path)

    result = runner.invoke(
        cli,
        [
            "--config", str(config_file),
            "run",
            "--sort", "new",
            "--from", "week",
            "-r", "castles",
            "-r", "EarthPorn",
            "--score", "10",
            "--shuffle",
        ],
    )

    assert result.exit_code == 0
    config = mock_run.call_args.args[0]
    assert config.sort == "new"
    assert config.time_window == "week"
    assert config.subreddits == ("castles", "EarthPorn")
    assert config.score == 10
    assert config.shuffle is True
    assert config.resolution is None


@patch("redwall.pipeline.run", autospec=True)
def test_run_empty_selection(mock_run, config_file):
    mock_run.side_effect = EmptySelectionError("no matching wallpaper found")

    result = runner.invoke(cli, ["--config", str(config_file), "run"])

    assert result.exit_code == EXIT_EMPTY_SELECTION


@patch("redwall.pipeline.run", autospec=True)
def test_run_failure(mock_run, config_file):
    mock_run.side_effect = FetchError("could not fetch /r/wallpapers")

    result = runner.invoke(cli, ["--config", str(config_file), "run"])

    assert result.exit_code == 1


def test_run_missing_config(tmp_path):
    result = runner.invoke(cli, ["--config", str(tmp_path / "missing.json"), "run"])

    assert result.exit_code == 1


def test_invalid_sort_rejected(config_file):
    result = runner.invoke(cli, ["--config", str(config_file), "run", "--sort", "best"])

    assert result.exit_code != 0


def test_invocation_failure_invalid_args():
    result = runner.invoke(cli, ["--thiswillneverbeanoption"])

    assert result.exception is not None
    assert result.exit_code != 0


@patch("redwall.pipeline.preview", autospec=True)
def test_candidates_lists_table(mock_preview, config_file):
    mock_preview.return_value = [
        Candidate(url="https://i.imgur.com/a.jpg", title="First [1920x1080]", source_id="castles", score=900),
        Candidate(url="https://i.imgur.com/b.jpg", title="Second", source_id="castles", score=300),
    ]

    result = runner.invoke(cli, ["--config", str(config_file), "candidates", "--limit", "1"])

    assert result.exit_code == 0
    assert "First" in result.output
    assert "Second" not in result.output


@patch("redwall.pipeline.preview", autospec=True)
def test_candidates_new_shows_whole_timestamps(mock_preview, config_file):
    mock_preview.return_value = [
        Candidate(url="https://i.imgur.com/a.jpg", title="First", source_id="castles", created_at=1_600_000_000),
    ]

    result = runner.invoke(cli, ["--config", str(config_file), "candidates", "--sort", "new"])

    assert result.exit_code == 0
    assert "1600000000" in result.output
    assert "e+09" not in result.output


@patch("redwall.pipeline.preview", autospec=True)
def test_candidates_none_found(mock_preview, config_file):
    mock_preview.return_value = []

    result = runner.invoke(cli, ["--config", str(config_file), "candidates"])

    assert result.exit_code == 0


def test_init_writes_config(tmp_path):
    config_file = tmp_path / "nested" / "config.json"

    result = runner.invoke(cli, ["--config", str(config_file), "init"])

    assert result.exit_code == 0
    assert json.loads(config_file.read_text())["sort"] == "top"


def test_init_keeps_existing_config(config_file):
    before = config_file.read_text()

    result = runner.invoke(cli, ["--config", str(config_file), "init"])

    assert result.exit_code == 0
    assert config_file.read_text() == before


def test_init_force_overwrites(config_file):
    result = runner.invoke(cli, ["--config", str(config_file), "init", "--force"])

    assert result.exit_code == 0
    assert json.loads(config_file.read_text())["subreddits"] == ["wallpaper", "wallpapers", "castles"]


@patch("redwall.pipeline.run", autospec=True)
def test_option_quiet(mock_run, config_file, tmp_path):
    mock_run.return_value = fake_result(tmp_path)

    result = runner.invoke(cli, ["--config", str(config_file), "--quiet", "run"])

    assert result.exit_code == 0
    assert result.output == ""
