"""
conftest.py

Test configuration for CLI and entrypoint tests.

Defines pytest fixtures specifically related to CLI and click operations.
"""

import json

import pytest
import click

from redwall.cli import cli
from redwall.cli_utils.utils import import_commands
from redwall.cli_utils.utils import attach_commands


@pytest.fixture(scope="session")
def subcommands():
    """
    Import all of the commands found in the subcommands folder *without* invoking the
    entrypoint (cli).
    """

    return import_commands()


@pytest.fixture(autouse=True)
def setup(subcommands, reset_commands, entry_point: click.Group = cli):
    attach_commands(entry_point, subcommands)
    yield
    reset_commands(entry_point=entry_point)


@pytest.fixture
def reset_commands():
    def inner(entry_point: click.Group = cli):
        # teardown the commands that may have been added to clean the test environment.
        entry_point.commands = {}

    return inner


@pytest.fixture
def config_file(tmp_path):
    """A config.json that keeps downloads inside tmp_path and disables shuffle."""

    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "subreddits": ["wallpapers"],
                "shuffle": False,
                "resolution": None,
                "directory": str(tmp_path / "wallpapers"),
            }
        )
    )
    return path
