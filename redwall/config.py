"""
redwall Configuration Management

This file handles building, loading and saving the selection configuration. A RedwallConfig is an
immutable value: build_config() merges the caller's options over DEFAULTS into a brand new
config and never touches the mapping it was given. Raise a ConfigurationError for any issue with
these values, including an unknown sort mode, so that bad settings fail before any network
request is made.

The configuration file is "config.json" and is saved at ~/.config/redwall/config.json as per modern
Linux app conventions. Set REDWALL_CONFIG_DIR to keep it somewhere else.
"""

import json
import os
from dataclasses import dataclass
from dataclasses import asdict
from pathlib import Path
from collections.abc import Mapping
from typing import Optional

from redwall.parsing import Resolution


SORT_MODES = ("top", "hot", "controversial", "new")
TIME_WINDOWS = ("hour", "day", "week", "month", "year", "all")

CONFIG_DIR = Path("~/.config/redwall").expanduser()
CONFIG_FILE_NAME = "config.json"

DEFAULTS = {
    "subreddits": ["wallpaper", "wallpapers", "castles"],
    "sort": "top",
    "from": "month",
    "score": 100,
    "domains": ["i.imgur.com", "imgur.com"],
    "types": ["png", "jpg", "jpeg"],
    "shuffle": True,
    "directory": "~/.reddit-wallpaper",
    "resolution": {"width": 1920, "height": 1080},
}


class ConfigurationError(Exception):
    """Raise when an issue occurs with handling redwall configuration."""

    pass


class ConfigEncoder(json.JSONEncoder):
    """
    custom encoder adds support for serializing pathlib objects as strings
    """

    def default(self, o):
        if isinstance(o, Path):
            return str(o)

        else:
            return json.JSONEncoder.default(self, o)


@dataclass(frozen=True)
class RedwallConfig:
    """
    Settings for one run. Instances are only meant to be made through build_config(), which
    normalizes raw values (lower-cased domains and types, expanded directory, parsed resolution).
    The JSON key "from" is stored as time_window since 'from' is a Python keyword.
    """

    subreddits: tuple = tuple(DEFAULTS["subreddits"])
    sort: str = DEFAULTS["sort"]
    time_window: str = DEFAULTS["from"]
    score: int = DEFAULTS["score"]
    domains: tuple = tuple(DEFAULTS["domains"])
    types: tuple = tuple(DEFAULTS["types"])
    shuffle: bool = DEFAULTS["shuffle"]
    directory: Path = Path(DEFAULTS["directory"]).expanduser()
    resolution: Optional[Resolution] = Resolution(**DEFAULTS["resolution"])

    def __post_init__(self):
        if self.sort not in SORT_MODES:
            raise ConfigurationError(
                f"unknown sort mode '{self.sort}', expected one of: {', '.join(SORT_MODES)}"
            )

        if self.time_window not in TIME_WINDOWS:
            raise ConfigurationError(
                f"unknown time window '{self.time_window}', expected one of: {', '.join(TIME_WINDOWS)}"
            )

    def as_options(self) -> dict:
        """Return the config as a mapping in the config file's shape (inverse of build_config)."""

        options = asdict(self)
        options["from"] = options.pop("time_window")
        options["subreddits"] = list(self.subreddits)
        options["domains"] = list(self.domains)
        options["types"] = list(self.types)
        options["resolution"] = (
            None if self.resolution is None else self.resolution._asdict()
        )
        return options

    def generate_config_json(self, config_file: Path = None) -> Path:
        """
        Write the config to file, serializing to JSON. Returns filepath of written config.json,
        which defaults to the location get_config_file() reports.

        Warning: will overwrite any existing config file at that location.
        """

        config_file = Path(config_file) if config_file else get_config_file()

        try:
            to_json = json.dumps(
                self.as_options(), sort_keys=True, indent=4, cls=ConfigEncoder
            )

        except TypeError as error:
            raise ConfigurationError(
                f"There was an error trying to serialize config data to JSON: {error}"
            ) from error

        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            config_file.write_text(to_json)

        except OSError as error:
            raise ConfigurationError(
                f"There was an error saving the configuration file: {error}."
            ) from error

        return config_file


def build_config(options: Optional[Mapping] = None) -> RedwallConfig:
    """
    Merge options over DEFAULTS and return a new RedwallConfig. The options mapping is left
    untouched. Unknown keys and malformed values raise ConfigurationError.
    """

    options = dict(options or {})

    unknown = set(options) - set(DEFAULTS)
    if unknown:
        raise ConfigurationError(
            f"unknown configuration option(s): {', '.join(sorted(unknown))}"
        )

    merged = {**DEFAULTS, **options}

    return RedwallConfig(
        subreddits=tuple(_as_str_list(merged["subreddits"], "subreddits")),
        sort=str(merged["sort"]).lower(),
        time_window=str(merged["from"]).lower(),
        score=_as_score(merged["score"]),
        domains=tuple(item.lower() for item in _as_str_list(merged["domains"], "domains")),
        types=tuple(item.lower() for item in _as_str_list(merged["types"], "types")),
        shuffle=_as_bool(merged["shuffle"], "shuffle"),
        directory=_as_directory(merged["directory"]),
        resolution=_as_resolution(merged["resolution"]),
    )


def merge_config(config: RedwallConfig, overrides: Mapping) -> RedwallConfig:
    """
    Return a new config with overrides applied on top of config. Overrides set to None are
    skipped so that unset command line options keep the configured value.
    """

    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config

    return build_config({**config.as_options(), **changes})


def get_config_file() -> Path:
    """
    Location of config.json: $REDWALL_CONFIG_DIR/config.json if the variable is set, else
    ~/.config/redwall/config.json
    """

    try:
        return Path(os.environ["REDWALL_CONFIG_DIR"]).expanduser() / CONFIG_FILE_NAME

    except KeyError:
        return CONFIG_DIR / CONFIG_FILE_NAME


def load_config(config_file: Path = None) -> RedwallConfig:
    """
    Load a config.json and build a RedwallConfig from it. Raise ConfigurationError if the file
    can't be found or read.
    """

    config_src = Path(config_file).expanduser() if config_file else get_config_file()

    try:
        with config_src.open("r") as file:
            from_json = json.loads(file.read())

    except json.JSONDecodeError as error:
        raise ConfigurationError(f"There was an issue reading the config: {error}") from error

    except OSError as error:
        raise ConfigurationError(f"There was an issue opening the config: {error}") from error

    if not isinstance(from_json, Mapping):
        raise ConfigurationError(f"The config at {config_src} must be a JSON object.")

    return build_config(from_json)


def init(config_file: Path = None) -> RedwallConfig:
    """
    Load the config file, writing one with the default settings first if it does not exist yet.
    """

    config_src = Path(config_file).expanduser() if config_file else get_config_file()

    if not config_src.exists():
        config = build_config()
        config.generate_config_json(config_src)
        return config

    return load_config(config_src)


def _as_str_list(value, name: str) -> list:
    # null and [] both mean "no restriction"
    if value is None:
        return []

    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"'{name}' must be a list of strings, got {value!r}")

    return [str(item) for item in value]


def _as_bool(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{name}' must be true or false, got {value!r}")

    return value


def _as_score(value) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"'score' must be an integer, got {value!r}")

    try:
        return int(value)
    except (TypeError, ValueError) as error:
        raise ConfigurationError(f"'score' must be an integer, got {value!r}") from error


def _as_directory(value) -> Path:
    if not value:
        raise ConfigurationError("'directory' must be a path")

    return Path(value).expanduser()


def _as_resolution(value) -> Optional[Resolution]:
    if value is None:
        return None

    if isinstance(value, Resolution):
        return value

    try:
        if isinstance(value, Mapping):
            width, height = int(value["width"]), int(value["height"])
        else:
            width, height = (int(item) for item in value)

    except (KeyError, TypeError, ValueError) as error:
        raise ConfigurationError(
            f"'resolution' must look like {{\"width\": 1920, \"height\": 1080}}, got {value!r}"
        ) from error

    if width <= 0 or height <= 0:
        raise ConfigurationError(f"'resolution' must be positive, got {width}x{height}")

    return Resolution(width=width, height=height)
