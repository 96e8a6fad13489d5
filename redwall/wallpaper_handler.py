"""
Gnome Wallpaper Handler

This module handles updates to the Gnome desktop background by dropping into the gsettings CLI,
which reads and writes the org.gnome.desktop.background schema. Gsettings only exists for GNOME
desktop environments.

More information on this schema can be found at:
https://github.com/GNOME/gsettings-desktop-schemas/blob/master/schemas/org.gnome.desktop.background.gschema.xml.in
"""

import shutil
import subprocess
from pathlib import Path

from redwall import image_handler


SCHEMA = "org.gnome.desktop.background"

# newer GNOME releases keep a separate picture for the dark style
PICTURE_KEYS = ("picture-uri", "picture-uri-dark")


class ApplyError(Exception):
    """
    Raised when an attempt to update Gnome desktop background fails.
    """

    pass


def _gsettings(*args: str) -> subprocess.CompletedProcess:
    executable = shutil.which("gsettings")
    if executable is None:
        raise ApplyError("gsettings was not found; is this a GNOME desktop?")

    try:
        return subprocess.run(
            [executable, *args],
            text=True,
            check=True,
            capture_output=True,
        )

    except (subprocess.CalledProcessError, OSError) as error:
        raise ApplyError(f"gsettings {' '.join(args[:3])} failed: {error}") from error


def get_current_wallpaper() -> Path:
    """
    Retrieve the current wallpaper from the Gnome settings for desktop background.
    """

    process = _gsettings("get", SCHEMA, "picture-uri")

    # gsettings prints the value as a quoted GVariant string, e.g. 'file:///home/me/a.jpg'
    value = process.stdout.strip().removeprefix("'").removesuffix("'")
    return Path(value.removeprefix("file://"))


def _schema_keys() -> set:
    return set(_gsettings("list-keys", SCHEMA).stdout.split())


def update_wallpaper(img_path) -> Path:
    """
    Update the background image to the one at img_path and return its absolute path. Raise
    ApplyError if the file is missing, is not an image or gsettings refuses the update.
    """

    try:
        wallpaper_location = Path(img_path).expanduser().resolve()
    except TypeError as error:
        raise ApplyError(
            f"Invalid parameter: {img_path} is not a valid Pathlike object."
        ) from error

    # gnome does no validation of its own: a bad uri silently leaves the desktop blank
    if not wallpaper_location.is_file():
        raise ApplyError(
            f"Invalid path provided for image location: {img_path} does not exist."
        )

    try:
        image_handler.validate_image(wallpaper_location)
    except image_handler.InvalidImageError as error:
        raise ApplyError(
            f"Invalid image type provided. {wallpaper_location.name} is not a valid image."
        ) from error

    available = _schema_keys()
    if "picture-uri" not in available:
        raise ApplyError(f"{SCHEMA} has no picture-uri key.")

    for key in PICTURE_KEYS:
        if key in available:
            _gsettings("set", SCHEMA, key, wallpaper_location.as_uri())

    return wallpaper_location
