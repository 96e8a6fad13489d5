"""
Image Handler

Utilities for preparing the download directory and downloading the winning image. Supports only
plain GET requests for image files specified by URL, with no authentication. Finding the image is
the job of the selection stage; this module only fetches and saves it.

The downloaded file is named after the url's 'name.ext' part (see parsing.url_file_path), which is
the same name the shuffle mode looks for when it skips images that were downloaded before.
"""

import io
import os
from pathlib import Path

from PIL import Image, UnidentifiedImageError
import requests

from redwall.parsing import url_file_path
from redwall.cli_utils.console import warn


REQUEST_TIMEOUT = 60

PARTIAL_SUFFIX = ".part"


class InvalidImageError(Exception):
    """
    Raised when a provided binary input file is not an image. Wrapper around the PIL
    UnidentifiedImageError for better identification of errors during debugging
    and custom error messaging.
    """

    pass


class DownloadError(Exception):
    """
    Raised when an image download is unsuccessful.
    """

    pass


def ensure_directory(directory) -> Path:
    """
    Create directory (and any parents) if it does not already exist. Safe to call repeatedly.
    """

    directory = Path(directory).expanduser()

    if directory.exists() and not directory.is_dir():
        raise DownloadError(f"{directory} exists but is not a directory.")

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise DownloadError(f"Error trying to create {directory}: {error}") from error

    return directory


def validate_image(input) -> str:
    """
    Determine whether input is a valid image. PIL open method accepts a Path object, string, or file
    object (buffered stream). The PIL method reads the content header to determine file type but
    doesn't load the pixel data, so it is cheap enough to use as a validation method.
    Returns the image format reported by PIL, e.g. 'JPEG'.
    """

    try:
        with Image.open(input) as image:

            return image.format

    except UnidentifiedImageError as error:
        raise InvalidImageError(f"Input {str(input)} does not appear to be an image.") from error

    except FileNotFoundError as error:
        raise InvalidImageError(f"Input {str(input)} could not be found.") from error


def is_complete_image(path) -> bool:
    """
    True if the file at path decodes as a whole image. Unlike validate_image this reads the pixel
    data, so a file cut short by an interrupted download is caught.
    """

    try:
        with Image.open(path) as image:
            image.load()

    except (UnidentifiedImageError, OSError, SyntaxError):
        return False

    return True


def download_image(url: str, directory) -> Path:
    """
    Download the image at url into directory and return the saved path.

    If a complete image with the same name is already there it is reused; a broken leftover is
    downloaded again. The file is written under a '.part' name first and renamed once complete,
    so an interrupted write never leaves a partial image at the final name. If downloading fails
    for any reason (bad request, bad status, not an image) raise DownloadError instead of failing
    silently.
    """

    destination_path = url_file_path(url, Path(directory).expanduser())
    if destination_path is None:
        raise DownloadError(f"Cannot derive a file name from {url}.")

    if destination_path.is_dir():
        raise DownloadError(f"Destination file {destination_path} is a directory.")

    if destination_path.is_file():
        if is_complete_image(destination_path):
            warn(f"'{destination_path.name}' is already located at {destination_path.parent}")
            return destination_path

        warn(f"'{destination_path.name}' at {destination_path.parent} is damaged, downloading it again")

    try:
        # requests follows redirects on our behalf, e.g. imgur page -> image resource
        r = requests.get(url, timeout=REQUEST_TIMEOUT)

    except requests.exceptions.RequestException as error:
        raise DownloadError(str(error)) from error

    # successful request but received a bad response from the server.
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError as error:
        raise DownloadError(
            f"Download error: something went wrong trying to access {url} (status code {r.status_code})"
        ) from error

    # successful request but did not get back image data as the response.
    try:
        validate_image(io.BytesIO(r.content))
    except InvalidImageError as error:
        raise DownloadError(
            f"Download error: the target resource at {url} does not appear to be an image."
        ) from error

    partial_path = destination_path.with_name(destination_path.name + PARTIAL_SUFFIX)

    try:
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        partial_path.write_bytes(r.content)
        os.replace(partial_path, destination_path)
    except OSError as error:
        partial_path.unlink(missing_ok=True)
        raise DownloadError(f"Could not save {destination_path}: {error}") from error

    return destination_path
