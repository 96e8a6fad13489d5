"""
Desktop Notifications

Tell the user which post became their wallpaper. Notifications are sent with the notify-send CLI
from libnotify, which every freedesktop compliant desktop understands.
"""

import shutil
import subprocess
import time

from redwall.candidates import Candidate


REDDIT_URL = "https://reddit.com"
APP_NAME = "redwall"

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR

# (upper bound in seconds, phrase). bounds follow the rounding humans expect: 50 minutes is
# "an hour ago", 25 days are "25 days ago" but 40 days are "a month ago".
_RELATIVE_TIMES = (
    (45, lambda s: "a few seconds ago"),
    (90, lambda s: "a minute ago"),
    (45 * MINUTE, lambda s: f"{round(s / MINUTE)} minutes ago"),
    (90 * MINUTE, lambda s: "an hour ago"),
    (22 * HOUR, lambda s: f"{round(s / HOUR)} hours ago"),
    (36 * HOUR, lambda s: "a day ago"),
    (26 * DAY, lambda s: f"{round(s / DAY)} days ago"),
    (45 * DAY, lambda s: "a month ago"),
    (320 * DAY, lambda s: f"{round(s / (30 * DAY))} months ago"),
    (548 * DAY, lambda s: "a year ago"),
)


class NotifyError(Exception):
    """
    Raised when the desktop notification could not be shown.
    """

    pass


def time_ago(timestamp: float, now: float = None) -> str:
    """Describe a unix timestamp relative to now, e.g. '3 days ago'."""

    now = time.time() if now is None else now
    seconds = max(0, now - timestamp)

    for bound, phrase in _RELATIVE_TIMES:
        if seconds < bound:
            return phrase(seconds)

    return f"{round(seconds / (365 * DAY))} years ago"


def format_message(candidate: Candidate, now: float = None) -> str:
    """e.g. '/r/wallpapers 1234 points, 3 days ago by someone'"""

    return (
        f"/r/{candidate.source_id} {candidate.score} points, "
        f"{time_ago(candidate.created_at, now)} by {candidate.author}"
    )


def permalink_url(candidate: Candidate) -> str:
    return REDDIT_URL + candidate.permalink


def notify(title: str, subtitle: str, message: str, link: str, icon=None) -> None:
    """
    Show a desktop notification. notify-send has no subtitle or link fields, so both go into the
    body below the message. Raise NotifyError on failure.
    """

    executable = shutil.which("notify-send")
    if executable is None:
        raise NotifyError("notify-send was not found; install libnotify to get notifications.")

    command = [executable, f"--app-name={APP_NAME}"]
    if icon:
        command.append(f"--icon={icon}")

    body = "\n".join(line for line in (subtitle, message, link) if line)
    command.extend([title, body])

    try:
        subprocess.run(command, check=True, capture_output=True, text=True)

    except (subprocess.CalledProcessError, OSError) as error:
        raise NotifyError(f"could not show notification: {error}") from error


def notify_candidate(candidate: Candidate, icon=None) -> None:
    """Announce the new wallpaper, using the downloaded file as the notification icon."""

    notify(
        title=candidate.title,
        subtitle=candidate.source_id,
        message=format_message(candidate),
        link=permalink_url(candidate),
        icon=icon,
    )
