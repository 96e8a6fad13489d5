"""
Reddit Listing Fetcher

This module builds listing urls for the public reddit JSON endpoints and fetches them with Requests.
Every subreddit in a run is requested at the same time from a thread pool. A run needs all of its
listings: if any single request fails the whole fetch fails with a FetchError, and no partial set
of listings is ever handed on.

A listing endpoint looks like:

    https://www.reddit.com/r/wallpapers/top.json?t=month
"""

from concurrent.futures import ThreadPoolExecutor
from collections.abc import Sequence
from urllib.parse import quote

import requests


BASE_URL = "https://www.reddit.com"

# reddit throttles anonymous clients that use a generic user agent
USER_AGENT = "redwall/0.1 (desktop wallpaper fetcher)"

REQUEST_TIMEOUT = 30


class FetchError(Exception):
    """
    Raised when a listing cannot be fetched or decoded.
    """

    pass


def listing_url(subreddit: str, sort: str) -> str:
    """
    Build the url for a subreddit's listing under a sort mode. The time window goes in the query
    string (see fetch_listing).
    """

    return "/".join([BASE_URL, "r", quote(subreddit, safe=""), f"{quote(sort, safe='')}.json"])


def fetch_listing(subreddit: str, sort: str, window: str) -> dict:
    """
    Fetch and decode one listing. Raise FetchError on connection problems, bad status codes or a
    response that is not JSON.
    """

    url = listing_url(subreddit, sort)

    try:
        r = requests.get(
            url,
            params={"t": window},
            headers={"User-Agent": USER_AGENT},
            timeout=REQUEST_TIMEOUT,
        )

    except requests.exceptions.RequestException as error:
        raise FetchError(f"could not fetch /r/{subreddit}: {error}") from error

    # successful request but received a bad response from the server.
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError as error:
        raise FetchError(
            f"something went wrong fetching /r/{subreddit} (status code {r.status_code})"
        ) from error

    try:
        return r.json()
    except ValueError as error:
        raise FetchError(f"/r/{subreddit} did not return a JSON listing: {error}") from error


def fetch_listings(
    subreddits: Sequence[str], sort: str, window: str, max_workers: int = None
) -> list[dict]:
    """
    Fetch the listings for all subreddits concurrently and return them in the order the
    subreddits were given. The first failure is raised once every request has finished.
    """

    if not subreddits:
        return []

    with ThreadPoolExecutor(max_workers=max_workers or len(subreddits)) as executor:
        futures = [
            executor.submit(fetch_listing, subreddit, sort, window)
            for subreddit in subreddits
        ]

    # leaving the with block waits for every future, so result() never blocks here
    return [future.result() for future in futures]
