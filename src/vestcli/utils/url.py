"""URL utility functions for vestcli."""

import dataclasses
import logging

from cleanurl import Result, cleanurl

from ..models import FeedEntry, RemoteBody

logger: logging.Logger = logging.getLogger(name=__name__)


def get_clean_url(url: str) -> str:
    """Remove tracking parameters from a URL.

    Args:
        url: URL to clean

    Returns:
        Cleaned URL, or url itself if it can't be cleaned
    """
    if not url:
        return ""
    try:
        cleaned: Result | None = cleanurl(url=url)
    except Exception as e:
        logger.debug(msg=f"Error cleaning URL {url}: {e}")
        return url
    return cleaned.url if cleaned else url


def clean_entry_url(entry: FeedEntry) -> FeedEntry:
    """Get the entry with the URL of its remote body cleaned.

    Entries whose body came with the feed are returned unchanged.
    """
    if not isinstance(entry.body, RemoteBody):
        return entry
    url: str = get_clean_url(url=entry.body.url)
    if url == entry.body.url:
        return entry
    return dataclasses.replace(entry, body=RemoteBody(url=url))
