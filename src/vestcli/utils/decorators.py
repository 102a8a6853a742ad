"""Decorator utilities for vestcli."""

import functools
import logging
from collections.abc import Callable
from typing import Any

import httpx

from ..exceptions import FetchError

logger: logging.Logger = logging.getLogger(name=__name__)


def raise_fetch_error(fetch_method: Callable) -> Callable:
    """Decorator that turns network and response errors into a FetchError.

    The FetchError message is meant to be shown to the user. Nothing is retried.

    Args:
        fetch_method: The client method to wrap

    Returns:
        A wrapped function raising FetchError on failure
    """

    @functools.wraps(wrapped=fetch_method)
    def wrapper(self, *args, **kwargs) -> Any:
        try:
            return fetch_method(self, *args, **kwargs)
        except FetchError:
            raise
        except httpx.HTTPStatusError as err:
            logger.error(msg=f"{fetch_method.__name__} failed: {err}")
            raise FetchError(
                f"Server returned an error: {err.response.status_code} {err.response.reason_phrase}"
            ) from err
        except httpx.HTTPError as err:
            logger.error(msg=f"{fetch_method.__name__} failed: {err!r}")
            raise FetchError(f"Couldn't connect: {str(err) or type(err).__name__}") from err
        except ValueError as err:
            logger.error(msg=f"{fetch_method.__name__} got an unexpected response: {err}")
            raise FetchError(f"Unexpected response: {err}") from err

    return wrapper
