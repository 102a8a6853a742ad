"""Error handling utilities for vestcli."""

import logging
from typing import Any

logger: logging.Logger = logging.getLogger(name=__name__)


def error_message(context: str, error: Exception) -> str:
    """Build the text shown in an error view.

    Args:
        context: What was being done, e.g. "Couldn't get article content"
        error: The exception that stopped it

    Returns:
        Message for the user
    """
    detail: str = str(error) or type(error).__name__
    return f"{context}: {detail}"


def log_and_notify(app: Any, error: Exception, title: str, severity: str = "error") -> None:
    """Log an error and show it as a notification instead of an error view.

    Used for failures the user can keep reading through, like a failed
    background refresh.

    Args:
        app: The Textual app instance (should have notify method)
        error: The exception that occurred
        title: Title for the notification
        severity: Notification severity level
    """
    logger.error(msg=f"{title}: {error}")
    app.notify(message=str(error) or type(error).__name__, title=title, severity=severity)
