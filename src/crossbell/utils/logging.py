"""
Structured logging for the Crossbell SDK.

Thin layer over the standard library ``logging`` module. Every SDK module
gets its logger through :func:`get_logger` and attaches context with
``extra={...}``. The SDK never installs handlers on its own; applications
opt in with :func:`configure_logging`.

Example:
    ```python
    from crossbell.utils.logging import configure_logging

    configure_logging("DEBUG")
    ```
"""

from __future__ import annotations

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "crossbell"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if not context:
            return base
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{base} [{pairs}]"


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``crossbell`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a handler to the SDK root logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Log level name or number
        fmt: Format string (defaults to DEFAULT_FORMAT)
        handler: Handler to install (defaults to a StreamHandler)

    Returns:
        The SDK root logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, "_crossbell_configured", False):
            root.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(ContextFormatter(fmt or DEFAULT_FORMAT))
    handler._crossbell_configured = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return root


def set_level(level: Union[int, str]) -> None:
    """Set the level of the SDK root logger."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
