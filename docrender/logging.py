"""Package logger setup for docrender."""

from __future__ import annotations

import logging

_ROOT = "docrender"
_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``docrender`` or a ``docrender.<name>`` child logger."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def parse_level(name: str | None) -> int | None:
    """Map a level name from ``.docrender.yml`` to a logging level."""
    if name is None:
        return None
    try:
        return _LEVELS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r}") from None


class _ConsoleHandler(logging.StreamHandler):
    """Marker type so repeated CLI runs reuse one console handler."""


def configure_logging(*, verbose: bool = False, level: int | None = None) -> logging.Logger:
    """Point the ``docrender`` logger at stderr.

    ``--verbose`` forces DEBUG and adds logger names to each line; otherwise
    ``level`` (from the config file) applies, defaulting to INFO.
    """
    effective = logging.DEBUG if verbose else (level if level is not None else logging.INFO)
    logger = logging.getLogger(_ROOT)
    logger.setLevel(effective)
    logger.propagate = False

    handler = next((h for h in logger.handlers if isinstance(h, _ConsoleHandler)), None)
    if handler is None:
        handler = _ConsoleHandler()
        logger.addHandler(handler)
    pattern = "[docrender] %(levelname)s %(name)s: %(message)s" if verbose else "[docrender] %(levelname)s %(message)s"
    handler.setFormatter(logging.Formatter(pattern))
    handler.setLevel(effective)
    return logger


__all__ = ["configure_logging", "get_logger", "parse_level"]
