"""Utility helpers for the Debt Walk tracker.

Contains the logging configuration helper used by `main.py` plus a couple
of small URL/header helpers shared by the API modules.
"""
from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import parse_qs, urlparse


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
QUIET_LOGGERS = ("aiohttp", "asyncio")


def configure_logging(
    log_file: str = "debt_walk.log",
    level: int = logging.INFO,
    truncate: bool = True,
    verbose: bool = False,
) -> None:
    """Send log records to ``log_file`` and warnings to the terminal.

    The file starts empty on each run unless ``truncate`` is False. With
    ``verbose`` the terminal also shows the INFO progress messages
    (token exchange, athlete name...) that normally only reach the file.
    Previously installed root handlers are replaced.
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(log_path, mode="w" if truncate else "a", encoding="utf-8")
    file_handler.setFormatter(fmt)
    file_handler.setLevel(level)
    root.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    root.addHandler(console)

    # connection chatter from the HTTP stack is never useful in the report
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_authorization_code(location: str) -> str | None:
    """Return the ``code`` query parameter of a callback URL, if any."""
    values = parse_qs(urlparse(location).query).get("code")
    if not values:
        return None
    return values[0]


def bearer_headers(access_token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json",
    }
