"""Shared logger setup for the word search backend and frontends."""

from __future__ import annotations

import logging

LOGGER_NAME = "wordsearch"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it for *name*.

    The root ``wordsearch`` logger gets a console handler at INFO level the
    first time it is requested.
    """
    root = logging.getLogger(LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(message)s")
        )
        root.addHandler(handler)
        root.setLevel(logging.INFO)

    if not name or name == LOGGER_NAME:
        return root
    return root.getChild(name.removeprefix(f"{LOGGER_NAME}."))


def set_verbose(verbose: bool) -> None:
    get_logger().setLevel(logging.DEBUG if verbose else logging.INFO)
