"""Root logger setup for the CLI."""

from __future__ import annotations

import logging

# third-party loggers that report every request at INFO
CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger; pass ``force=True`` to replace existing handlers.

    HTTP client loggers stay at WARNING unless ``level`` is DEBUG, so a
    reconcile run against the API server logs state changes, not requests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
