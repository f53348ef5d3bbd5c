"""Root logger setup for the API process and CLI scripts."""

import logging
from pathlib import Path


def setup_logging(level: str = "INFO", logfile: str | None = None) -> None:
    """
    Attach a console handler (and optionally a file handler) to the root logger.

    Does nothing if the root logger already has handlers, so repeated calls
    (tests, reloads) do not duplicate output.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
