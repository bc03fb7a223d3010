"""Configure application logging to a file and stderr."""

import logging
import os
import sys

# Set by setup_logging(); shown in the About message.
LOG_FILE_PATH: str | None = None

LOGGER_NAMES = ("core", "player", "library", "ui", "main")


def setup_logging(log_dir: str = "", level: str = "INFO") -> None:
    """Configure the application loggers: file in log_dir (DEBUG) + stderr at `level`."""
    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    global LOG_FILE_PATH
    handlers: list[logging.Handler] = []
    log_path = None
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            log_path = os.path.join(log_dir, "app.log")
            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(fmt)
            handlers.append(fh)
            LOG_FILE_PATH = log_path
        except OSError:
            log_path = None

    eh = logging.StreamHandler(sys.stderr)
    eh.setLevel(getattr(logging, level.upper(), logging.INFO))
    eh.setFormatter(fmt)
    handlers.append(eh)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.handlers.clear()
        for h in handlers:
            logger.addHandler(h)
        logger.propagate = False

    logging.getLogger("main").info("Logging started; file: %s", log_path or "(none)")
