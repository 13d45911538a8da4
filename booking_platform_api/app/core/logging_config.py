"""
Logging setup for the Booking Platform API.

Every module logs through ``logging.getLogger(__name__)``; this module
only wires the root logger.  Records go to the console and, when
``LOG_FILE`` is set, to a UTF-8 log file whose directory is created on
demand.  The multipart parser used for image uploads logs every form
part at DEBUG, so it is held at WARNING unless ``LOG_LEVEL`` is DEBUG.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers of libraries that are too chatty below WARNING.
NOISY_LOGGERS = ("multipart", "python_multipart")

_HANDLER_NAMES = ("booking-console", "booking-file")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the console and optional file handler to the root logger.

    Calling it again (a second ``create_app`` in tests, for example)
    only updates the level; handlers are added once.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level if numeric_level <= logging.DEBUG else logging.WARNING)

    if any(handler.get_name() in _HANDLER_NAMES for handler in root.handlers):
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.set_name("booking-console")
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile:
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.set_name("booking-file")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
