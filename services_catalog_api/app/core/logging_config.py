"""
Logging configuration for the catalog API.

``setup_logging`` configures the root logger once, from
``settings.log_level`` and ``settings.log_file`` unless told otherwise.
Records go to the console and, when ``LOG_FILE`` is set, to that file
as well.  The HTTP client used for YooKassa logs every request line at
INFO; it is raised to WARNING so gateway traffic only shows up through
``payment_service``'s own messages.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger if nothing has configured it yet.

    Parameters
    ----------
    level : Optional[str]
        Level name, case insensitive.  Defaults to ``settings.log_level``;
        unknown names fall back to INFO.
    logfile : Optional[str]
        File to log to in addition to the console.  Defaults to
        ``settings.log_file``; its directory is created if missing.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured, e.g. by uvicorn or by a previous create_app call.
        return

    level = level or settings.log_level
    logfile = logfile or settings.log_file or None
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
