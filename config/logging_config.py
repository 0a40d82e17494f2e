import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Falls back to the LOG_LEVEL and LOG_FILE environment variables when
    arguments are omitted. Repeated calls are ignored.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level = level or os.getenv("LOG_LEVEL", "INFO")
    logfile = logfile or os.getenv("LOG_FILE")

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
