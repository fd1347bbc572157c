# trackmetrics/util/logging.py
from __future__ import annotations

import datetime
import logging

LOG_FORMAT = "%(asctime)s  %(levelname)-7s %(name)s: %(message)s"


def utc_now_iso() -> str:
    """Return current UTC timestamp as ISO-8601 string."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def log(msg: str) -> None:
    """Print a timestamped log line (local time with timezone)."""
    ts = datetime.datetime.now().astimezone().isoformat(timespec="seconds")
    print(f"{ts}  {msg}")


def setup_logging(verbose: bool = False) -> None:
    """
    Configure the root logger for command-line use.

    Library modules only create loggers; handlers are installed here,
    once, by the entry point.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
