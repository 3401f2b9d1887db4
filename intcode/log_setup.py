"""
Logging setup for the intcodekit CLI.

The library modules only create loggers (``logging.getLogger(__name__)``);
handlers are attached here, once, by the CLI:

  - console: rich ``RichHandler`` at the level picked by -v / -q
  - file (optional): everything at DEBUG+ in
    ``<log_dir>/<name>_YYYYMMDD_HHMMSS.log``
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import FILE_LOG_FORMAT, FILE_LOG_DATEFMT


def setup_logging(
    name: str = "intcode",
    console_level: int = logging.WARNING,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Configure and return the named logger.

    Calling it again replaces the handlers, so repeated CLI invocations in
    one process (tests) do not stack duplicate output.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)

    # ── Console handler ──
    ch = RichHandler(
        level=console_level,
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    ch.setLevel(console_level)
    logger.addHandler(ch)

    # ── File handler: captures everything (DEBUG+) ──
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{name}_{ts}.log"
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=FILE_LOG_DATEFMT))
        logger.addHandler(fh)
        logger.info("Log file: %s", log_file)

    return logger
