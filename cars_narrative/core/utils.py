"""
Utility functions for record normalisation and logging setup.
"""

import re
import math
import time
import numbers
import logging
from pathlib import Path

import pandas as pd

from .config import LOG_DIR

logger = logging.getLogger(__name__)

# Leading run of digits in a date-like year value ("1970-01-01" -> "1970").
_YEAR_PREFIX = re.compile(r'^\s*(\d+)')

# Years outside the int64 range cannot live in an integer column.
_YEAR_LIMIT = 2 ** 63


def manufacturer_of(name):
    """Return the manufacturer of a car: the first whitespace token of its name."""
    if name is None or pd.isna(name):
        return "unknown"
    tokens = str(name).split()
    return tokens[0] if tokens else "unknown"


def truncate_year(value):
    """Normalise a model year to an int.

    The dataset stores years either as integers or as date-like strings
    such as ``"1970-01-01"``.  Anything else (None, NaN, infinity, values too
    large for an integer column, garbage) becomes None so the loader treats
    it as missing.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Number):
        if pd.isna(value) or not math.isfinite(value):
            return None
        year = int(value)
    else:
        match = _YEAR_PREFIX.match(str(value))
        if not match:
            return None
        year = int(match.group(1))
    return year if abs(year) < _YEAR_LIMIT else None


def is_remote_source(source) -> bool:
    """True when the data source is an http(s) URL rather than a local path."""
    return str(source).lower().startswith(('http://', 'https://'))


def setup_logging(verbose: bool = False, log_dir: Path = LOG_DIR):
    """
    Configure the root logger with file and console handlers.

    Every process gets a dedicated log file under ``log_dir`` with a
    timestamp in the filename.  The file handler captures DEBUG messages;
    the console handler shows warnings only (info in verbose mode).

    Args:
        verbose: Lower the console handler to INFO.
        log_dir: Directory for the log file (created if missing).

    Returns:
        Path: Absolute path to the newly created log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"cars_narrative_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Drop pre-existing handlers so repeated calls don't duplicate lines
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging to: {log_file}")
    return log_file
