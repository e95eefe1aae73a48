"""
Cars Narrative - Data Loading & Cleaning
=========================================

This module is the single entry point for data ingestion.  It reads the
static cars JSON document (from a local path or an http(s) URL), validates
its structure, cleans raw values, and drops records that are missing any
required field.  Everything downstream (aggregation, scenes, charts) works
on the DataFrame this module returns.

Data Flow
---------
1. JSON text     -->  read from disk or fetched with ``requests`` (one attempt)
2. Parsed array  -->  must be a JSON array of objects, else LoadError
3. Rename raw keys (``Miles_per_Gallon``, ``Weight_in_lbs`` ...) to the
   canonical columns in ``config.COLUMN_MAP``
4. Coerce numeric columns (unparseable values become NaN)
5. Truncate date-like years (``"1970-01-01"`` -> 1970)
6. Drop records missing any of ``REQUIRED_FIELDS`` - once, here
7. Derive ``manufacturer`` (first token of the name)

Caching
-------
``load_cars`` is deliberately free of Streamlit so it can be tested and
reused; the dashboard wraps it in ``st.cache_data``.

Column Reference
----------------
    name          str    full car name, e.g. "chevrolet chevelle malibu"
    mpg           float  fuel economy, miles per gallon
    cylinders     float  cylinder count (may be NaN)
    displacement  float  engine displacement (may be NaN)
    horsepower    float
    weight        float  pounds
    acceleration  float  seconds 0-60 (may be NaN)
    year          int    model year
    origin        str    region of origin ("USA", "Europe", "Japan")
    manufacturer  str    derived
"""

import json
import logging
from pathlib import Path

import numpy as np
import pandas as pd
import requests

from ..core.config import (
    COLUMN_MAP, RECORD_COLUMNS, NUMERIC_FIELDS, REQUIRED_FIELDS,
    COL_NAME, COL_YEAR, COL_ORIGIN, COL_MANUFACTURER, REQUEST_TIMEOUT,
)
from ..core.utils import manufacturer_of, truncate_year, is_remote_source
from ..models.data_models import LoadError

logger = logging.getLogger(__name__)


def _clean_text_series(s: pd.Series) -> pd.Series:
    """Strip whitespace and map blank / 'nan' / 'None' cells to NaN.

    JSON nulls arrive as None; casting to str turns them into 'None', so the
    replace step restores proper NaN for ``.notna()`` checks.
    """
    return (
        s.astype(str)
        .str.replace('\xa0', ' ', regex=False)
        .str.strip()
        .replace({'nan': np.nan, '': np.nan, 'None': np.nan})
    )


def _read_text(source) -> str:
    """Return the raw JSON text of a path or URL, or raise LoadError."""
    if is_remote_source(source):
        try:
            response = requests.get(str(source), timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(f"Cannot fetch data: {e}", source=str(source)) from e
        return response.text

    path = Path(source)
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise LoadError(f"Cannot open file: {e}", source=str(source)) from e
    except UnicodeDecodeError as e:
        raise LoadError(f"File is not valid UTF-8: {e}", source=str(source)) from e


def parse_records(payload, source=None) -> pd.DataFrame:
    """Turn a parsed JSON array into the cleaned records DataFrame.

    Args:
        payload: The decoded JSON document.  Must be a list of objects.
        source: Origin of the payload, only used for error messages.

    Returns:
        DataFrame with ``RECORD_COLUMNS`` plus ``manufacturer``, holding only
        records where every required field is present.

    Raises:
        LoadError: If the payload is not a list of JSON objects.
    """
    if not isinstance(payload, list):
        raise LoadError(
            f"Expected a JSON array of records, got {type(payload).__name__}",
            source=source,
        )
    bad = [i for i, item in enumerate(payload) if not isinstance(item, dict)]
    if bad:
        raise LoadError(
            f"Expected every record to be a JSON object; bad entries at {bad[:5]}",
            source=source,
        )

    df = pd.DataFrame.from_records(payload).rename(columns=COLUMN_MAP)

    # Sources may omit optional columns entirely; add them as all-NaN so the
    # frame always has the same shape.
    for col in RECORD_COLUMNS:
        if col not in df.columns:
            df[col] = np.nan
    df = df[RECORD_COLUMNS].copy()

    for col in NUMERIC_FIELDS:
        df[col] = pd.to_numeric(df[col], errors='coerce')

    df[COL_YEAR] = df[COL_YEAR].map(truncate_year)
    df[COL_ORIGIN] = _clean_text_series(df[COL_ORIGIN])
    df[COL_NAME] = _clean_text_series(df[COL_NAME]).fillna('')

    raw_count = len(df)
    complete = df[REQUIRED_FIELDS].notna().all(axis=1)
    df = df[complete].reset_index(drop=True)

    dropped = raw_count - len(df)
    if dropped:
        logger.warning(f"Dropped {dropped} of {raw_count} records with missing required fields")

    df[COL_YEAR] = df[COL_YEAR].astype(int)
    df[COL_MANUFACTURER] = df[COL_NAME].map(manufacturer_of)

    logger.info(f"Loaded {len(df)} records ({raw_count} in source)")
    return df


def load_cars(source) -> pd.DataFrame:
    """Load and clean the cars dataset from a file path or URL.

    This is a single attempt with no retry; any failure surfaces to the
    caller as LoadError, which the dashboard shows as "data unavailable".

    Args:
        source: A filesystem path (str or Path) or an http(s) URL.

    Returns:
        The cleaned records DataFrame (see module docstring for columns).

    Raises:
        LoadError: If the source is unreachable, unreadable, not valid JSON,
                   or not a JSON array of objects.
    """
    logger.debug(f"Loading cars data from {source}")
    text = _read_text(source)
    try:
        payload = json.loads(text)
    except ValueError as e:
        raise LoadError(f"Malformed JSON: {e}", source=str(source)) from e
    return parse_records(payload, source=str(source))
