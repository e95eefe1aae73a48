"""
Aggregation functions over the cars records frame.

Every function here is pure: it takes the records DataFrame produced by
``cars_narrative.data.load_cars`` (or any subset of it), never mutates it,
and tolerates an empty frame by returning empty / zero results.

Core operations
---------------
``group_average(records, key, value_fields)``
    Partition by a derived key and average the requested fields.  Built-in
    keys: ``"manufacturer"`` (first token of the name), ``"origin"``, and
    ``"year"`` (truncated model year).  Any column name or a callable
    ``records -> Series`` also works.  One output row per non-empty group:
    ``[<key>, <field means...>, count]``.  No ordering guarantee; callers
    sort for display.

``extent(records, field)``
    ``Extent(low, high)`` over non-null values, or ``EMPTY_EXTENT``.

``filter_by_selection(records, selection)``
    Rows matching every active filter of a ``Selection`` (or anything with
    ``manufacturer`` / ``year`` / ``origin`` attributes).  Returns the input
    object itself when no filter is active.

Scene helpers
-------------
``summary_stats``, ``manufacturer_stats``, ``origin_stats``,
``key_period_stats``, ``trend_direction``, ``top_performers``,
``radar_profile`` and ``available_values`` are the per-scene statistics
built on top of the three core operations.
"""

import logging
from typing import Callable, Dict, Iterable, List, Union

import numpy as np
import pandas as pd

from ..core.config import (
    COL_NAME, COL_MPG, COL_HORSEPOWER, COL_WEIGHT, COL_ACCELERATION,
    COL_YEAR, COL_ORIGIN, COL_MANUFACTURER, KEY_YEARS, FALLBACK_PERIOD_COUNT,
    PROFILE_FIELDS, FIELD_LABELS,
)
from ..core.utils import manufacturer_of, truncate_year
from ..models.data_models import Extent, EMPTY_EXTENT

logger = logging.getLogger(__name__)

COUNT_COLUMN = 'count'

GroupKey = Union[str, Callable[[pd.DataFrame], pd.Series]]


# ============================================================================
# GROUP KEYS
# ============================================================================

def by_manufacturer(records: pd.DataFrame) -> pd.Series:
    """Manufacturer of each record: the first token of its name."""
    if COL_NAME in records.columns:
        return records[COL_NAME].map(manufacturer_of)
    return records[COL_MANUFACTURER]


def by_origin(records: pd.DataFrame) -> pd.Series:
    return records[COL_ORIGIN]


def by_year(records: pd.DataFrame) -> pd.Series:
    """Model year of each record, truncated to an integer."""
    return records[COL_YEAR].map(truncate_year)


GROUP_KEYS: Dict[str, Callable[[pd.DataFrame], pd.Series]] = {
    COL_MANUFACTURER: by_manufacturer,
    COL_ORIGIN: by_origin,
    COL_YEAR: by_year,
}


def _key_name(key: GroupKey) -> str:
    if isinstance(key, str):
        return key
    name = getattr(key, '__name__', '')
    return name if name and not name.startswith('<') else 'group'


def _key_series(records: pd.DataFrame, key: GroupKey) -> pd.Series:
    if callable(key):
        return key(records)
    if key in GROUP_KEYS:
        return GROUP_KEYS[key](records)
    if key in records.columns:
        return records[key]
    raise ValueError(f"Unknown group key: {key!r}")


def _is_empty(records) -> bool:
    return records is None or len(records) == 0


# ============================================================================
# CORE OPERATIONS
# ============================================================================

def group_average(records: pd.DataFrame, key: GroupKey,
                  value_fields: Iterable[str]) -> pd.DataFrame:
    """Mean of each value field per group, plus the group's record count.

    Args:
        records: Records frame (may be empty).
        key: ``"manufacturer"``, ``"origin"``, ``"year"``, another column
            name, or a callable returning one key per record.
        value_fields: Numeric columns to average.  Nulls are skipped when
            averaging but still count towards the group size.  A field named
            like the key (or ``"count"``) is skipped, and repeats are
            averaged once.

    Returns:
        DataFrame with columns ``[<key name>, *value_fields, "count"]``, one
        row per group with at least one record.  Group counts sum to
        ``len(records)``.
    """
    name = _key_name(key)
    value_fields = [f for f in dict.fromkeys(value_fields) if f not in (name, COUNT_COLUMN)]
    if _is_empty(records):
        return pd.DataFrame(columns=[name, *value_fields, COUNT_COLUMN])

    keys = _key_series(records, key).rename(name)
    values = records[value_fields].apply(pd.to_numeric, errors='coerce')

    # dropna=False keeps records whose key is missing in their own group so
    # the counts always add up to the input length.
    grouped = values.groupby(keys, dropna=False)
    result = grouped.mean()
    result[COUNT_COLUMN] = grouped.size()
    return result.reset_index()[[name, *value_fields, COUNT_COLUMN]]


def extent(records: pd.DataFrame, field: str) -> Extent:
    """``(min, max)`` of a field over non-null values.

    Returns ``EMPTY_EXTENT`` for an empty frame, a missing column, or a
    column with no numeric values.  Check ``Extent.width`` before dividing.
    """
    if _is_empty(records) or field not in records.columns:
        return EMPTY_EXTENT
    values = pd.to_numeric(records[field], errors='coerce').dropna()
    if values.empty:
        return EMPTY_EXTENT
    return Extent(float(values.min()), float(values.max()))


def filter_by_selection(records: pd.DataFrame, selection) -> pd.DataFrame:
    """Rows matching every active (non-None) filter of ``selection``.

    Manufacturer and origin match by string equality; year matches by exact
    integer equality.  With no active filter the input is returned as-is.
    """
    manufacturer = getattr(selection, 'manufacturer', None)
    year = getattr(selection, 'year', None)
    origin = getattr(selection, 'origin', None)

    if manufacturer is None and year is None and origin is None:
        return records
    if _is_empty(records):
        return records

    mask = pd.Series(True, index=records.index)
    if manufacturer is not None:
        mask &= by_manufacturer(records) == manufacturer
    if year is not None:
        mask &= by_year(records) == truncate_year(year)
    if origin is not None:
        mask &= by_origin(records) == origin

    filtered = records[mask]
    logger.debug(f"Selection filter kept {len(filtered)} of {len(records)} records")
    return filtered


# ============================================================================
# SCENE HELPERS
# ============================================================================

def mean_of(records: pd.DataFrame, field: str) -> float:
    """Mean of a field, 0.0 when there is nothing to average."""
    if _is_empty(records) or field not in records.columns:
        return 0.0
    value = pd.to_numeric(records[field], errors='coerce').mean()
    return 0.0 if pd.isna(value) else float(value)


def summary_stats(records: pd.DataFrame) -> dict:
    """Headline numbers for KPI cards.

    Returns:
        dict with ``total``, ``avg_mpg``, ``avg_horsepower``, ``avg_weight``,
        ``year_min``, ``year_max`` (None when empty) and ``origin_count``.
    """
    years = extent(records, COL_YEAR)
    return {
        'total': 0 if _is_empty(records) else len(records),
        'avg_mpg': mean_of(records, COL_MPG),
        'avg_horsepower': mean_of(records, COL_HORSEPOWER),
        'avg_weight': mean_of(records, COL_WEIGHT),
        'year_min': None if years.is_empty else int(years.low),
        'year_max': None if years.is_empty else int(years.high),
        'origin_count': 0 if _is_empty(records) else int(records[COL_ORIGIN].nunique()),
    }


def _sorted_groups(stats: pd.DataFrame, by: str, ascending: bool) -> pd.DataFrame:
    # mergesort is stable, so equal means keep the groupby (alphabetical) order
    return stats.sort_values(by, ascending=ascending, kind='mergesort').reset_index(drop=True)


def manufacturer_stats(records: pd.DataFrame) -> pd.DataFrame:
    """Average MPG and horsepower per manufacturer, best MPG first."""
    stats = group_average(records, COL_MANUFACTURER, [COL_MPG, COL_HORSEPOWER])
    return _sorted_groups(stats, COL_MPG, ascending=False)


def origin_stats(records: pd.DataFrame) -> pd.DataFrame:
    """Average MPG, horsepower, weight and acceleration per origin, best MPG first."""
    stats = group_average(
        records, COL_ORIGIN,
        [COL_MPG, COL_HORSEPOWER, COL_WEIGHT, COL_ACCELERATION],
    )
    return _sorted_groups(stats, COL_MPG, ascending=False)


def key_period_stats(records: pd.DataFrame, years: Iterable[int] = KEY_YEARS) -> pd.DataFrame:
    """Average MPG and horsepower for the key historical periods.

    Only periods with data are returned, in chronological order.  When none
    of ``years`` has data, the first ``FALLBACK_PERIOD_COUNT`` years present
    in the records are used instead.
    """
    years = list(years)
    stats = group_average(records, COL_YEAR, [COL_MPG, COL_HORSEPOWER])
    stats = stats.dropna(subset=[COL_YEAR])
    if stats.empty:
        return stats.reset_index(drop=True)
    stats[COL_YEAR] = stats[COL_YEAR].astype(int)

    selected = stats[stats[COL_YEAR].isin(years)]
    if selected.empty:
        fallback = sorted(stats[COL_YEAR].unique())[:FALLBACK_PERIOD_COUNT]
        logger.info(f"No data for key periods {years}; falling back to {fallback}")
        selected = stats[stats[COL_YEAR].isin(fallback)]
    return _sorted_groups(selected, COL_YEAR, ascending=True)


def trend_direction(stats: pd.DataFrame, field: str) -> str:
    """Direction of ``field`` between the last two periods of ``stats``."""
    if _is_empty(stats) or len(stats) < 2 or field not in stats.columns:
        return 'stable'
    recent = stats[field].iloc[-1]
    older = stats[field].iloc[-2]
    diff = recent - older
    if pd.isna(diff) or diff == 0:
        return 'stable'
    return 'increasing' if diff > 0 else 'decreasing'


def top_performers(records: pd.DataFrame, field: str, n: int = 3,
                   ascending: bool = False) -> pd.DataFrame:
    """The ``n`` best records by ``field`` (highest first unless ``ascending``)."""
    if _is_empty(records) or field not in records.columns:
        return records.head(0) if records is not None else pd.DataFrame()
    ranked = records.dropna(subset=[field])
    picked = ranked.nsmallest(n, field) if ascending else ranked.nlargest(n, field)
    return picked.reset_index(drop=True)


def radar_profile(records: pd.DataFrame, fields: List[str] = PROFILE_FIELDS) -> pd.DataFrame:
    """Per-field average normalised by the field's maximum.

    Returns:
        DataFrame with ``field``, ``label``, ``average``, ``maximum`` and
        ``normalized`` (average / maximum, 0 when the maximum is 0 or absent).
    """
    rows = []
    for field in fields:
        average = mean_of(records, field)
        bounds = extent(records, field)
        maximum = 0.0 if bounds.is_empty else bounds.high
        normalized = average / maximum if maximum else 0.0
        rows.append({
            'field': field,
            'label': FIELD_LABELS.get(field, field),
            'average': average,
            'maximum': maximum,
            'normalized': float(np.clip(normalized, 0.0, 1.0)),
        })
    return pd.DataFrame(rows, columns=['field', 'label', 'average', 'maximum', 'normalized'])


def available_values(records: pd.DataFrame, key: str) -> list:
    """Sorted distinct manufacturers, years, or origins for selector widgets."""
    if _is_empty(records):
        return []
    values = _key_series(records, key).dropna().unique()
    return sorted(values.tolist())
