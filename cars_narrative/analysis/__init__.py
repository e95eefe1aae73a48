"""
Analysis module for Cars Narrative.

Pure aggregation functions: group means, extents, selection filtering and
the per-scene statistics built on them.
"""

from .aggregation import (
    group_average,
    extent,
    filter_by_selection,
    by_manufacturer,
    by_origin,
    by_year,
    mean_of,
    summary_stats,
    manufacturer_stats,
    origin_stats,
    key_period_stats,
    trend_direction,
    top_performers,
    radar_profile,
    available_values,
    COUNT_COLUMN,
)

__all__ = [
    'group_average',
    'extent',
    'filter_by_selection',
    'by_manufacturer',
    'by_origin',
    'by_year',
    'mean_of',
    'summary_stats',
    'manufacturer_stats',
    'origin_stats',
    'key_period_stats',
    'trend_direction',
    'top_performers',
    'radar_profile',
    'available_values',
    'COUNT_COLUMN',
]
