"""
Models module for Cars Narrative.

Contains the record, selection, and extent data models plus LoadError.
"""

from .data_models import (
    CarRecord,
    Selection,
    Extent,
    EMPTY_EXTENT,
    LoadError,
)

__all__ = [
    'CarRecord',
    'Selection',
    'Extent',
    'EMPTY_EXTENT',
    'LoadError',
]
