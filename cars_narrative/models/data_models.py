"""
Data models for the cars narrative.

This module defines the **schema layer** of the package.  The data story
itself operates on ``pandas.DataFrame`` columns (every scene groups, filters
and plots a frame), but the dataclasses here describe the shape of the
entities that flow between layers:

    CarRecord
        One automobile's attribute tuple, mirroring one row of the records
        frame produced by the loader.  Used where a scene hands individual
        cars to the view (top-performer lists).

    Selection
        Frozen snapshot of the user's navigation and filter choices.  The
        mutable owner is ``cars_narrative.state.SelectionState``; renderers
        only ever receive a snapshot.

    Extent
        ``(low, high)`` bounds of one numeric field, with ``EMPTY_EXTENT``
        as the explicit "no values" sentinel.

    LoadError
        Raised when the dataset cannot be fetched or parsed.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional, Any, NamedTuple

import pandas as pd

from ..core.config import FIRST_SCENE
from ..core.utils import manufacturer_of


# ============================================================================
# ERRORS
# ============================================================================

class LoadError(Exception):
    """The data resource could not be fetched or parsed.

    Surfaced to the user as a generic "data unavailable" state; there is no
    retry.  ``source`` keeps the path or URL that failed.
    """

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


# ============================================================================
# RECORD
# ============================================================================

@dataclass(frozen=True)
class CarRecord:
    """A single automobile, as retained by the loader.

    Required fields (mpg, horsepower, weight, year, origin) are always
    populated for loaded records; the remaining numeric fields may be None
    when the source omitted them.
    """
    name: str
    mpg: float
    horsepower: float
    weight: float
    year: int
    origin: str
    cylinders: Optional[int] = None
    displacement: Optional[float] = None
    acceleration: Optional[float] = None

    @property
    def manufacturer(self) -> str:
        return manufacturer_of(self.name)

    @classmethod
    def from_row(cls, row: pd.Series) -> "CarRecord":
        """Build a record from one row of the records frame."""
        def _opt(value, cast):
            return None if value is None or pd.isna(value) else cast(value)

        return cls(
            name=str(row.get('name', '')),
            mpg=float(row['mpg']),
            horsepower=float(row['horsepower']),
            weight=float(row['weight']),
            year=int(row['year']),
            origin=str(row['origin']),
            cylinders=_opt(row.get('cylinders'), int),
            displacement=_opt(row.get('displacement'), float),
            acceleration=_opt(row.get('acceleration'), float),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['manufacturer'] = self.manufacturer
        return data


# ============================================================================
# SELECTION SNAPSHOT
# ============================================================================

@dataclass(frozen=True)
class Selection:
    """Current scene index plus the three optional filters.

    A value of None means "no filter" for that field.
    """
    scene: int = FIRST_SCENE
    manufacturer: Optional[str] = None
    year: Optional[int] = None
    origin: Optional[str] = None

    @property
    def has_filters(self) -> bool:
        return any(v is not None for v in (self.manufacturer, self.year, self.origin))


# ============================================================================
# EXTENT
# ============================================================================

class Extent(NamedTuple):
    """Min/max of a numeric field over non-null values."""
    low: Optional[float]
    high: Optional[float]

    @property
    def is_empty(self) -> bool:
        return self.low is None or self.high is None

    @property
    def width(self) -> float:
        # Zero for the empty sentinel and for a single-valued extent.
        if self.is_empty:
            return 0.0
        return float(self.high - self.low)


EMPTY_EXTENT = Extent(None, None)
