"""
Cars Narrative - Selection State
================================

The one mutable object in the data story.  A ``SelectionState`` holds the
current scene index and the three optional filters (manufacturer, year,
origin).  It is owned by the dashboard coordinator (stored once per browser
session in ``st.session_state``) and is only changed through its setters.

Renderers never touch it directly.  They receive a frozen ``Selection``
snapshot and describe interactions as ``SelectionRequest`` values; the
coordinator hands those to ``SelectionState.apply``, the single dispatch
point for every mutation.

Mutation semantics
------------------
- Every setter is total: any scene index or filter value is accepted,
  including values that match no records.  Renderers deal with the empty
  result, not this container.
- Empty strings passed to a filter setter mean "all" and are stored as
  None, which is what the "All Manufacturers" / "All Regions" buttons send.
- ``reset()`` returns to scene 1 and clears all three filters.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.config import FIRST_SCENE, SCENE_COUNT
from ..core.utils import truncate_year
from ..models.data_models import Selection

logger = logging.getLogger(__name__)

# Actions a SelectionRequest may carry.
ACTION_SCENE = 'scene'
ACTION_NEXT = 'next'
ACTION_PREVIOUS = 'previous'
ACTION_MANUFACTURER = 'manufacturer'
ACTION_YEAR = 'year'
ACTION_ORIGIN = 'origin'
ACTION_CLEAR_FILTERS = 'clear_filters'
ACTION_RESET = 'reset'

FILTER_ACTIONS = (ACTION_MANUFACTURER, ACTION_YEAR, ACTION_ORIGIN)


@dataclass(frozen=True)
class SelectionRequest:
    """A selection change asked for by a renderer or widget.

    Attributes:
        action: One of the ACTION_* constants.
        value: Payload for ``scene`` and the filter actions; ignored otherwise.
    """
    action: str
    value: Any = None


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SelectionState:
    """Scene index plus manufacturer / year / origin filters."""

    def __init__(self, scene: int = FIRST_SCENE, manufacturer: Optional[str] = None,
                 year: Optional[int] = None, origin: Optional[str] = None):
        self._scene = scene
        self._manufacturer = _blank_to_none(manufacturer)
        self._year = _blank_to_none(year)
        self._origin = _blank_to_none(origin)

    def __repr__(self):
        return (f"SelectionState(scene={self._scene!r}, manufacturer={self._manufacturer!r}, "
                f"year={self._year!r}, origin={self._origin!r})")

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def scene(self) -> int:
        return self._scene

    @property
    def manufacturer(self) -> Optional[str]:
        return self._manufacturer

    @property
    def year(self) -> Optional[int]:
        return self._year

    @property
    def origin(self) -> Optional[str]:
        return self._origin

    @property
    def has_filters(self) -> bool:
        return self.snapshot().has_filters

    def snapshot(self) -> Selection:
        """Frozen copy handed to renderers."""
        return Selection(
            scene=self._scene,
            manufacturer=self._manufacturer,
            year=self._year,
            origin=self._origin,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def go_to_scene(self, n: int) -> None:
        logger.debug(f"Scene {self._scene} -> {n}")
        self._scene = n

    def next_scene(self) -> None:
        """Advance one scene; no-op on the last scene."""
        if self._scene < SCENE_COUNT:
            self.go_to_scene(self._scene + 1)

    def previous_scene(self) -> None:
        """Go back one scene; no-op on the first scene."""
        if self._scene > FIRST_SCENE:
            self.go_to_scene(self._scene - 1)

    def set_manufacturer(self, manufacturer: Optional[str]) -> None:
        self._manufacturer = _blank_to_none(manufacturer)
        logger.debug(f"Manufacturer filter: {self._manufacturer!r}")

    def set_year(self, year: Optional[int]) -> None:
        self._year = _blank_to_none(year)
        logger.debug(f"Year filter: {self._year!r}")

    def set_origin(self, origin: Optional[str]) -> None:
        self._origin = _blank_to_none(origin)
        logger.debug(f"Origin filter: {self._origin!r}")

    def clear_filters(self) -> None:
        """Clear all three filters, keeping the current scene."""
        self._manufacturer = None
        self._year = None
        self._origin = None

    def reset(self) -> None:
        """Back to scene 1 with no filters."""
        self.clear_filters()
        self._scene = FIRST_SCENE
        logger.debug("Selection reset")

    def apply(self, request: SelectionRequest) -> None:
        """Dispatch one SelectionRequest to the matching setter.

        Raises:
            ValueError: If the request carries an unknown action.
        """
        handlers = {
            ACTION_SCENE: lambda: self.go_to_scene(request.value),
            ACTION_NEXT: self.next_scene,
            ACTION_PREVIOUS: self.previous_scene,
            ACTION_MANUFACTURER: lambda: self.set_manufacturer(request.value),
            ACTION_YEAR: lambda: self.set_year(request.value),
            ACTION_ORIGIN: lambda: self.set_origin(request.value),
            ACTION_CLEAR_FILTERS: self.clear_filters,
            ACTION_RESET: self.reset,
        }
        handler = handlers.get(request.action)
        if handler is None:
            raise ValueError(f"Unknown selection action: {request.action!r}")
        handler()


def request_from_point(action: str, point) -> Optional[SelectionRequest]:
    """Convert a Plotly selection point into a SelectionRequest.

    Charts put the group key in ``customdata``; ``x`` is the fallback.  Year
    keys come back from Plotly as floats or strings and are normalised to
    int.  Returns None when the point carries no usable value.
    """
    if not point:
        return None
    value = point.get('customdata')
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        value = point.get('x')
    if value is None:
        return None
    if action == ACTION_YEAR:
        value = truncate_year(value)
        if value is None:
            return None
    return SelectionRequest(action, value)
