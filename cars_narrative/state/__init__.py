"""
State module for Cars Narrative.

The selection container and the request type renderers use to ask for
changes.
"""

from .selection import (
    SelectionState,
    SelectionRequest,
    request_from_point,
    ACTION_SCENE,
    ACTION_NEXT,
    ACTION_PREVIOUS,
    ACTION_MANUFACTURER,
    ACTION_YEAR,
    ACTION_ORIGIN,
    ACTION_CLEAR_FILTERS,
    ACTION_RESET,
    FILTER_ACTIONS,
)

__all__ = [
    'SelectionState',
    'SelectionRequest',
    'request_from_point',
    'ACTION_SCENE',
    'ACTION_NEXT',
    'ACTION_PREVIOUS',
    'ACTION_MANUFACTURER',
    'ACTION_YEAR',
    'ACTION_ORIGIN',
    'ACTION_CLEAR_FILTERS',
    'ACTION_RESET',
    'FILTER_ACTIONS',
]
