"""
Cars Narrative - a guided, five-scene data story over the classic cars dataset.

This package provides:
- A dataset loader for the static cars JSON document (file or URL)
- The selection state shared by every scene (scene index plus manufacturer,
  year and origin filters)
- Pure aggregation functions (group means, extents, selection filtering)
- Five scene renderers producing Plotly figures and view models
- A Streamlit dashboard that draws the scenes (``cars_narrative.dashboard``,
  imported on demand)
"""

__version__ = "1.0.0"
__author__ = "Cars Narrative Team"

# Core imports
from .core.config import *
from .core.utils import manufacturer_of, truncate_year, setup_logging

# Data and models
from .models import CarRecord, Selection, Extent, EMPTY_EXTENT, LoadError
from .data import load_cars, parse_records

# Selection state
from .state import SelectionState, SelectionRequest, request_from_point

# Aggregation
from .analysis import group_average, extent, filter_by_selection

# Scenes
from .scenes import Scene, SceneView, render_scene

__all__ = [
    # Core
    'manufacturer_of',
    'truncate_year',
    'setup_logging',
    # Models
    'CarRecord',
    'Selection',
    'Extent',
    'EMPTY_EXTENT',
    'LoadError',
    # Data
    'load_cars',
    'parse_records',
    # State
    'SelectionState',
    'SelectionRequest',
    'request_from_point',
    # Aggregation
    'group_average',
    'extent',
    'filter_by_selection',
    # Scenes
    'Scene',
    'SceneView',
    'render_scene',
]
