"""
Scene dispatch.

``Scene`` enumerates the five scenes in story order and ``SCENE_HANDLERS``
maps each to its ``build(records, selection) -> SceneView`` function.
``render_scene`` is the single entry point the dashboard calls.
"""

import logging
from enum import IntEnum
from typing import Callable, Dict

import pandas as pd

from ..models.data_models import Selection
from . import overview, manufacturers, year_trends, efficiency, exploration
from .base import SceneView

logger = logging.getLogger(__name__)


class Scene(IntEnum):
    OVERVIEW = 1
    MANUFACTURERS = 2
    YEAR_TRENDS = 3
    EFFICIENCY = 4
    EXPLORATION = 5


SceneHandler = Callable[[pd.DataFrame, Selection], SceneView]

SCENE_HANDLERS: Dict[Scene, SceneHandler] = {
    Scene.OVERVIEW: overview.build,
    Scene.MANUFACTURERS: manufacturers.build,
    Scene.YEAR_TRENDS: year_trends.build,
    Scene.EFFICIENCY: efficiency.build,
    Scene.EXPLORATION: exploration.build,
}


def render_scene(index, records: pd.DataFrame, selection: Selection) -> SceneView:
    """Build the view for scene ``index``.

    An index outside the known scenes yields a view with an explicit empty
    message and a "Start Over" action instead of raising.
    """
    try:
        scene = Scene(index)
    except ValueError:
        logger.warning(f"Unknown scene index {index!r}")
        return SceneView(
            scene=index,
            title='Scene not found',
            empty_message=f'Scene {index} does not exist',
            show_reset=True,
        )
    logger.debug(f"Rendering scene {scene.name} with {selection}")
    return SCENE_HANDLERS[scene](records, selection)
