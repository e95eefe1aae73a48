"""
Scenes module for Cars Narrative.

Five pure renderers, one per step of the story, and the enum-based dispatch
that selects between them.
"""

from .base import (
    SceneView,
    KpiCard,
    Insight,
    SelectorOption,
    SelectorSpec,
    FigureBlock,
    PerformerList,
    SELECTOR_BUTTONS,
    SELECTOR_DROPDOWN,
    LAYOUT_STACK,
    LAYOUT_TABS,
)
from .registry import Scene, SCENE_HANDLERS, render_scene

__all__ = [
    'SceneView',
    'KpiCard',
    'Insight',
    'SelectorOption',
    'SelectorSpec',
    'FigureBlock',
    'PerformerList',
    'SELECTOR_BUTTONS',
    'SELECTOR_DROPDOWN',
    'LAYOUT_STACK',
    'LAYOUT_TABS',
    'Scene',
    'SCENE_HANDLERS',
    'render_scene',
]
