"""
Scene view models.

A scene renderer returns a ``SceneView``: plain data plus Plotly figures
that the dashboard knows how to draw.  Interactive elements are described,
not executed: a ``SelectorSpec`` lists the options and the selection action
each one emits, and a ``FigureBlock`` with ``select_action`` set turns chart
clicks into the same kind of request.  The dashboard applies those requests
to the ``SelectionState``; renderers never see the mutable state.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import pandas as pd
import plotly.graph_objects as go

from ..core.config import SCENES
from ..analysis.aggregation import summary_stats
from ..state.selection import SelectionRequest

SELECTOR_BUTTONS = 'buttons'
SELECTOR_DROPDOWN = 'dropdown'

LAYOUT_STACK = 'stack'
LAYOUT_TABS = 'tabs'


@dataclass
class KpiCard:
    label: str
    value: str
    delta: str = ''
    highlight: bool = False


@dataclass
class Insight:
    title: str
    body: str


@dataclass
class SelectorOption:
    """One choice of a selector; ``value`` None stands for "all"."""
    label: str
    value: Any = None
    caption: str = ''
    active: bool = False


@dataclass
class SelectorSpec:
    """A group of mutually exclusive choices bound to one selection action.

    Attributes:
        key: Widget key prefix, unique within the scene.
        action: ``SelectionRequest`` action every option emits.
        options: Choices in display order.
        style: ``SELECTOR_BUTTONS`` or ``SELECTOR_DROPDOWN``.
        label: Optional caption shown above the widget.
    """
    key: str
    action: str
    options: List[SelectorOption]
    style: str = SELECTOR_BUTTONS
    label: str = ''

    def request_for(self, option: SelectorOption) -> SelectionRequest:
        return SelectionRequest(self.action, option.value)

    @property
    def active_index(self) -> int:
        for i, option in enumerate(self.options):
            if option.active:
                return i
        return 0


@dataclass
class FigureBlock:
    """A chart plus its heading.

    ``select_action`` names the selection action a clicked point emits
    (its ``customdata`` carries the value); None means not clickable.
    """
    key: str
    title: str
    figure: go.Figure
    caption: str = ''
    select_action: Optional[str] = None


@dataclass
class PerformerList:
    title: str
    entries: List[str]


@dataclass
class SceneView:
    """Everything the dashboard needs to draw one scene."""
    scene: int
    title: str
    subtitle: str = ''
    description: str = ''
    kpis: List[KpiCard] = field(default_factory=list)
    selectors: List[SelectorSpec] = field(default_factory=list)
    status: str = ''
    figures: List[FigureBlock] = field(default_factory=list)
    figure_layout: str = LAYOUT_STACK
    detail_title: str = ''
    detail_kpis: List[KpiCard] = field(default_factory=list)
    insights: List[Insight] = field(default_factory=list)
    performers: List[PerformerList] = field(default_factory=list)
    empty_message: Optional[str] = None
    back_label: Optional[str] = None
    next_label: Optional[str] = None
    show_clear_filters: bool = False
    show_reset: bool = False

    @property
    def is_empty(self) -> bool:
        return self.empty_message is not None


def scene_view(scene: int, **kwargs) -> SceneView:
    """SceneView pre-filled with the configured title and navigation labels."""
    meta = SCENES.get(scene, {})
    kwargs.setdefault('title', meta.get('title', f'Scene {scene}'))
    kwargs.setdefault('subtitle', meta.get('subtitle', ''))
    kwargs.setdefault('back_label', meta.get('back'))
    kwargs.setdefault('next_label', meta.get('next'))
    return SceneView(scene=scene, **kwargs)


def fmt(value, decimals: int = 1) -> str:
    if value is None or pd.isna(value):
        return '-'
    return f'{value:,.{decimals}f}'


def detail_cards(records: pd.DataFrame) -> List[KpiCard]:
    """Total / avg MPG / avg horsepower / avg weight cards for a subset."""
    stats = summary_stats(records)
    return [
        KpiCard('Total Cars', str(stats['total']), highlight=True),
        KpiCard('Avg MPG', fmt(stats['avg_mpg'])),
        KpiCard('Avg Horsepower', fmt(stats['avg_horsepower'])),
        KpiCard('Avg Weight (lbs)', fmt(stats['avg_weight'], 0)),
    ]

