"""Scene 4: regional efficiency, origin averages and a per-origin scatter."""

import pandas as pd

from ..core.config import COL_ORIGIN, COL_MPG, COL_HORSEPOWER, EMPTY_STATE_MESSAGE
from ..analysis.aggregation import origin_stats, filter_by_selection, mean_of, COUNT_COLUMN
from ..models.data_models import Selection
from ..state.selection import ACTION_ORIGIN
from ..visualization.charts import chart_group_bars, chart_power_efficiency, empty_figure
from ..visualization.styles import ORIGIN_COLORS
from .base import (
    SceneView, SelectorSpec, SelectorOption, FigureBlock, scene_view, detail_cards, fmt,
)

SCENE = 4


def origin_selector(records: pd.DataFrame, stats: pd.DataFrame, selected) -> SelectorSpec:
    """Selector with "All Regions" plus one button per origin, each captioned with its averages."""
    options = [SelectorOption(
        'All Regions', None,
        caption=f'{len(records)} cars • {fmt(mean_of(records, COL_MPG))} MPG avg',
        active=selected is None,
    )]
    for row in stats.sort_values(COL_ORIGIN).to_dict('records'):
        origin = row[COL_ORIGIN]
        options.append(SelectorOption(
            origin, origin,
            caption=(f'{row[COUNT_COLUMN]} cars • {fmt(row[COL_MPG])} MPG • '
                     f'{fmt(row[COL_HORSEPOWER])} HP'),
            active=(origin == selected),
        ))
    return SelectorSpec('origin', ACTION_ORIGIN, options)


def build(records: pd.DataFrame, selection: Selection) -> SceneView:
    selected = selection.origin
    stats = origin_stats(records)

    view = scene_view(
        SCENE,
        description=(
            'Compare fuel efficiency across different regions and explore the relationship '
            'between performance and efficiency within each region.'
        ),
        selectors=[origin_selector(records, stats, selected)],
    )
    view.figures.append(FigureBlock(
        'origin_bars',
        'Average Fuel Efficiency by Region',
        chart_group_bars(stats, COL_ORIGIN, COL_MPG, selected=selected, color_map=ORIGIN_COLORS),
        select_action=ACTION_ORIGIN,
    ))

    subset = filter_by_selection(records, Selection(origin=selected))
    scatter_title = 'Efficiency vs Performance'
    if subset.empty:
        view.empty_message = EMPTY_STATE_MESSAGE
        view.figures.append(FigureBlock('origin_scatter', scatter_title, empty_figure()))
        return view

    who = f'{selected} cars' if selected is not None else 'All cars'
    view.figures.append(FigureBlock(
        'origin_scatter',
        scatter_title,
        chart_power_efficiency(subset, title=''),
        caption=f'{who}: Horsepower vs MPG relationship',
    ))
    if selected is not None:
        view.detail_title = f'{selected} Regional Analysis'
        view.detail_kpis = detail_cards(subset)
    return view
