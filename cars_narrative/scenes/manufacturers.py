"""Scene 2: average fuel efficiency by manufacturer."""

import pandas as pd

from ..core.config import COL_MANUFACTURER, COL_MPG, MANUFACTURER_BUTTON_LIMIT, EMPTY_STATE_MESSAGE
from ..analysis.aggregation import manufacturer_stats, available_values, filter_by_selection
from ..models.data_models import Selection
from ..state.selection import ACTION_MANUFACTURER
from ..visualization.charts import chart_group_bars
from .base import (
    SceneView, SelectorSpec, SelectorOption, FigureBlock, scene_view, detail_cards,
)

SCENE = 2


def manufacturer_selector(records: pd.DataFrame, selected) -> SelectorSpec:
    """Selector with "All Manufacturers" plus the first manufacturers alphabetically."""
    manufacturers = available_values(records, COL_MANUFACTURER)[:MANUFACTURER_BUTTON_LIMIT]
    options = [SelectorOption('All Manufacturers', None, active=selected is None)]
    options.extend(SelectorOption(m, m, active=(m == selected)) for m in manufacturers)
    return SelectorSpec('manufacturer', ACTION_MANUFACTURER, options)


def build(records: pd.DataFrame, selection: Selection) -> SceneView:
    selected = selection.manufacturer
    stats = manufacturer_stats(records)

    view = scene_view(
        SCENE,
        description=(
            'Explore how different car manufacturers compare in terms of fuel efficiency. '
            'Click on any bar below to select a manufacturer and see detailed information.'
        ),
        selectors=[manufacturer_selector(records, selected)],
    )

    subset = None
    if selected is not None:
        subset = filter_by_selection(records, Selection(manufacturer=selected))
        view.status = f'Showing details for {selected} ({len(subset)} cars)'
    else:
        view.status = 'Click on a bar to explore a specific manufacturer'

    view.figures.append(FigureBlock(
        'manufacturer_bars',
        'Average Fuel Efficiency by Manufacturer',
        chart_group_bars(stats, COL_MANUFACTURER, COL_MPG, selected=selected),
        select_action=ACTION_MANUFACTURER,
    ))

    if stats.empty or (subset is not None and subset.empty):
        view.empty_message = EMPTY_STATE_MESSAGE
    elif subset is not None:
        view.detail_title = f'{selected} Details'
        view.detail_kpis = detail_cards(subset)
    return view
