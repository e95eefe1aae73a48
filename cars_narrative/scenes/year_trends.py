"""Scene 3: MPG and horsepower across the key historical periods."""

import pandas as pd

from ..core.config import COL_YEAR, COL_MPG, COL_HORSEPOWER, KEY_YEAR_LABELS, EMPTY_STATE_MESSAGE
from ..analysis.aggregation import key_period_stats, trend_direction, filter_by_selection, mean_of
from ..models.data_models import Selection
from ..state.selection import ACTION_YEAR
from ..visualization.charts import chart_key_period_trends
from .base import (
    SceneView, KpiCard, SelectorSpec, SelectorOption, FigureBlock,
    scene_view, detail_cards, fmt,
)

SCENE = 3

TREND_ARROWS = {
    'increasing': '↑',
    'decreasing': '↓',
    'stable': '→',
}


def period_label(year: int) -> str:
    return KEY_YEAR_LABELS.get(year, str(year))


def _trend_card(label: str, value: float, unit: str, direction: str) -> KpiCard:
    return KpiCard(label, f'{fmt(value)} {unit}', delta=f'{TREND_ARROWS[direction]} {direction} trend')


def build(records: pd.DataFrame, selection: Selection) -> SceneView:
    selected = selection.year
    stats = key_period_stats(records)
    years = stats[COL_YEAR].tolist() if not stats.empty else []

    options = [SelectorOption('All Periods', None, active=selected is None)]
    options.extend(SelectorOption(period_label(y), y, active=(y == selected)) for y in years)

    view = scene_view(
        SCENE,
        description=(
            'Explore how key historical events shaped car design and efficiency. '
            'The 1973-74 oil crisis dramatically changed automotive priorities.'
        ),
        kpis=[
            _trend_card('Avg MPG', mean_of(records, COL_MPG), 'MPG', trend_direction(stats, COL_MPG)),
            _trend_card('Avg Horsepower', mean_of(records, COL_HORSEPOWER), 'HP',
                        trend_direction(stats, COL_HORSEPOWER)),
        ],
        selectors=[SelectorSpec('year', ACTION_YEAR, options)],
    )

    subset = None
    if selected is not None:
        subset = filter_by_selection(records, Selection(year=selected))
        view.status = f'Showing details for {selected} ({len(subset)} cars)'
    else:
        view.status = 'Click on a data point to explore a specific year'

    view.figures.append(FigureBlock(
        'year_trends',
        'Fuel Efficiency and Horsepower Trends',
        chart_key_period_trends(stats, selected_year=selected, title=''),
        select_action=ACTION_YEAR,
    ))

    if stats.empty or (subset is not None and subset.empty):
        view.empty_message = EMPTY_STATE_MESSAGE
    elif subset is not None:
        if selected in KEY_YEAR_LABELS:
            view.detail_title = f'{KEY_YEAR_LABELS[selected]} ({selected}) Details'
        else:
            view.detail_title = f'{selected} Details'
        view.detail_kpis = detail_cards(subset)
    return view
