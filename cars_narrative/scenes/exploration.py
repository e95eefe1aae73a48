"""
Scene 5: detailed exploration.

The only scene that applies all three filters at once.  Three views of the
filtered records (scatter sized by weight, parallel coordinates, radar of
normalised averages) are shown as tabs, followed by summary KPIs and the
top performers of the filtered set.
"""

import pandas as pd

from ..core.config import (
    COL_MPG, COL_HORSEPOWER, COL_WEIGHT, COL_ACCELERATION,
    COL_MANUFACTURER, COL_YEAR, COL_ORIGIN, FIELD_LABELS,
    TOP_PERFORMER_COUNT, EMPTY_STATE_MESSAGE,
)
from ..analysis.aggregation import (
    filter_by_selection, available_values, top_performers, radar_profile,
)
from ..models.data_models import Selection, CarRecord
from ..state.selection import ACTION_MANUFACTURER, ACTION_YEAR, ACTION_ORIGIN
from ..visualization.charts import (
    chart_power_efficiency, chart_parallel_coordinates, chart_metric_radar, empty_figure,
)
from .base import (
    SceneView, SelectorSpec, SelectorOption, FigureBlock, PerformerList,
    SELECTOR_DROPDOWN, LAYOUT_TABS, scene_view, detail_cards,
)

SCENE = 5

# (title, sort field, ascending, unit format)
PERFORMER_COLUMNS = [
    ('Most Efficient', COL_MPG, False, '{:g} MPG'),
    ('Most Powerful', COL_HORSEPOWER, False, '{:g} HP'),
    ('Fastest Acceleration', COL_ACCELERATION, True, '{:g}s'),
]

FILTERS = [
    (COL_MANUFACTURER, ACTION_MANUFACTURER),
    (COL_YEAR, ACTION_YEAR),
    (COL_ORIGIN, ACTION_ORIGIN),
]


def filter_selectors(records: pd.DataFrame, selection: Selection) -> list:
    """One dropdown per filter, options drawn from the full dataset."""
    selectors = []
    for field, action in FILTERS:
        current = getattr(selection, field)
        options = [SelectorOption('All', None, active=current is None)]
        options.extend(
            SelectorOption(str(v), v, active=(v == current))
            for v in available_values(records, field)
        )
        selectors.append(SelectorSpec(
            field, action, options, style=SELECTOR_DROPDOWN, label=FIELD_LABELS[field],
        ))
    return selectors


def performer_lists(filtered: pd.DataFrame) -> list:
    lists = []
    for title, field, ascending, unit in PERFORMER_COLUMNS:
        best = top_performers(filtered, field, n=TOP_PERFORMER_COUNT, ascending=ascending)
        cars = [CarRecord.from_row(row) for _, row in best.iterrows()]
        entries = [f"{car.name} ({unit.format(getattr(car, field))})" for car in cars]
        lists.append(PerformerList(title, entries))
    return lists


def build(records: pd.DataFrame, selection: Selection) -> SceneView:
    filtered = filter_by_selection(records, selection)

    view = scene_view(
        SCENE,
        description=(
            'Explore the filtered dataset with multiple visualization types. '
            'Use different views to gain deeper insights into the car data.'
        ),
        selectors=filter_selectors(records, selection),
        status=f'{len(filtered)} of {len(records)} cars',
        figure_layout=LAYOUT_TABS,
        show_clear_filters=selection.has_filters,
        show_reset=True,
    )

    titles = [
        ('explore_scatter', 'Horsepower vs MPG (Size = Weight)',
         'Explore the relationship between engine power, fuel efficiency, and vehicle weight'),
        ('explore_parallel', 'Parallel Coordinates View', 'Compare multiple dimensions simultaneously'),
        ('explore_radar', 'Average Metrics Radar Chart', 'View average performance across all metrics'),
    ]

    if filtered.empty:
        view.empty_message = EMPTY_STATE_MESSAGE
        view.figures = [FigureBlock(key, title, empty_figure(), caption)
                        for key, title, caption in titles]
        return view

    figures = [
        chart_power_efficiency(filtered, title='', size_field=COL_WEIGHT),
        chart_parallel_coordinates(filtered, title=''),
        chart_metric_radar(radar_profile(filtered), title=''),
    ]
    view.figures = [FigureBlock(key, title, fig, caption)
                    for (key, title, caption), fig in zip(titles, figures)]
    view.kpis = detail_cards(filtered)
    view.performers = performer_lists(filtered)
    return view
