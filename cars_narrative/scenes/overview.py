"""Scene 1: dataset overview and the horsepower / MPG trade-off."""

import pandas as pd

from ..core.config import OVERVIEW_REGIONS, EMPTY_STATE_MESSAGE
from ..analysis.aggregation import summary_stats
from ..models.data_models import Selection
from ..visualization.charts import chart_power_efficiency, empty_figure
from .base import SceneView, KpiCard, Insight, FigureBlock, scene_view, fmt

SCENE = 1

INSIGHTS = [
    Insight(
        'Key Insight',
        'Strong negative correlation: more horsepower typically means lower fuel '
        'efficiency. This fundamental trade-off is evident across all regions.',
    ),
    Insight(
        'Regional Pattern',
        'European cars tend to be more fuel efficient, clustering in the upper-left '
        'region of the chart with higher MPG and lower horsepower.',
    ),
]


def build(records: pd.DataFrame, selection: Selection) -> SceneView:
    """Overview of the whole dataset; ignores the selection filters."""
    stats = summary_stats(records)
    title = 'Horsepower vs. Fuel Efficiency'

    if stats['total'] == 0:
        return scene_view(
            SCENE,
            empty_message=EMPTY_STATE_MESSAGE,
            figures=[FigureBlock('overview_scatter', title, empty_figure(title=title))],
        )

    year_range = f"{stats['year_min']}-{stats['year_max']}"
    return scene_view(
        SCENE,
        description=(
            f"This dataset contains information about {stats['total']} cars from "
            f"{year_range}, including performance metrics, efficiency data, and "
            f"manufacturing details."
        ),
        kpis=[
            KpiCard('Total Cars', str(stats['total'])),
            KpiCard('Avg MPG', fmt(stats['avg_mpg'])),
            KpiCard('Avg Horsepower', fmt(stats['avg_horsepower'])),
            KpiCard('Regions', str(stats['origin_count'])),
        ],
        figures=[FigureBlock(
            'overview_scatter',
            title,
            chart_power_efficiency(records, title='', regions=OVERVIEW_REGIONS),
            caption='Explore the relationship between engine power and fuel economy across different regions',
        )],
        insights=list(INSIGHTS),
    )
