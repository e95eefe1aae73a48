"""
Visualization module for Cars Narrative.

Plotly figure builders and the shared dark theme.
"""

from .charts import (
    empty_figure,
    chart_power_efficiency,
    chart_group_bars,
    chart_key_period_trends,
    chart_parallel_coordinates,
    chart_metric_radar,
)
from .styles import (
    ORIGIN_COLORS,
    STORY_COLORS,
    get_plotly_theme,
    AXIS_STYLE,
    kpi_card_html,
    insight_html,
    scene_dots_html,
    STORY_CSS,
)

__all__ = [
    'empty_figure',
    'chart_power_efficiency',
    'chart_group_bars',
    'chart_key_period_trends',
    'chart_parallel_coordinates',
    'chart_metric_radar',
    'ORIGIN_COLORS',
    'STORY_COLORS',
    'get_plotly_theme',
    'AXIS_STYLE',
    'kpi_card_html',
    'insight_html',
    'scene_dots_html',
    'STORY_CSS',
]
