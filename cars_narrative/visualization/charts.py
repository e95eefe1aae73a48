"""
Cars Narrative - Chart Library
==============================

Every public function returns a ``plotly.graph_objects.Figure`` that the
dashboard hands to ``st.plotly_chart()``.  Builders take already-aggregated
frames (from ``cars_narrative.analysis``) or the raw records frame and never
filter or mutate their input; filtering is the scene renderer's job.

Design philosophy
-----------------
* **Dark theme first** - transparent background, light text, slate grid
  lines, all applied through ``_apply_theme()``.
* **Selection-aware** - bar and trend charts take the current selection and
  highlight it (colour, opacity, annotation or marker line) instead of
  redrawing a different chart.
* **Clickable keys** - bars and trend markers carry their group key in
  ``customdata`` so a click can be turned back into a selection request.
* **Never blank** - empty input produces ``empty_figure(message)``, an
  annotated placeholder, rather than an axis-only chart.

Plotly patterns used
--------------------
* ``px.scatter`` for the power-vs-efficiency scatter (colour by origin).
* ``go.Bar`` with per-bar colour / opacity arrays for group averages.
* ``make_subplots(specs=[[{"secondary_y": True}]])`` for the dual-axis
  MPG / horsepower trend, ``add_vrect`` / ``add_vline`` for period shading.
* ``go.Parcoords`` and ``go.Scatterpolar`` for the exploration views.
"""

from typing import List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..core.config import (
    COL_NAME, COL_MPG, COL_HORSEPOWER, COL_WEIGHT, COL_YEAR, COL_ORIGIN,
    FIELD_LABELS, PROFILE_FIELDS, KEY_YEAR_LABELS, KEY_PERIOD_SHADING,
    KEY_PERIOD_HALF_WIDTH, EMPTY_STATE_MESSAGE,
)
from ..analysis.aggregation import COUNT_COLUMN, extent
from .styles import (
    get_plotly_theme, AXIS_STYLE, ORIGIN_COLORS, STORY_COLORS, DIMMED_OPACITY,
)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _apply_theme(fig: go.Figure) -> go.Figure:
    """Apply the global dark theme and default axis grid styling to *fig*."""
    fig.update_layout(**get_plotly_theme())
    fig.update_xaxes(**AXIS_STYLE)
    fig.update_yaxes(**AXIS_STYLE)
    return fig


def _label(field: str) -> str:
    return FIELD_LABELS.get(field, field)


def empty_figure(message: str = EMPTY_STATE_MESSAGE, title: str = '') -> go.Figure:
    """Placeholder figure carrying a centred message and no axes."""
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        x=0.5, y=0.5, xref='paper', yref='paper',
        showarrow=False,
        font=dict(size=16, color='#94a3b8'),
    )
    fig.update_layout(**get_plotly_theme(), title=title, height=400)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig


# ============================================================================
# POWER VS EFFICIENCY SCATTER
# ============================================================================

def chart_power_efficiency(records: pd.DataFrame, title: str = 'Horsepower vs. Fuel Efficiency',
                           size_field: Optional[str] = None,
                           regions: Optional[List[dict]] = None) -> go.Figure:
    """Horsepower (x) against MPG (y), one marker per car, coloured by origin.

    Parameters
    ----------
    records : pd.DataFrame
        Records frame; must contain horsepower, mpg and origin.
    title : str
        Chart title.
    size_field : str, optional
        Numeric column mapped to marker size (weight in the exploration view).
    regions : list of dict, optional
        Rectangles ``{label, x0, x1, y0, y1, color}`` in data coordinates,
        drawn behind the markers with a label at their top-left corner.

    Returns
    -------
    go.Figure
        A 500px scatter, or ``empty_figure()`` when *records* is empty.
    """
    if records is None or records.empty:
        return empty_figure(title=title)

    plot_df = records.dropna(subset=[COL_HORSEPOWER, COL_MPG])
    if size_field:
        plot_df = plot_df.dropna(subset=[size_field])
    if plot_df.empty:
        return empty_figure(title=title)

    hover_data = [c for c in (COL_YEAR, COL_WEIGHT) if c in plot_df.columns]
    fig = px.scatter(
        plot_df,
        x=COL_HORSEPOWER, y=COL_MPG,
        color=COL_ORIGIN,
        color_discrete_map=ORIGIN_COLORS,
        category_orders={COL_ORIGIN: sorted(plot_df[COL_ORIGIN].unique())},
        size=size_field,
        size_max=18,
        hover_name=COL_NAME if COL_NAME in plot_df.columns else None,
        hover_data=hover_data,
        labels={c: _label(c) for c in plot_df.columns},
        title=title,
    )
    if not size_field:
        fig.update_traces(marker=dict(size=8, opacity=0.75))

    for region in regions or []:
        fig.add_shape(
            type='rect',
            x0=region['x0'], x1=region['x1'], y0=region['y0'], y1=region['y1'],
            fillcolor=region['color'], line_width=0, layer='below',
        )
        fig.add_annotation(
            x=region['x0'], y=region['y1'], text=region['label'],
            showarrow=False, xanchor='left', yanchor='bottom',
            font=dict(size=11, color='#94a3b8'),
        )

    _apply_theme(fig)
    fig.update_layout(height=500, legend_title_text=_label(COL_ORIGIN))
    return fig


# ============================================================================
# GROUP AVERAGE BARS
# ============================================================================

def chart_group_bars(stats: pd.DataFrame, key: str, value_field: str = COL_MPG,
                     selected=None, title: str = '',
                     color_map: Optional[dict] = None) -> go.Figure:
    """One bar per group showing the group mean of *value_field*.

    Parameters
    ----------
    stats : pd.DataFrame
        Output of ``group_average`` (or a sorted derivative); bars are drawn
        in row order.
    key : str
        Group key column (manufacturer, origin, ...).
    value_field : str
        Averaged column plotted as bar height.
    selected : optional
        Currently selected group.  Its bar keeps full opacity and gets an
        annotation; every other bar is dimmed.  None means nothing selected.
    color_map : dict, optional
        Fixed colour per group (origins).  Without it, bars are the primary
        colour and the selected bar switches to the highlight colour.

    Returns
    -------
    go.Figure
        A 450px bar chart with the group key in ``customdata``.
    """
    if stats is None or stats.empty:
        return empty_figure(title=title)

    keys = stats[key].tolist()
    values = stats[value_field].tolist()
    counts = stats[COUNT_COLUMN].tolist() if COUNT_COLUMN in stats.columns else [None] * len(keys)

    colors = []
    opacities = []
    for k in keys:
        is_selected = selected is not None and k == selected
        if color_map:
            colors.append(color_map.get(k, STORY_COLORS['neutral']))
        else:
            colors.append(STORY_COLORS['highlight'] if is_selected else STORY_COLORS['primary'])
        opacities.append(1.0 if selected is None or is_selected else DIMMED_OPACITY)

    fig = go.Figure(go.Bar(
        x=[str(k) for k in keys],
        y=values,
        customdata=[[k, c] for k, c in zip(keys, counts)],
        marker=dict(color=colors, opacity=opacities),
        text=[f'{v:.1f}' for v in values],
        textposition='outside',
        hovertemplate=(
            '<b>%{x}</b><br>' + _label(value_field) + ': %{y:.1f}'
            + '<br>Cars: %{customdata[1]}<extra></extra>'
        ),
    ))

    if selected is not None and selected in keys:
        idx = keys.index(selected)
        fig.add_annotation(
            x=str(selected), y=values[idx],
            text=f'{selected}: {values[idx]:.1f}',
            showarrow=True, arrowhead=2, ay=-45,
            font=dict(color=STORY_COLORS['highlight']),
            arrowcolor=STORY_COLORS['highlight'],
        )

    _apply_theme(fig)
    fig.update_layout(
        title=title,
        xaxis_title=_label(key),
        yaxis_title=f'Average {_label(value_field)}',
        height=450,
        showlegend=False,
    )
    fig.update_xaxes(type='category')
    return fig


# ============================================================================
# KEY PERIOD TRENDS (dual axis)
# ============================================================================

def chart_key_period_trends(stats: pd.DataFrame, selected_year: Optional[int] = None,
                            title: str = 'Fuel Efficiency and Horsepower Trends') -> go.Figure:
    """Average MPG (left axis) and horsepower (right axis) per key period.

    Periods listed in ``KEY_PERIOD_SHADING`` that appear in *stats* get a
    shaded background band; *selected_year* gets a dashed marker line.
    """
    if stats is None or stats.empty:
        return empty_figure(title=title)

    years = stats[COL_YEAR].astype(int).tolist()
    fig = make_subplots(specs=[[{"secondary_y": True}]])

    fig.add_trace(
        go.Scatter(x=years, y=stats[COL_MPG], name='Avg MPG',
                   mode='lines+markers', customdata=years,
                   line=dict(color=STORY_COLORS['mpg_line'], width=3),
                   marker=dict(size=10)),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(x=years, y=stats[COL_HORSEPOWER], name='Avg Horsepower',
                   mode='lines+markers', customdata=years,
                   line=dict(color=STORY_COLORS['hp_line'], width=3, dash='dot'),
                   marker=dict(size=10)),
        secondary_y=True,
    )

    for period in KEY_PERIOD_SHADING:
        if period['year'] not in years:
            continue
        fig.add_vrect(
            x0=period['year'] - KEY_PERIOD_HALF_WIDTH,
            x1=period['year'] + KEY_PERIOD_HALF_WIDTH,
            fillcolor=period['color'], line_width=0, layer='below',
            annotation_text=period['label'], annotation_position='top left',
            annotation_font_color='#94a3b8', annotation_font_size=10,
        )

    if selected_year is not None:
        fig.add_vline(x=selected_year, line_dash='dash',
                      line_color=STORY_COLORS['highlight'], line_width=2)

    fig.update_layout(**get_plotly_theme(), title=title, height=450,
                      legend=dict(orientation='h', y=-0.2))
    fig.update_xaxes(
        tickvals=years,
        ticktext=[f"{y}<br>{KEY_YEAR_LABELS[y]}" if y in KEY_YEAR_LABELS else str(y) for y in years],
        **AXIS_STYLE,
    )
    fig.update_yaxes(title_text='Average MPG', secondary_y=False, **AXIS_STYLE)
    fig.update_yaxes(title_text='Average Horsepower', secondary_y=True, **AXIS_STYLE)
    return fig


# ============================================================================
# EXPLORATION VIEWS
# ============================================================================

def chart_parallel_coordinates(records: pd.DataFrame, fields: List[str] = PROFILE_FIELDS,
                               title: str = 'Parallel Coordinates') -> go.Figure:
    """One polyline per car across *fields*, coloured by MPG."""
    if records is None or records.empty:
        return empty_figure(title=title)

    plot_df = records.dropna(subset=fields)
    if plot_df.empty:
        return empty_figure(title=title)

    dimensions = []
    for field in fields:
        dim = dict(label=_label(field), values=plot_df[field].tolist())
        bounds = extent(plot_df, field)
        if bounds.width > 0:
            dim['range'] = [bounds.low, bounds.high]
        dimensions.append(dim)

    fig = go.Figure(go.Parcoords(
        line=dict(color=plot_df[COL_MPG].tolist(), colorscale='Viridis', showscale=True,
                  colorbar=dict(title='MPG')),
        dimensions=dimensions,
    ))
    fig.update_layout(**get_plotly_theme(), title=title, height=450)
    return fig


def chart_metric_radar(profile: pd.DataFrame, title: str = 'Average Profile') -> go.Figure:
    """Radar of normalised averages (output of ``radar_profile``), radius 0-1."""
    if profile is None or profile.empty:
        return empty_figure(title=title)

    values = profile['normalized'].tolist()
    labels = profile['label'].tolist()
    averages = profile['average'].tolist()
    values.append(values[0])
    labels.append(labels[0])
    averages.append(averages[0])

    fig = go.Figure()
    fig.add_trace(go.Scatterpolar(
        r=values,
        theta=labels,
        customdata=averages,
        fill='toself',
        fillcolor='rgba(0, 191, 255, 0.15)',
        line=dict(color=STORY_COLORS['radar'], width=2),
        hovertemplate='%{theta}: %{customdata:.1f}<extra></extra>',
        name='Average',
    ))
    fig.add_trace(go.Scatterpolar(
        r=[1] * len(labels),
        theta=labels,
        fill='none',
        line=dict(color='rgba(255,255,255,0.1)', width=1, dash='dot'),
        hoverinfo='skip',
        showlegend=False,
    ))

    fig.update_layout(
        **get_plotly_theme(),
        polar=dict(
            bgcolor='rgba(0,0,0,0)',
            radialaxis=dict(range=[0, 1], gridcolor='#1e293b', tickfont=dict(color='#94a3b8')),
            angularaxis=dict(gridcolor='#1e293b', tickfont=dict(color=STORY_COLORS['text'])),
        ),
        title=title,
        height=450,
        showlegend=False,
    )
    return fig
