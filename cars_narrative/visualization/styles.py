"""
Cars Narrative - Styles & Theme Configuration
=============================================

Single source of truth for every visual constant in the data story: the
origin palette, highlight colours, the Plotly layout theme, and the CSS /
HTML fragments the dashboard injects.  Chart builders and scene renderers
import from here; nothing else hard-codes colours.

Module Contents at a Glance
----------------------------
- ``ORIGIN_COLORS`` -- one hue per region (USA, Europe, Japan)
- ``STORY_COLORS`` -- accent palette (highlight, trend lines)
- ``get_plotly_theme()`` / ``AXIS_STYLE`` -- Plotly chart theming
- ``kpi_card_html()`` / ``insight_html()`` -- HTML snippets for ``st.markdown``
- ``STORY_CSS`` -- stylesheet injected once by the dashboard

Nothing here imports Streamlit; ``inject_css()`` lives in the dashboard.
"""

import html

# ============================================================================
# COLOR PALETTE
# ============================================================================

# Region colours used by every chart that encodes origin.  Unknown origins
# fall back to ``STORY_COLORS['neutral']``.
ORIGIN_COLORS = {
    'USA':    '#60A5FA',  # Light blue
    'Europe': '#34D399',  # Mint green
    'Japan':  '#F472B6',  # Pink
}

STORY_COLORS = {
    'primary':   '#0066CC',  # Default bars
    'highlight': '#F2A900',  # Selected bar / marker
    'neutral':   '#9E9E9E',
    'mpg_line':  '#00A5A8',  # Teal -- MPG trend
    'hp_line':   '#E31B23',  # Red -- horsepower trend
    'radar':     '#00BFFF',
    'text':      '#E0E0E0',
}

# Opacity of bars that are not part of the current selection.
DIMMED_OPACITY = 0.45


# ============================================================================
# PLOTLY THEME
# ============================================================================

def get_plotly_theme() -> dict:
    """Return a base Plotly layout configuration for the dark story theme.

    Unpack into ``fig.update_layout(**get_plotly_theme())``: transparent
    backgrounds (the page CSS shows through), Inter font in light grey, and
    compact margins suited to Streamlit columns.
    """
    return dict(
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        font=dict(family='Inter', color=STORY_COLORS['text']),
        margin=dict(l=40, r=40, t=50, b=40),
    )


# Subtle grid lines that blend with the dark theme.  Apply with:
#   fig.update_xaxes(**AXIS_STYLE)
#   fig.update_yaxes(**AXIS_STYLE)
AXIS_STYLE = dict(
    gridcolor='#1e293b',
    zerolinecolor='#1e293b',
)


# ============================================================================
# HTML FRAGMENTS
# ============================================================================

def kpi_card_html(label: str, value: str, delta: str = "", css_class: str = "") -> str:
    """Build a single KPI card as an HTML snippet for ``st.markdown()``.

    Parameters
    ----------
    label : str
        Descriptive label displayed below the value (e.g. "Avg MPG").
    value : str
        The hero metric string (e.g. "23.5").
    delta : str, optional
        Secondary line such as a trend direction.  Strings starting with
        ``'-'`` or ``'↓'`` are styled red, anything else green.
    css_class : str, optional
        Extra CSS class for the outer container (e.g. ``"highlight"``).

    Returns
    -------
    str
        HTML suitable for ``st.markdown(html, unsafe_allow_html=True)``.
    """
    delta_html = ""
    if delta:
        is_negative = delta.startswith('-') or delta.startswith('↓')
        delta_class = "delta-negative" if is_negative else "delta-positive"
        delta_html = f'<p class="kpi-delta {delta_class}">{html.escape(delta)}</p>'

    return f"""
    <div class="kpi-container {css_class}">
        <p class="kpi-value">{html.escape(value)}</p>
        <p class="kpi-label">{html.escape(label)}</p>
        {delta_html}
    </div>
    """


def insight_html(title: str, body: str) -> str:
    """Insight callout box (title line plus one paragraph)."""
    return f"""
    <div class="insight-callout">
        <p class="insight-title">{html.escape(title)}</p>
        <p class="insight-body">{html.escape(body)}</p>
    </div>
    """


def scene_dots_html(current: int, total: int) -> str:
    """Progress indicator: one dot per scene, the current one filled."""
    dots = "".join(
        f'<span class="scene-dot{" active" if i == current else ""}"></span>'
        for i in range(1, total + 1)
    )
    return f'<div class="scene-dots">{dots}<span class="scene-count">Scene {current} of {total}</span></div>'


# ============================================================================
# CSS
# ============================================================================

STORY_CSS = """
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700;800&display=swap');

    .stApp { font-family: 'Inter', sans-serif; }

    .stPlotlyChart { min-height: 400px !important; }

    /* KPI cards */
    .kpi-container {
        background: linear-gradient(135deg, rgba(0, 102, 204, 0.15) 0%, rgba(0, 51, 102, 0.25) 100%);
        border-radius: 16px;
        padding: 20px;
        border-left: 4px solid #0066CC;
        text-align: center;
        transition: transform 0.3s ease, box-shadow 0.3s ease;
    }
    .kpi-container:hover {
        transform: translateY(-4px);
        box-shadow: 0 12px 40px rgba(0, 102, 204, 0.3);
    }
    .kpi-container.highlight {
        background: linear-gradient(135deg, rgba(242, 169, 0, 0.15) 0%, rgba(140, 90, 0, 0.25) 100%);
        border-left-color: #F2A900;
    }
    .kpi-value {
        font-size: 2.2rem;
        font-weight: 700;
        margin: 0;
        background: linear-gradient(135deg, #00BFFF 0%, #0066CC 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
    }
    .kpi-label {
        font-size: 0.8rem;
        color: #94a3b8;
        text-transform: uppercase;
        letter-spacing: 1.2px;
        margin: 6px 0 0 0;
        font-weight: 600;
    }
    .kpi-delta { font-size: 0.85rem; font-weight: 600; margin: 6px 0 0 0; }
    .delta-positive { color: #22c55e; }
    .delta-negative { color: #ef4444; }

    /* Insight callouts */
    .insight-callout {
        background: rgba(0, 165, 168, 0.10);
        border-left: 4px solid #00A5A8;
        border-radius: 8px;
        padding: 14px 18px;
        margin: 8px 0;
    }
    .insight-title { font-weight: 700; margin: 0 0 4px 0; color: #5eead4; }
    .insight-body { margin: 0; color: #E0E0E0; }

    /* Scene header */
    .story-title {
        font-size: 2.2rem;
        font-weight: 800;
        background: linear-gradient(135deg, #00BFFF 0%, #0066CC 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        margin-bottom: 0;
    }
    .story-subtitle { color: #94a3b8; margin-top: 4px; font-size: 1.05rem; }

    /* Progress dots */
    .scene-dots { display: flex; align-items: center; gap: 8px; margin: 6px 0 18px 0; }
    .scene-dot {
        width: 12px; height: 12px; border-radius: 50%;
        background: #1e293b; border: 1px solid #475569;
    }
    .scene-dot.active { background: #00BFFF; border-color: #00BFFF; box-shadow: 0 0 8px #00BFFF; }
    .scene-count { color: #94a3b8; font-size: 0.8rem; margin-left: 8px; }

    #MainMenu { visibility: hidden; }
    footer { visibility: hidden; }
</style>
"""
