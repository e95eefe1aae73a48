"""
Cars Narrative - Streamlit Dashboard
====================================

The coordinator of the data story.  It owns the one ``SelectionState`` (kept
in ``st.session_state``), loads the dataset once per source through
``st.cache_data``, asks ``render_scene`` for the active scene's view, and
draws that view.

Interaction flow
----------------
Scene renderers never touch Streamlit or the state.  Every widget drawn
here turns a click into a ``SelectionRequest`` and hands it to
``SelectionState.apply``:

* Selector buttons and navigation buttons use ``on_click`` callbacks, so
  the new selection is in place before the rerun draws the page.
* Dropdowns use ``on_change`` and read their value back from session state.
* Clickable charts use ``st.plotly_chart(on_select="rerun")``; the first
  selected point's ``customdata`` becomes the request.  Chart and dropdown
  widget keys include the current selection so that, after a change, the
  widget comes back fresh instead of replaying a stale selection.

Usage:
    streamlit run dashboard.py
    cars-narrative --port 8502 --data https://example.org/cars.json
"""

import os
import sys
import argparse
import logging
import subprocess
from pathlib import Path

import pandas as pd
import streamlit as st

# Project root on the path when streamlit runs this file directly
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from cars_narrative.core.config import DATA_SOURCE_ENV, SCENES, SCENE_COUNT, get_default_data_source
from cars_narrative.core.utils import setup_logging
from cars_narrative.data.loader import load_cars
from cars_narrative.models.data_models import LoadError, Selection
from cars_narrative.state.selection import (
    SelectionState, SelectionRequest, request_from_point,
    ACTION_SCENE, ACTION_NEXT, ACTION_PREVIOUS, ACTION_CLEAR_FILTERS, ACTION_RESET,
)
from cars_narrative.scenes import (
    render_scene, SceneView, SelectorSpec, FigureBlock,
    SELECTOR_DROPDOWN, LAYOUT_TABS,
)
from cars_narrative.visualization.styles import (
    STORY_CSS, kpi_card_html, insight_html, scene_dots_html,
)

logger = logging.getLogger(__name__)

STATE_KEY = 'story_selection'
UNAVAILABLE_MESSAGE = 'Data unavailable'


def get_dashboard_path() -> Path:
    """Get the path to the Streamlit script (this module)."""
    return Path(__file__)


# ============================================================================
# SESSION SETUP
# ============================================================================

@st.cache_resource
def init_logging() -> Path:
    """Configure logging once per server process."""
    return setup_logging()


def init_story_state() -> SelectionState:
    """Return this session's SelectionState, creating it on first use.

    Idempotent: later calls on reruns return the existing object untouched.
    """
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = SelectionState()
        logger.info("New story session started")
    return st.session_state[STATE_KEY]


@st.cache_data(show_spinner='Loading cars dataset...')
def load_story_data(source: str) -> pd.DataFrame:
    """Load (and cache) the records for one data source.

    ``LoadError`` propagates; Streamlit does not cache failed calls, so the
    next rerun tries again.
    """
    return load_cars(source)


def configure_page():
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title="Cars Narrative | A Data Story",
        page_icon="🚗",
        layout="wide",
        initial_sidebar_state="collapsed",
        menu_items={
            'About': "# Cars Narrative\nA guided story through the classic cars dataset"
        }
    )


def inject_css():
    """Inject the story stylesheet; call once per page run."""
    st.markdown(STORY_CSS, unsafe_allow_html=True)


# ============================================================================
# WIDGET CALLBACKS
# ============================================================================

def _on_dropdown_change(state: SelectionState, spec: SelectorSpec, widget_key: str):
    chosen = st.session_state[widget_key]
    state.apply(spec.request_for(spec.options[chosen]))


def _selection_token(selection: Selection) -> str:
    return f"{selection.manufacturer}_{selection.year}_{selection.origin}"


# ============================================================================
# RENDERING
# ============================================================================

def render_kpi_row(cards):
    if not cards:
        return
    cols = st.columns(len(cards))
    for col, card in zip(cols, cards):
        with col:
            st.markdown(
                kpi_card_html(card.label, card.value, card.delta,
                              css_class='highlight' if card.highlight else ''),
                unsafe_allow_html=True,
            )


def render_header(view: SceneView):
    st.markdown(f'<p class="story-title">{view.title}</p>', unsafe_allow_html=True)
    if view.subtitle:
        st.markdown(f'<p class="story-subtitle">{view.subtitle}</p>', unsafe_allow_html=True)
    if view.scene in SCENES:
        st.markdown(scene_dots_html(view.scene, SCENE_COUNT), unsafe_allow_html=True)
    if view.description:
        st.markdown(view.description)


def render_selector(spec: SelectorSpec, state: SelectionState, selection: Selection):
    if spec.style == SELECTOR_DROPDOWN:
        widget_key = f"select_{spec.key}_{_selection_token(selection)}"
        st.selectbox(
            spec.label or spec.key.title(),
            options=list(range(len(spec.options))),
            index=spec.active_index,
            format_func=lambda i: spec.options[i].label,
            key=widget_key,
            on_change=_on_dropdown_change,
            args=(state, spec, widget_key),
        )
        return

    if spec.label:
        st.caption(spec.label)
    cols = st.columns(len(spec.options))
    for i, (col, option) in enumerate(zip(cols, spec.options)):
        with col:
            st.button(
                option.label,
                key=f"btn_{spec.key}_{i}",
                type='primary' if option.active else 'secondary',
                use_container_width=True,
                on_click=state.apply,
                args=(spec.request_for(option),),
            )
            if option.caption:
                st.caption(option.caption)


def render_figure(block: FigureBlock, state: SelectionState, selection: Selection):
    """Draw one chart; clickable charts feed their selection back into the state."""
    if block.caption:
        st.caption(block.caption)

    if block.select_action is None:
        st.plotly_chart(block.figure, use_container_width=True, key=block.key)
        return

    event = st.plotly_chart(
        block.figure,
        use_container_width=True,
        on_select="rerun",
        selection_mode="points",
        key=f"{block.key}_{_selection_token(selection)}",
    )

    # Handle chart click
    if event and event.selection and event.selection.points:
        request = request_from_point(block.select_action, event.selection.points[0])
        if request is not None and request.value != getattr(selection, request.action, None):
            logger.debug(f"Chart {block.key} selected {request.value!r}")
            state.apply(request)
            st.rerun()


def render_figures(view: SceneView, state: SelectionState, selection: Selection):
    if not view.figures:
        return
    if view.figure_layout == LAYOUT_TABS:
        tabs = st.tabs([block.title for block in view.figures])
        for tab, block in zip(tabs, view.figures):
            with tab:
                render_figure(block, state, selection)
        return
    for block in view.figures:
        if block.title:
            st.subheader(block.title)
        render_figure(block, state, selection)


def render_details(view: SceneView):
    if view.detail_kpis:
        st.markdown("---")
        st.subheader(view.detail_title)
        render_kpi_row(view.detail_kpis)

    if view.insights:
        st.markdown("---")
        st.subheader("Key Insights")
        cols = st.columns(len(view.insights))
        for col, insight in zip(cols, view.insights):
            with col:
                st.markdown(insight_html(insight.title, insight.body), unsafe_allow_html=True)

    if view.performers:
        st.markdown("---")
        st.subheader("Top Performers")
        cols = st.columns(len(view.performers))
        for col, performers in zip(cols, view.performers):
            with col:
                st.markdown(f"**{performers.title}**")
                for entry in performers.entries:
                    st.markdown(f"- {entry}")


def render_navigation(view: SceneView, state: SelectionState):
    st.markdown("---")
    left, _, right = st.columns([1, 2, 1])
    with left:
        if view.back_label:
            st.button(view.back_label, key='nav_back', use_container_width=True,
                      on_click=state.apply, args=(SelectionRequest(ACTION_PREVIOUS),))
    with right:
        if view.next_label:
            st.button(view.next_label, key='nav_next', type='primary', use_container_width=True,
                      on_click=state.apply, args=(SelectionRequest(ACTION_NEXT),))
        elif view.show_reset:
            st.button('Start Over', key='nav_reset', type='primary', use_container_width=True,
                      on_click=state.apply, args=(SelectionRequest(ACTION_RESET),))


def render_sidebar(source: str, records: pd.DataFrame, state: SelectionState):
    """Data source info, a reload button, and direct jumps to any scene."""
    with st.sidebar:
        st.markdown("### Data")
        st.caption(f"Source: `{source}`")
        st.caption(f"{len(records)} cars loaded")
        if st.button("🔄 Reload Data", use_container_width=True):
            st.cache_data.clear()
            st.rerun()

        st.markdown("### Scenes")
        for index, meta in SCENES.items():
            st.button(
                f"{index}. {meta['title']}",
                key=f"jump_{index}",
                type='primary' if index == state.scene else 'secondary',
                use_container_width=True,
                on_click=state.apply,
                args=(SelectionRequest(ACTION_SCENE, index),),
            )


def render_view(view: SceneView, state: SelectionState, selection: Selection):
    render_header(view)
    render_kpi_row(view.kpis)

    for spec in view.selectors:
        render_selector(spec, state, selection)

    if view.show_clear_filters:
        st.button('Clear all', key='clear_filters',
                  on_click=state.apply, args=(SelectionRequest(ACTION_CLEAR_FILTERS),))

    if view.status:
        st.caption(view.status)

    if view.empty_message:
        st.info(view.empty_message)

    render_figures(view, state, selection)
    render_details(view)
    render_navigation(view, state)


def main():
    """Streamlit page body: one full render of the active scene."""
    configure_page()
    init_logging()
    inject_css()

    state = init_story_state()
    source = get_default_data_source()

    try:
        records = load_story_data(source)
    except LoadError as e:
        logger.error(f"Data unavailable: {e}")
        st.error(UNAVAILABLE_MESSAGE)
        st.stop()

    render_sidebar(source, records, state)

    selection = state.snapshot()
    view = render_scene(selection.scene, records, selection)
    render_view(view, state, selection)


# ============================================================================
# LAUNCHER
# ============================================================================

def run_dashboard(port: int = 8501, data_source: str = None, open_browser: bool = True):
    """
    Launch the Streamlit dashboard in a child process.

    Args:
        port: Port to run on (default 8501)
        data_source: Path or URL exported to the app as ``CARS_NARRATIVE_DATA``
        open_browser: Let Streamlit open a browser tab
    """
    cmd = [
        sys.executable, "-m", "streamlit", "run",
        str(get_dashboard_path()),
        "--server.port", str(port),
        "--server.headless", "false" if open_browser else "true",
        "--browser.gatherUsageStats", "false",
    ]

    env = os.environ.copy()
    if data_source:
        env[DATA_SOURCE_ENV] = data_source

    logger.info(f"Starting dashboard on port {port}")
    return subprocess.run(cmd, env=env).returncode


def parse_args(argv=None):
    """
    Parse command-line arguments for the launcher.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description='Cars Narrative - a five-scene data story',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cars-narrative                         Launch with the bundled dataset
  cars-narrative --port 8502             Use custom port for dashboard
  cars-narrative --data cars.json        Load a different file or URL
        """
    )

    parser.add_argument(
        '--port',
        type=int,
        default=8501,
        help='Port for Streamlit dashboard (default: 8501)'
    )

    parser.add_argument(
        '--data', '-d',
        type=str,
        help=f'Dataset path or URL (overrides ${DATA_SOURCE_ENV})'
    )

    parser.add_argument(
        '--no-browser',
        action='store_true',
        help='Do not automatically open browser'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    return parser.parse_args(argv)


def cli(argv=None) -> int:
    """Console entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)
    return run_dashboard(port=args.port, data_source=args.data, open_browser=not args.no_browser)


if __name__ == "__main__":
    # Streamlit executes this file with __name__ == "__main__"
    main()
