"""
Dashboard module for Cars Narrative.

Streamlit coordinator for the data story.
"""

from .app import main, run_dashboard, cli

__all__ = ['main', 'run_dashboard', 'cli']
