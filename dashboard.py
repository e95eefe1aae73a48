"""
Cars Narrative Dashboard Launcher

Serves the five-scene data story as a Streamlit app.

Usage:
    streamlit run dashboard.py --server.port 8501
    CARS_NARRATIVE_DATA=/path/to/cars.json streamlit run dashboard.py
"""

import sys
from pathlib import Path

# Ensure cars_narrative is importable without installation
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from cars_narrative.dashboard.app import main

main()
