"""
Central Configuration Module for Cars Narrative.

=== PURPOSE ===
Single source of truth for every constant the data story depends on: the
raw-to-canonical column mapping, the fields a record must carry to survive
loading, the key historical periods highlighted in the year-trend scene,
scene titles and navigation labels, and the chart highlight regions.  Other
modules import from here instead of defining their own magic values.

=== DATA FLOW ===
  1. The loader renames raw JSON keys with COLUMN_MAP and drops any record
     missing one of REQUIRED_FIELDS.
  2. The aggregation layer uses NUMERIC_FIELDS / KEY_YEARS to decide what to
     average and which periods to bucket.
  3. Scene renderers read SCENES for titles and navigation labels, and the
     chart library reads OVERVIEW_REGIONS / KEY_PERIOD_SHADING.

Contains all constants, column mappings, and scene metadata.
"""

import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# ==========================================
# DATA SOURCE
# ==========================================
# Project root: cars_narrative/core/config.py -> core/ -> cars_narrative/ -> root
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Bundled dataset shipped with the repository.
DEFAULT_DATA_FILE = PROJECT_ROOT / "data" / "cars.json"

# Environment variable that overrides the data location.  Accepts either a
# filesystem path or an http(s) URL.
DATA_SOURCE_ENV = "CARS_NARRATIVE_DATA"

# Seconds before an HTTP fetch of the dataset is abandoned.  Single attempt,
# no retry: a failed fetch surfaces as "data unavailable".
REQUEST_TIMEOUT = 10

# Directory for log files written by setup_logging().
LOG_DIR = PROJECT_ROOT / "logs"

# ==========================================
# COLUMN MAPPING
# ==========================================
# Raw JSON keys (as published in the classic cars dataset) mapped to the
# canonical column names used everywhere else in the package.
COL_NAME = 'name'
COL_MPG = 'mpg'
COL_CYLINDERS = 'cylinders'
COL_DISPLACEMENT = 'displacement'
COL_HORSEPOWER = 'horsepower'
COL_WEIGHT = 'weight'
COL_ACCELERATION = 'acceleration'
COL_YEAR = 'year'
COL_ORIGIN = 'origin'
COL_MANUFACTURER = 'manufacturer'   # derived at load time from COL_NAME

COLUMN_MAP = {
    'Name': COL_NAME,
    'Miles_per_Gallon': COL_MPG,
    'Cylinders': COL_CYLINDERS,
    'Displacement': COL_DISPLACEMENT,
    'Horsepower': COL_HORSEPOWER,
    'Weight_in_lbs': COL_WEIGHT,
    'Acceleration': COL_ACCELERATION,
    'Year': COL_YEAR,
    'Origin': COL_ORIGIN,
}

# Every canonical column a loaded frame carries, in display order.
RECORD_COLUMNS = [
    COL_NAME, COL_MPG, COL_CYLINDERS, COL_DISPLACEMENT, COL_HORSEPOWER,
    COL_WEIGHT, COL_ACCELERATION, COL_YEAR, COL_ORIGIN,
]

# Numeric columns coerced with pd.to_numeric during loading.
NUMERIC_FIELDS = [
    COL_MPG, COL_CYLINDERS, COL_DISPLACEMENT, COL_HORSEPOWER,
    COL_WEIGHT, COL_ACCELERATION,
]

# A record is retained only when all of these are present and non-null.
REQUIRED_FIELDS = [COL_MPG, COL_HORSEPOWER, COL_WEIGHT, COL_YEAR, COL_ORIGIN]

# Human-readable labels for axis titles, tooltips, and radar spokes.
FIELD_LABELS = {
    COL_NAME: 'Name',
    COL_MPG: 'Miles per Gallon',
    COL_CYLINDERS: 'Cylinders',
    COL_DISPLACEMENT: 'Displacement',
    COL_HORSEPOWER: 'Horsepower',
    COL_WEIGHT: 'Weight (lbs)',
    COL_ACCELERATION: 'Acceleration (s)',
    COL_YEAR: 'Year',
    COL_ORIGIN: 'Origin',
    COL_MANUFACTURER: 'Manufacturer',
}

# Dimensions shown in the exploration scene's parallel-coordinates and radar
# views.
PROFILE_FIELDS = [COL_MPG, COL_HORSEPOWER, COL_WEIGHT, COL_ACCELERATION]

# ==========================================
# KEY PERIODS (Year Trends scene)
# ==========================================
# The four periods that carry the narrative: early-70s muscle cars, the
# 1973-74 oil crisis, the late 70s, and the early-80s technology era.
KEY_YEARS = [1970, 1974, 1978, 1982]

KEY_YEAR_LABELS = {
    1970: 'Early 70s',
    1974: 'Oil Crisis',
    1978: 'Late 70s',
    1982: 'Early 80s',
}

# Number of years used when none of KEY_YEARS has data.
FALLBACK_PERIOD_COUNT = 4

# Background bands drawn behind the trend lines.
KEY_PERIOD_SHADING = [
    {'year': 1970, 'label': 'Early 70s (Muscle Car Era)', 'color': 'rgba(255,255,0,0.10)'},
    {'year': 1974, 'label': 'Oil Crisis (1973-74)', 'color': 'rgba(255,0,0,0.10)'},
    {'year': 1982, 'label': 'Technology Era (1980s)', 'color': 'rgba(0,255,0,0.10)'},
]

# Half-width (in years) of each shaded band.
KEY_PERIOD_HALF_WIDTH = 0.6

# ==========================================
# OVERVIEW HIGHLIGHT REGIONS
# ==========================================
# Rectangles (in data coordinates) shaded behind the overview scatter plot.
OVERVIEW_REGIONS = [
    {'label': 'High Efficiency Region', 'x0': 0, 'x1': 80, 'y0': 35, 'y1': 45,
     'color': 'rgba(144, 238, 144, 0.15)'},
    {'label': 'High Power Region', 'x0': 150, 'x1': 220, 'y0': 0, 'y1': 20,
     'color': 'rgba(255, 182, 193, 0.15)'},
]

# ==========================================
# SCENES
# ==========================================
# Scene index -> title, subtitle, and navigation button labels.  A missing
# 'back' or 'next' label means the scene has no such button.
SCENES = {
    1: {
        'title': 'Welcome to the Cars Dataset',
        'subtitle': 'Horsepower vs. Fuel Efficiency',
        'next': 'Explore by Manufacturer →',
    },
    2: {
        'title': 'Manufacturer Analysis',
        'subtitle': 'Average Fuel Efficiency by Manufacturer',
        'back': '← Back to Overview',
        'next': 'Explore Year Trends →',
    },
    3: {
        'title': 'Trends Over Time',
        'subtitle': 'Fuel Efficiency and Horsepower Trends',
        'back': '← Back to Manufacturers',
        'next': 'Explore Efficiency Analysis →',
    },
    4: {
        'title': 'Regional Efficiency Analysis',
        'subtitle': 'Average Fuel Efficiency by Region',
        'back': '← Back to Year Trends',
        'next': 'Detailed Exploration →',
    },
    5: {
        'title': 'Detailed Exploration',
        'subtitle': 'Explore the filtered dataset with multiple visualization types',
        'back': '← Back to Efficiency Analysis',
    },
}

SCENE_COUNT = len(SCENES)
FIRST_SCENE = 1

# Manufacturer selector shows only the first N manufacturers alphabetically;
# the bar chart itself shows all of them.
MANUFACTURER_BUTTON_LIMIT = 10

# Rows listed per "Top Performers" column in the exploration scene.
TOP_PERFORMER_COUNT = 3

EMPTY_STATE_MESSAGE = "No data matches the current filters"


def get_default_data_source() -> str:
    """Return the configured data source: env override or the bundled file."""
    override = os.environ.get(DATA_SOURCE_ENV, '').strip()
    if override:
        logger.debug(f"[Config] Data source from {DATA_SOURCE_ENV}: {override}")
        return override
    return str(DEFAULT_DATA_FILE)
