"""
Core module for Cars Narrative.

Contains configuration and base utilities.
"""

from cars_narrative.core.config import *
from cars_narrative.core.utils import manufacturer_of, truncate_year, is_remote_source, setup_logging

__all__ = [
    'manufacturer_of',
    'truncate_year',
    'is_remote_source',
    'setup_logging',
]
