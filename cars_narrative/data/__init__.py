"""
Data module for Cars Narrative.

Loads the static cars dataset and drops incomplete records.
"""

from .loader import load_cars, parse_records

__all__ = ['load_cars', 'parse_records']
