"""
Cars Narrative Test Suite

This package contains unit tests and fixtures for the Cars Narrative
data story.

Run tests with:
    pytest tests/
    pytest tests/test_aggregation.py -v
    pytest tests/test_selection.py::TestReset -v
"""

__version__ = "1.0.0"
