"""
Unit tests for the record normalisation helpers and logging setup
"""

import unittest
from pathlib import Path
import sys
import logging
import tempfile
import shutil

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from cars_narrative.core.utils import (
    manufacturer_of, truncate_year, is_remote_source, setup_logging,
)


class TestManufacturerOf(unittest.TestCase):

    def test_first_token(self):
        self.assertEqual(manufacturer_of('ford pinto'), 'ford')
        self.assertEqual(manufacturer_of('  vw   rabbit custom'), 'vw')
        self.assertEqual(manufacturer_of('Toyota'), 'Toyota')

    def test_missing_name(self):
        self.assertEqual(manufacturer_of(None), 'unknown')
        self.assertEqual(manufacturer_of(float('nan')), 'unknown')
        self.assertEqual(manufacturer_of('   '), 'unknown')


class TestTruncateYear(unittest.TestCase):

    def test_date_string(self):
        self.assertEqual(truncate_year('1970-01-01'), 1970)
        self.assertEqual(truncate_year('19700-01-01'), 19700)

    def test_numbers(self):
        self.assertEqual(truncate_year(1982), 1982)
        self.assertEqual(truncate_year(1982.0), 1982)
        self.assertEqual(truncate_year('1976'), 1976)

    def test_unusable_values(self):
        for value in (None, float('nan'), True, '', 'n/a'):
            self.assertIsNone(truncate_year(value), repr(value))

    def test_out_of_range_values(self):
        """Values that cannot fit an integer column are treated as missing."""
        for value in (float('inf'), float('-inf'), 1e30, '9' * 30):
            self.assertIsNone(truncate_year(value), repr(value))


class TestIsRemoteSource(unittest.TestCase):

    def test_urls(self):
        self.assertTrue(is_remote_source('https://example.org/cars.json'))
        self.assertTrue(is_remote_source('HTTP://example.org/cars.json'))

    def test_paths(self):
        self.assertFalse(is_remote_source('data/cars.json'))
        self.assertFalse(is_remote_source(Path('/tmp/http/cars.json')))


class TestSetupLogging(unittest.TestCase):
    """Test suite for logging configuration."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        root = logging.getLogger()
        self.saved_handlers = root.handlers[:]
        self.saved_level = root.level

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in self.saved_handlers:
            root.addHandler(handler)
        root.setLevel(self.saved_level)
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)

    def test_creates_log_file(self):
        log_file = setup_logging(log_dir=self.test_dir / 'logs')
        self.assertTrue(log_file.exists())
        self.assertTrue(log_file.name.startswith('cars_narrative_'))
        self.assertEqual(log_file.suffix, '.log')

    def test_handler_levels(self):
        setup_logging(log_dir=self.test_dir)
        root = logging.getLogger()
        self.assertEqual(len(root.handlers), 2)
        file_handler = next(h for h in root.handlers if isinstance(h, logging.FileHandler))
        console = next(h for h in root.handlers if not isinstance(h, logging.FileHandler))
        self.assertEqual(file_handler.level, logging.DEBUG)
        self.assertEqual(console.level, logging.WARNING)

    def test_verbose_console(self):
        setup_logging(verbose=True, log_dir=self.test_dir)
        console = next(h for h in logging.getLogger().handlers
                       if not isinstance(h, logging.FileHandler))
        self.assertEqual(console.level, logging.INFO)

    def test_repeated_calls_do_not_stack_handlers(self):
        setup_logging(log_dir=self.test_dir)
        setup_logging(log_dir=self.test_dir)
        self.assertEqual(len(logging.getLogger().handlers), 2)


if __name__ == '__main__':
    unittest.main()
