"""
Unit tests for the dataset loader

Covers:
- Record cleaning and the required-field filter
- File and URL sources (HTTP mocked)
- LoadError for unreachable and malformed sources
- Data source resolution from the environment
"""

import unittest
from unittest.mock import patch, MagicMock
from pathlib import Path
import sys
import os
import json
import tempfile
import shutil

import pandas as pd
import requests

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from cars_narrative.core.config import (
    DEFAULT_DATA_FILE, DATA_SOURCE_ENV, REQUEST_TIMEOUT, RECORD_COLUMNS,
    REQUIRED_FIELDS, get_default_data_source,
)
from cars_narrative.data.loader import load_cars, parse_records
from cars_narrative.models.data_models import LoadError, CarRecord
from tests.fixtures.sample_data import create_sample_payload, create_sample_json_file


class TestParseRecords(unittest.TestCase):
    """Test suite for cleaning a decoded payload."""

    def test_null_horsepower_record_dropped(self):
        """Four records with one null horsepower yield three."""
        df = parse_records(create_sample_payload())
        self.assertEqual(len(df), 3)
        self.assertNotIn('ford pinto', df['name'].tolist())

    def test_canonical_columns(self):
        """Output carries every canonical column plus manufacturer."""
        df = parse_records(create_sample_payload())
        for col in RECORD_COLUMNS + ['manufacturer']:
            self.assertIn(col, df.columns)

    def test_year_truncated_from_date_string(self):
        """'1970-01-01' becomes the integer 1970."""
        df = parse_records(create_sample_payload())
        self.assertEqual(df.loc[0, 'year'], 1970)
        self.assertTrue(pd.api.types.is_integer_dtype(df['year']))

    def test_manufacturer_derived_from_name(self):
        """Manufacturer is the first token of the name."""
        df = parse_records(create_sample_payload())
        self.assertEqual(df['manufacturer'].tolist(), ['chevrolet', 'datsun', 'fiat'])

    def test_index_reset(self):
        """Index runs 0..n-1 after dropping records."""
        df = parse_records(create_sample_payload())
        self.assertEqual(list(df.index), [0, 1, 2])

    def test_required_fields_never_null(self):
        """Retained records have every required field present."""
        df = parse_records(create_sample_payload())
        self.assertFalse(df[REQUIRED_FIELDS].isna().any().any())

    def test_non_numeric_value_counts_as_missing(self):
        """An mpg that cannot be parsed drops the record."""
        payload = create_sample_payload()
        payload[0]['Miles_per_Gallon'] = 'n/a'
        df = parse_records(payload)
        self.assertEqual(len(df), 2)

    def test_blank_origin_dropped(self):
        """A blank origin counts as missing."""
        payload = create_sample_payload()
        payload[2]['Origin'] = '   '
        df = parse_records(payload)
        self.assertEqual(len(df), 2)

    def test_missing_year_dropped(self):
        """A record without a year is dropped."""
        payload = create_sample_payload()
        del payload[3]['Year']
        df = parse_records(payload)
        self.assertEqual(len(df), 2)

    def test_out_of_range_years_dropped(self):
        """Infinite or oversized years count as missing instead of overflowing."""
        payload = json.loads(
            '[{"Name": "a", "Miles_per_Gallon": 20, "Horsepower": 90, "Weight_in_lbs": 2500,'
            ' "Year": Infinity, "Origin": "USA"},'
            ' {"Name": "b", "Miles_per_Gallon": 20, "Horsepower": 90, "Weight_in_lbs": 2500,'
            ' "Year": 1e30, "Origin": "USA"},'
            ' {"Name": "c", "Miles_per_Gallon": 20, "Horsepower": 90, "Weight_in_lbs": 2500,'
            ' "Year": "1975-01-01", "Origin": "USA"}]'
        )
        df = parse_records(payload)
        self.assertEqual(df['name'].tolist(), ['c'])
        self.assertEqual(df.loc[0, 'year'], 1975)

    def test_integer_year_accepted(self):
        """Plain integer years load unchanged."""
        payload = create_sample_payload()
        payload[0]['Year'] = 1970
        df = parse_records(payload)
        self.assertEqual(df.loc[0, 'year'], 1970)

    def test_missing_optional_column_added(self):
        """Optional columns missing from the source come back as NaN."""
        payload = create_sample_payload()
        for record in payload:
            del record['Displacement']
        df = parse_records(payload)
        self.assertIn('displacement', df.columns)
        self.assertTrue(df['displacement'].isna().all())

    def test_empty_array(self):
        """An empty array yields an empty frame with the canonical columns."""
        df = parse_records([])
        self.assertEqual(len(df), 0)
        self.assertIn('mpg', df.columns)

    def test_non_list_raises(self):
        """A JSON object instead of an array is rejected."""
        with self.assertRaises(LoadError) as context:
            parse_records({'Name': 'ford pinto'}, source='x.json')
        self.assertIn("JSON array", str(context.exception))
        self.assertEqual(context.exception.source, 'x.json')

    def test_non_object_entries_raise(self):
        """Array entries must be objects."""
        with self.assertRaises(LoadError):
            parse_records([1, 2, 3])

    def test_car_record_from_row(self):
        """CarRecord mirrors one row of the frame."""
        df = parse_records(create_sample_payload())
        record = CarRecord.from_row(df.iloc[1])
        self.assertEqual(record.name, 'datsun 710')
        self.assertEqual(record.year, 1974)
        self.assertEqual(record.manufacturer, 'datsun')
        self.assertEqual(record.to_dict()['manufacturer'], 'datsun')


class TestLoadCars(unittest.TestCase):
    """Test suite for loading from files and URLs."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.json_file = create_sample_json_file(output_path=self.test_dir / 'cars.json')

    def tearDown(self):
        """Clean up test fixtures."""
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)

    def test_load_from_file(self):
        """Load a local JSON file."""
        df = load_cars(self.json_file)
        self.assertEqual(len(df), 3)

    def test_load_from_path_object(self):
        """Path objects are accepted as well as strings."""
        df = load_cars(Path(self.json_file))
        self.assertEqual(len(df), 3)

    def test_missing_file_raises(self):
        """A missing file raises LoadError chained to the OS error."""
        missing = self.test_dir / 'nope.json'
        with self.assertRaises(LoadError) as context:
            load_cars(missing)
        self.assertIsInstance(context.exception.__cause__, OSError)
        self.assertEqual(context.exception.source, str(missing))

    def test_malformed_json_raises(self):
        """Invalid JSON raises LoadError."""
        bad = self.test_dir / 'bad.json'
        bad.write_text('[{"Name": "ford pinto",', encoding='utf-8')
        with self.assertRaises(LoadError) as context:
            load_cars(bad)
        self.assertIn("Malformed JSON", str(context.exception))

    def test_non_utf8_file_raises(self):
        """Bytes that are not UTF-8 raise LoadError chained to the decode error."""
        bad = self.test_dir / 'latin.json'
        bad.write_bytes(b'[{"Name": "\xff\xfe bad"}]')
        with self.assertRaises(LoadError) as context:
            load_cars(bad)
        self.assertIsInstance(context.exception.__cause__, UnicodeDecodeError)
        self.assertEqual(context.exception.source, str(bad))

    @patch('cars_narrative.data.loader.requests.get')
    def test_load_from_url(self, mock_get):
        """URLs are fetched once with the configured timeout."""
        with open(self.json_file, encoding='utf-8') as f:
            body = f.read()
        mock_response = MagicMock()
        mock_response.text = body
        mock_get.return_value = mock_response

        df = load_cars('https://example.org/cars.json')

        self.assertEqual(len(df), 3)
        mock_get.assert_called_once_with('https://example.org/cars.json', timeout=REQUEST_TIMEOUT)
        mock_response.raise_for_status.assert_called_once()

    @patch('cars_narrative.data.loader.requests.get')
    def test_unreachable_url_raises(self, mock_get):
        """Connection errors surface as LoadError without retry."""
        mock_get.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(LoadError) as context:
            load_cars('http://example.org/cars.json')
        self.assertIsInstance(context.exception.__cause__, requests.ConnectionError)
        self.assertEqual(mock_get.call_count, 1)

    @patch('cars_narrative.data.loader.requests.get')
    def test_http_error_raises(self, mock_get):
        """A non-2xx response surfaces as LoadError."""
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        mock_get.return_value = mock_response
        with self.assertRaises(LoadError):
            load_cars('https://example.org/missing.json')

    def test_bundled_dataset_loads(self):
        """The shipped dataset loads and drops its incomplete records."""
        df = load_cars(DEFAULT_DATA_FILE)
        self.assertGreater(len(df), 30)
        self.assertFalse(df[REQUIRED_FIELDS].isna().any().any())
        self.assertEqual(set(df['origin']), {'USA', 'Europe', 'Japan'})


class TestDefaultDataSource(unittest.TestCase):
    """Test suite for resolving the data location."""

    def test_default_is_bundled_file(self):
        """Without an override the bundled file is used."""
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop(DATA_SOURCE_ENV, None)
            self.assertEqual(get_default_data_source(), str(DEFAULT_DATA_FILE))

    def test_environment_override(self):
        """The environment variable wins when set."""
        with patch.dict(os.environ, {DATA_SOURCE_ENV: 'https://example.org/cars.json'}):
            self.assertEqual(get_default_data_source(), 'https://example.org/cars.json')

    def test_blank_override_ignored(self):
        """A blank override falls back to the bundled file."""
        with patch.dict(os.environ, {DATA_SOURCE_ENV: '  '}):
            self.assertEqual(get_default_data_source(), str(DEFAULT_DATA_FILE))


if __name__ == '__main__':
    unittest.main()
