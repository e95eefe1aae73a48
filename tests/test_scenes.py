"""
Unit tests for the scene renderers

Covers:
- Dispatch through the Scene enum, including unknown indices
- The contents of each of the five scenes
- Empty states when a selection matches nothing
- Renderers leaving their inputs untouched
"""

import unittest
from pathlib import Path
import sys

import pandas as pd

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from cars_narrative.core.config import EMPTY_STATE_MESSAGE, SCENES
from cars_narrative.models.data_models import Selection
from cars_narrative.state.selection import SelectionRequest, ACTION_MANUFACTURER, ACTION_YEAR, ACTION_ORIGIN
from cars_narrative.scenes import (
    Scene, SCENE_HANDLERS, render_scene, SELECTOR_DROPDOWN, LAYOUT_TABS,
)
from tests.fixtures.sample_data import create_story_records


class TestDispatch(unittest.TestCase):
    """Test suite for scene dispatch."""

    def setUp(self):
        self.records = create_story_records()

    def test_every_scene_has_a_handler(self):
        self.assertEqual(set(SCENE_HANDLERS), set(Scene))
        self.assertEqual([int(s) for s in Scene], sorted(SCENES))

    def test_render_each_scene(self):
        for index in range(1, 6):
            view = render_scene(index, self.records, Selection(scene=index))
            self.assertEqual(view.scene, index)
            self.assertEqual(view.title, SCENES[index]['title'])
            self.assertFalse(view.is_empty, index)
            self.assertTrue(view.figures, index)

    def test_unknown_index(self):
        """Indices outside 1..5 give an explicit empty view."""
        for index in (0, 6, -1, None):
            view = render_scene(index, self.records, Selection())
            self.assertTrue(view.is_empty)
            self.assertTrue(view.show_reset)
            self.assertIsNone(view.next_label)

    def test_navigation_labels(self):
        first = render_scene(1, self.records, Selection())
        last = render_scene(5, self.records, Selection(scene=5))
        self.assertIsNone(first.back_label)
        self.assertEqual(first.next_label, SCENES[1]['next'])
        self.assertEqual(last.back_label, SCENES[5]['back'])
        self.assertIsNone(last.next_label)
        self.assertTrue(last.show_reset)

    def test_inputs_not_mutated(self):
        before = self.records.copy()
        for index in range(1, 6):
            render_scene(index, self.records, Selection(scene=index, manufacturer='ford',
                                                        year=1970, origin='USA'))
        pd.testing.assert_frame_equal(self.records, before)


class TestOverviewScene(unittest.TestCase):

    def test_kpis_and_regions(self):
        records = create_story_records()
        view = render_scene(Scene.OVERVIEW, records, Selection())
        values = {card.label: card.value for card in view.kpis}
        self.assertEqual(values['Total Cars'], '12')
        self.assertEqual(values['Regions'], '3')
        self.assertIn('1970-1982', view.description)
        self.assertEqual(len(view.figures[0].figure.layout.shapes), 2)
        self.assertEqual(len(view.insights), 2)

    def test_empty_dataset(self):
        view = render_scene(Scene.OVERVIEW, create_story_records().head(0), Selection())
        self.assertEqual(view.empty_message, EMPTY_STATE_MESSAGE)


class TestManufacturerScene(unittest.TestCase):

    def setUp(self):
        self.records = create_story_records()

    def test_selector_options(self):
        view = render_scene(Scene.MANUFACTURERS, self.records, Selection(scene=2))
        selector = view.selectors[0]
        labels = [option.label for option in selector.options]
        self.assertEqual(labels[0], 'All Manufacturers')
        self.assertEqual(labels[1:], sorted(labels[1:]))
        self.assertTrue(selector.options[0].active)
        self.assertEqual(selector.request_for(selector.options[0]),
                         SelectionRequest(ACTION_MANUFACTURER, None))

    def test_bars_are_clickable(self):
        view = render_scene(Scene.MANUFACTURERS, self.records, Selection(scene=2))
        block = view.figures[0]
        self.assertEqual(block.select_action, ACTION_MANUFACTURER)
        self.assertEqual(len(block.figure.data[0].x), 8)

    def test_selected_manufacturer_details(self):
        view = render_scene(Scene.MANUFACTURERS, self.records, Selection(scene=2, manufacturer='ford'))
        self.assertEqual(view.detail_title, 'ford Details')
        self.assertEqual(view.detail_kpis[0].value, '3')
        self.assertIn('ford (3 cars)', view.status)
        self.assertTrue(any(o.active and o.value == 'ford' for o in view.selectors[0].options))

    def test_unmatched_manufacturer(self):
        view = render_scene(Scene.MANUFACTURERS, self.records, Selection(scene=2, manufacturer='tesla'))
        self.assertEqual(view.empty_message, EMPTY_STATE_MESSAGE)
        self.assertEqual(view.detail_kpis, [])


class TestYearTrendsScene(unittest.TestCase):

    def setUp(self):
        self.records = create_story_records()

    def test_period_selector(self):
        view = render_scene(Scene.YEAR_TRENDS, self.records, Selection(scene=3))
        labels = [option.label for option in view.selectors[0].options]
        self.assertEqual(labels, ['All Periods', 'Early 70s', 'Oil Crisis', 'Late 70s', 'Early 80s'])
        self.assertEqual(view.selectors[0].action, ACTION_YEAR)

    def test_trend_kpis(self):
        view = render_scene(Scene.YEAR_TRENDS, self.records, Selection(scene=3))
        mpg_card = view.kpis[0]
        self.assertTrue(mpg_card.value.endswith('MPG'))
        self.assertIn('increasing trend', mpg_card.delta)

    def test_selected_year_details(self):
        view = render_scene(Scene.YEAR_TRENDS, self.records, Selection(scene=3, year=1974))
        self.assertEqual(view.detail_title, 'Oil Crisis (1974) Details')
        self.assertEqual(view.detail_kpis[0].value, '3')

    def test_year_without_records(self):
        view = render_scene(Scene.YEAR_TRENDS, self.records, Selection(scene=3, year=1999))
        self.assertEqual(view.empty_message, EMPTY_STATE_MESSAGE)


class TestEfficiencyScene(unittest.TestCase):

    def setUp(self):
        self.records = create_story_records()

    def test_origin_buttons_with_captions(self):
        view = render_scene(Scene.EFFICIENCY, self.records, Selection(scene=4))
        options = view.selectors[0].options
        self.assertEqual([o.label for o in options], ['All Regions', 'Europe', 'Japan', 'USA'])
        self.assertTrue(options[0].caption.startswith('12 cars'))
        self.assertIn('4 cars', options[2].caption)
        self.assertEqual(view.selectors[0].action, ACTION_ORIGIN)

    def test_selected_origin(self):
        view = render_scene(Scene.EFFICIENCY, self.records, Selection(scene=4, origin='Japan'))
        self.assertEqual(view.detail_title, 'Japan Regional Analysis')
        self.assertEqual(view.detail_kpis[0].value, '4')
        self.assertEqual(len(view.figures), 2)
        self.assertIn('Japan cars', view.figures[1].caption)

    def test_unmatched_origin(self):
        view = render_scene(Scene.EFFICIENCY, self.records, Selection(scene=4, origin='Mars'))
        self.assertEqual(view.empty_message, EMPTY_STATE_MESSAGE)
        self.assertEqual(len(view.figures), 2)


class TestExplorationScene(unittest.TestCase):

    def setUp(self):
        self.records = create_story_records()

    def test_unfiltered(self):
        view = render_scene(Scene.EXPLORATION, self.records, Selection(scene=5))
        self.assertEqual(view.status, '12 of 12 cars')
        self.assertEqual(view.figure_layout, LAYOUT_TABS)
        self.assertEqual(len(view.figures), 3)
        self.assertFalse(view.show_clear_filters)
        self.assertEqual([s.style for s in view.selectors], [SELECTOR_DROPDOWN] * 3)
        self.assertEqual([s.action for s in view.selectors],
                         [ACTION_MANUFACTURER, ACTION_YEAR, ACTION_ORIGIN])

    def test_top_performers(self):
        view = render_scene(Scene.EXPLORATION, self.records, Selection(scene=5))
        titles = [p.title for p in view.performers]
        self.assertEqual(titles, ['Most Efficient', 'Most Powerful', 'Fastest Acceleration'])
        self.assertEqual(view.performers[0].entries[0], 'vw pickup (44 MPG)')
        self.assertEqual(view.performers[2].entries[0], 'ford torino (10.5s)')
        self.assertTrue(all(len(p.entries) == 3 for p in view.performers))

    def test_filtered(self):
        view = render_scene(Scene.EXPLORATION, self.records, Selection(scene=5, origin='Europe'))
        self.assertEqual(view.status, '3 of 12 cars')
        self.assertTrue(view.show_clear_filters)
        origin_selector = view.selectors[2]
        self.assertTrue(any(o.active and o.value == 'Europe' for o in origin_selector.options))

    def test_no_match(self):
        view = render_scene(Scene.EXPLORATION, self.records,
                            Selection(scene=5, manufacturer='ford', origin='Japan'))
        self.assertEqual(view.empty_message, EMPTY_STATE_MESSAGE)
        self.assertEqual(view.status, '0 of 12 cars')
        self.assertEqual(len(view.figures), 3)
        self.assertEqual(view.performers, [])


if __name__ == '__main__':
    unittest.main()
