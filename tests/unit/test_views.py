import os
import unittest

from streamlit.testing.v1 import AppTest

from utils.data_loader import load_volcano_dataset
from utils.config import CONFIG
from utils.volcano_types import MapMarker
from utils.view_state import ViewState, FilterState, build_markers
from utils.visual_encoding import marker_diameter
from utils.map_utils import create_detail_figure
from views.detail_view import parse_row_id, NOT_FOUND_MESSAGE
from views.map_view import selected_row, screen_box

APP_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "app.py")


class TestParseRowId(unittest.TestCase):
    def test_accepts_ids_in_range(self):
        for raw in ["0", "4", " 9 "]:
            self.assertEqual(parse_row_id(raw, 10), int(raw))

    def test_rejects_everything_else(self):
        for raw in [None, "", "10", "11", "-1", "1.5", "abc", "3abc", "+2", "1e1", "٣", "٠"]:
            self.assertIsNone(parse_row_id(raw, 10), raw)

    def test_empty_dataset_rejects_zero(self):
        self.assertIsNone(parse_row_id("0", 0))


class TestSelectedRow(unittest.TestCase):
    def setUp(self):
        # Row 1 is larger and overlaps the center of row 0
        self.markers = [
            MapMarker(row_index=0, x=100.0, y=100.0, diameter=30.0, fill="red"),
            MapMarker(row_index=1, x=120.0, y=100.0, diameter=50.0, fill="red"),
        ]

    def test_picked_point_decides_the_row(self):
        self.assertEqual(selected_row([{"x": 100.0, "y": 100.0, "customdata": 0}], self.markers), 0)
        self.assertEqual(selected_row([{"x": 120.0, "y": 100.0, "customdata": 1}], self.markers), 1)

    def test_customdata_as_list(self):
        self.assertEqual(selected_row([{"x": 120.0, "y": 100.0, "customdata": [1]}], self.markers), 1)

    def test_point_index_when_customdata_missing(self):
        self.assertEqual(selected_row([{"x": 100.0, "y": 100.0, "point_index": 0}], self.markers), 0)
        self.assertEqual(selected_row([{"point_index": 1}], self.markers), 1)
        self.assertIsNone(selected_row([{"point_index": 2}], self.markers))

    def test_hidden_row_is_ignored(self):
        self.assertIsNone(selected_row([{"x": 100.0, "y": 100.0, "customdata": 7}], self.markers))

    def test_point_outside_its_marker_is_ignored(self):
        small = [MapMarker(row_index=3, x=300.0, y=400.0, diameter=5.0, fill="red")]
        self.assertIsNone(selected_row([{"x": 315.0, "y": 400.0, "customdata": 3}], small))
        self.assertEqual(selected_row([{"x": 300.0, "y": 400.0, "customdata": 3}], small), 3)

    def test_no_selection(self):
        self.assertIsNone(selected_row([], self.markers))
        self.assertIsNone(selected_row([{}], self.markers))

    def test_screen_box_from_config(self):
        box = screen_box(1200, 760)
        self.assertEqual((box.left, box.right, box.top, box.bottom), (100, 1100, 220, 660))


class TestMapToDetail(unittest.TestCase):
    def setUp(self):
        self.state = ViewState.from_dataset(load_volcano_dataset())
        filters = FilterState.all_visible(self.state)
        screen = screen_box(CONFIG["canvas_width"], CONFIG["canvas_height"])
        self.markers = build_markers(self.state, filters, screen, CONFIG["map_size_range"])

    def test_clicked_marker_opens_matching_detail(self):
        position = len(self.markers) // 2
        marker = self.markers[position]
        row = marker.row_index
        point = {"x": marker.x, "y": marker.y, "customdata": row, "point_index": position}

        self.assertEqual(selected_row([point], self.markers), row)
        self.assertEqual(parse_row_id(str(row), self.state.row_count), row)

        record = self.state.dataset[row]
        fig = create_detail_figure(record, self.state, 600, CONFIG["canvas_height"])
        trace = fig.data[0]

        self.assertEqual(list(trace.marker.color), [marker.fill])
        self.assertEqual(marker.fill, self.state.fill_for(record))
        self.assertAlmostEqual(
            trace.marker.size[0],
            marker_diameter(record.elevation, self.state.elevation_range, CONFIG["detail_size_range"]),
        )
        self.assertAlmostEqual(
            marker.diameter,
            marker_diameter(record.elevation, self.state.elevation_range, CONFIG["map_size_range"]),
        )

    def test_every_marker_resolves_to_its_own_row(self):
        for position, marker in enumerate(self.markers):
            point = {"x": marker.x, "y": marker.y, "customdata": marker.row_index, "point_index": position}
            self.assertEqual(selected_row([point], self.markers), marker.row_index)

    def test_detail_page_shows_clicked_volcano(self):
        marker = self.markers[len(self.markers) // 2]
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        at.query_params["id"] = str(marker.row_index)
        at.run()

        self.assertFalse(at.exception)
        self.assertEqual(len(at.error), 0)
        name = self.state.dataset[marker.row_index].name
        self.assertTrue(any(name in md.value for md in at.markdown))


class TestAppViews(unittest.TestCase):
    def setUp(self):
        self.dataset = load_volcano_dataset()

    def test_map_view_renders(self):
        at = AppTest.from_file(APP_PATH, default_timeout=30).run()

        self.assertFalse(at.exception)
        self.assertEqual(len(at.error), 0)
        renderable = sum(1 for r in self.dataset if r.is_renderable)
        self.assertTrue(any(
            md.value == f"Showing {renderable} of {len(self.dataset)} volcanoes" for md in at.markdown
        ))

    def test_unchecking_a_category_hides_it(self):
        at = AppTest.from_file(APP_PATH, default_timeout=30).run()
        at.checkbox(key="category_Stratovolcano").uncheck().run()

        remaining = sum(1 for r in self.dataset
                        if r.is_renderable and r.category != "Stratovolcano")
        self.assertTrue(any(
            md.value == f"Showing {remaining} of {len(self.dataset)} volcanoes" for md in at.markdown
        ))

    def test_detail_view_for_valid_id(self):
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        at.query_params["id"] = "0"
        at.run()

        self.assertFalse(at.exception)
        self.assertEqual(len(at.error), 0)
        name = self.dataset[0].name
        self.assertTrue(any(name in md.value for md in at.markdown))

    def test_detail_view_rejects_out_of_range_id(self):
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        at.query_params["id"] = str(len(self.dataset))
        at.run()

        self.assertFalse(at.exception)
        self.assertEqual(at.error[0].value, NOT_FOUND_MESSAGE)

    def test_detail_view_rejects_garbage_id(self):
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        at.query_params["id"] = "volcano"
        at.run()

        self.assertEqual(at.error[0].value, NOT_FOUND_MESSAGE)

    def test_back_button_returns_to_map(self):
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        at.query_params["id"] = "1"
        at.run()
        at.button(key="back_to_map").click().run()

        self.assertFalse(at.exception)
        self.assertTrue(any(md.value.startswith("Showing ") for md in at.markdown))


if __name__ == '__main__':
    unittest.main()
