import unittest

from utils.volcano_types import VolcanoDataset, VolcanoRecord, MapMarker
from utils.view_state import ViewState
from utils import map_utils

COLUMNS = ["Volcano Name", "Country", "Latitude", "Longitude", "Elevation (m)",
           "TypeCategory", "Last Known Eruption"]


def _state():
    rows = [
        ("Etna", "Italy", 37.7, 15.0, 3295.0, "Stratovolcano", "D1"),
        ("Dallol", "Ethiopia", 14.2, 40.3, -48.0, "Crater rows", "Q"),
        ("Nameless <b>", "", None, None, None, "Caldera", "?"),
    ]
    records = []
    for i, (name, country, lat, lon, elev, category, eruption) in enumerate(rows):
        fields = dict(zip(COLUMNS, [name, country, str(lat or ""), str(lon or ""),
                                    str(elev or ""), category, eruption]))
        records.append(VolcanoRecord(index=i, fields=fields, latitude=lat, longitude=lon, elevation=elev))
    return ViewState.from_dataset(VolcanoDataset(columns=COLUMNS, records=records))


class TestTooltip(unittest.TestCase):
    def test_one_line_per_column(self):
        state = _state()
        lines = map_utils.tooltip_lines(state.dataset[0], state.columns)

        self.assertEqual(len(lines), len(COLUMNS))
        self.assertEqual(lines[0], "Volcano Name: Etna")
        self.assertEqual(lines[1], "Country: Italy")

    def test_text_is_escaped(self):
        state = _state()
        text = map_utils.tooltip_text(state.dataset[2], state.columns)
        self.assertIn("Nameless &lt;b&gt;", text)
        self.assertEqual(text.count("<br>"), len(COLUMNS) - 1)


class TestVolcanoMap(unittest.TestCase):
    def test_figure_uses_screen_coordinates(self):
        state = _state()
        markers = [
            MapMarker(row_index=0, x=300.0, y=400.0, diameter=80.0, fill="rgba(1,2,3,1.000)"),
            MapMarker(row_index=1, x=900.0, y=600.0, diameter=5.0, fill="rgba(4,5,6,0.392)"),
        ]
        fig = map_utils.create_volcano_map(markers, state, 1200, 760)
        trace = fig.data[0]

        self.assertEqual(list(trace.x), [300.0, 900.0])
        self.assertEqual(list(trace.y), [400.0, 600.0])
        self.assertEqual(list(trace.marker.size), [80.0, 5.0])
        self.assertEqual(list(trace.marker.color), ["rgba(1,2,3,1.000)", "rgba(4,5,6,0.392)"])
        self.assertEqual(list(trace.customdata), [0, 1])
        self.assertIn("Volcano Name: Dallol", trace.hovertext[1])
        self.assertEqual(list(fig.layout.xaxis.range), [0, 1200])
        self.assertEqual(list(fig.layout.yaxis.range), [760, 0])
        self.assertEqual(fig.layout.width, 1200)
        self.assertEqual(fig.layout.height, 760)

    def test_points_are_picked_only_inside_markers(self):
        markers = [MapMarker(row_index=0, x=300.0, y=400.0, diameter=5.0, fill="red")]
        fig = map_utils.create_volcano_map(markers, _state(), 1200, 760)

        self.assertEqual(fig.layout.hovermode, "closest")
        self.assertEqual(fig.layout.hoverdistance, 1)
        self.assertEqual(fig.layout.clickmode, "event+select")

    def test_empty_map(self):
        fig = map_utils.create_volcano_map([], _state(), 800, 600)
        self.assertEqual(len(fig.data[0].x), 0)
        self.assertEqual(len(fig.layout.annotations), 3)


class TestDetailFigure(unittest.TestCase):
    def test_single_circle_matches_map_color(self):
        state = _state()
        record = state.dataset[0]
        fig = map_utils.create_detail_figure(record, state, 600, 760)
        trace = fig.data[0]

        self.assertEqual(list(trace.x), [300.0])
        self.assertEqual(list(trace.y), [430.0])
        self.assertEqual(list(trace.marker.color), [state.fill_for(record)])
        self.assertEqual(list(trace.marker.size), [560.0])

    def test_no_elevation_gives_no_figure(self):
        state = _state()
        self.assertIsNone(map_utils.create_detail_figure(state.dataset[2], state, 600, 760))


class TestLegendHtml(unittest.TestCase):
    def test_eruption_entries(self):
        entries = map_utils.eruption_legend_entries()
        self.assertEqual([e["code"] for e in entries],
                         ["D1", "D2", "D3", "D4", "D5", "D6", "D7", "U", "Q", "?"])
        self.assertEqual(entries[0]["label"], "D1: 1964 or later")
        self.assertEqual(entries[0]["swatch"], "rgba(200,200,200,1.000)")

    def test_static_legend_lists_every_category(self):
        state = _state()
        legend = map_utils.create_static_legend_html(state)
        for category in state.categories:
            self.assertIn(category, legend)
            self.assertIn(state.color_table[category], legend)
        self.assertIn("D7: BCE (Holocene)", legend)
        self.assertNotIn("checkbox", legend)

    def test_details_listing(self):
        state = _state()
        details = map_utils.create_details_html(state.dataset[1], state.columns)
        self.assertIn("<strong>Country:</strong> Ethiopia", details)
        self.assertIn("<strong>Elevation (m):</strong> -48.0", details)


if __name__ == '__main__':
    unittest.main()
