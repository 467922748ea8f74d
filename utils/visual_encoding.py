"""
Visual encoding shared by the map and detail views.

Colors come from the TypeCategory column, opacity from the Last Known
Eruption code, position from a linear fit of longitude/latitude into the
screen box and size from the absolute elevation. Both views call these
functions so a volcano looks the same on either page.
"""
import math
from typing import Dict, List, Iterable, Optional, Tuple

from utils.volcano_types import (
    VolcanoRecord,
    GeoBounds,
    ElevationRange,
    ScreenBox,
    MapMarker,
)

# Palette for volcano types, assigned in first-seen order
COLOR_PALETTE = [
    "#cf0808ff", "#FF6347", "#FF7F50", "#FF8C00", "#FFA500",
    "#FFB347", "#FF6A00", "#FF3300", "#ffbeb4ff",
]
DEFAULT_COLOR = "#ffffff"

# Last Known Eruption code -> alpha (0-255); more recent is more opaque
ERUPTION_OPACITY = {
    "D1": 255, "D2": 220, "D3": 190, "D4": 140, "D5": 110,
    "D6": 80, "D7": 40, "U": 120, "Q": 100, "?": 80,
}
DEFAULT_OPACITY = 150

ERUPTION_PERIODS = {
    "D1": "1964 or later",
    "D2": "1900–1963",
    "D3": "1800–1899",
    "D4": "1700–1799",
    "D5": "1500–1699",
    "D6": "1–1499 CE",
    "D7": "BCE (Holocene)",
    "U": "Undated (Holocene)",
    "Q": "Quaternary (hydrothermal only)",
    "?": "Uncertain",
}


def collect_categories(records: Iterable[VolcanoRecord]) -> List[str]:
    """Unique non-empty categories in the order they first appear."""
    categories: List[str] = []
    seen = set()
    for record in records:
        category = record.category
        if category and category not in seen:
            seen.add(category)
            categories.append(category)
    return categories


def compute_color_table(records: Iterable[VolcanoRecord]) -> Dict[str, str]:
    """
    Assign a palette color to every category of the dataset.

    Args:
        records: All records of the dataset, in file order

    Returns:
        Dict[str, str]: Category -> hex color, in first-seen order
    """
    return {
        category: COLOR_PALETTE[i % len(COLOR_PALETTE)]
        for i, category in enumerate(collect_categories(records))
    }


def compute_opacity_table() -> Dict[str, int]:
    return dict(ERUPTION_OPACITY)


def category_color(category: str, color_table: Dict[str, str]) -> str:
    return color_table.get(category, DEFAULT_COLOR)


def eruption_opacity(code: str, opacity_table: Dict[str, int]) -> int:
    return opacity_table.get(code, DEFAULT_OPACITY)


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Parse #RGB, #RRGGBB or #RRGGBBAA into an RGB tuple (alpha is ignored)."""
    value = hex_color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) not in (6, 8):
        raise ValueError(f"Invalid hex color: {hex_color}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def to_rgba(hex_color: str, alpha: int) -> str:
    """
    Combine a palette color with an 0-255 alpha into a CSS rgba() string.

    The alpha replaces any alpha channel already present in the hex color.
    """
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r},{g},{b},{alpha / 255:.3f})"


def marker_fill(record: VolcanoRecord, color_table: Dict[str, str],
                opacity_table: Dict[str, int]) -> str:
    return to_rgba(
        category_color(record.category, color_table),
        eruption_opacity(record.last_eruption, opacity_table),
    )


def compute_geo_bounds(records: Iterable[VolcanoRecord]) -> Optional[GeoBounds]:
    """
    Bounding box of the records with valid latitude and longitude.

    Returns:
        Optional[GeoBounds]: None when no record has a valid location
    """
    located = [r for r in records if r.has_location]
    if not located:
        return None
    lats = [r.latitude for r in located]
    lons = [r.longitude for r in located]
    return GeoBounds(min_lat=min(lats), max_lat=max(lats),
                     min_lon=min(lons), max_lon=max(lons))


def compute_elevation_range(records: Iterable[VolcanoRecord]) -> Optional[ElevationRange]:
    elevations = [r.abs_elevation for r in records if r.elevation is not None]
    if not elevations:
        return None
    return ElevationRange(min_elev=min(elevations), max_elev=max(elevations))


def map_range(value: float, in_min: float, in_max: float,
              out_min: float, out_max: float, degenerate: Optional[float] = None) -> float:
    """
    Linear re-mapping of value from [in_min, in_max] to [out_min, out_max].

    When the input span is empty the result is `degenerate`, or the middle of
    the output range if that is not given.
    """
    span = in_max - in_min
    if span == 0:
        if degenerate is not None:
            return degenerate
        return (out_min + out_max) / 2
    return out_min + (value - in_min) * (out_max - out_min) / span


def project_point(lon: float, lat: float, bounds: GeoBounds,
                  screen: ScreenBox) -> Tuple[float, float]:
    """
    Project a longitude/latitude pair into screen pixels.

    Longitude runs left to right; latitude is inverted so the northernmost
    volcano sits at the top of the screen box.
    """
    x = map_range(lon, bounds.min_lon, bounds.max_lon, screen.left, screen.right)
    y = map_range(lat, bounds.min_lat, bounds.max_lat, screen.bottom, screen.top)
    return x, y


def marker_diameter(elevation: float, elevation_range: ElevationRange,
                    size_range: Tuple[float, float]) -> float:
    """
    Circle diameter for an elevation; the sign of the elevation is dropped.

    A dataset whose elevations are all equal gets the largest size.
    """
    min_size, max_size = size_range
    return map_range(abs(elevation), elevation_range.min_elev, elevation_range.max_elev,
                     min_size, max_size, degenerate=max_size)


def filter_predicate(record: VolcanoRecord, active_categories: Dict[str, bool],
                     active_eruptions: Dict[str, bool]) -> bool:
    """
    Whether a record passes the legend filters.

    A category must be known and switched on. An eruption code is only
    filtered when it is known and switched off; unknown codes always pass.
    """
    if not active_categories.get(record.category, False):
        return False
    if record.last_eruption in active_eruptions and not active_eruptions[record.last_eruption]:
        return False
    return True


def hit_test(point: Tuple[float, float], markers: List[MapMarker]) -> Optional[int]:
    """
    Find the marker under a screen point.

    Pointer picking in the browser goes through the chart's own point pick,
    restricted to the inside of a marker (hoverdistance=1) so tooltips and
    clicks follow the same containment rule as this function.

    Args:
        point: (x, y) in screen pixels
        markers: Visible markers in dataset order

    Returns:
        Optional[int]: Row index of the last marker in dataset order whose
        circle contains the point (the one drawn on top), or None
    """
    px, py = point
    hit = None
    for marker in markers:
        if math.hypot(px - marker.x, py - marker.y) < marker.radius:
            hit = marker.row_index
    return hit
