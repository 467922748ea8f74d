"""
Type definitions for volcano data objects

This module contains the record, dataset and geometry types shared by the
loader, the visual encoding helpers and both views.
"""
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

# Recognized columns of the volcano dataset
NAME_COLUMN = "Volcano Name"
LATITUDE_COLUMN = "Latitude"
LONGITUDE_COLUMN = "Longitude"
ELEVATION_COLUMN = "Elevation (m)"
CATEGORY_COLUMN = "TypeCategory"
ERUPTION_COLUMN = "Last Known Eruption"

REQUIRED_COLUMNS = [
    NAME_COLUMN,
    LATITUDE_COLUMN,
    LONGITUDE_COLUMN,
    ELEVATION_COLUMN,
    CATEGORY_COLUMN,
    ERUPTION_COLUMN,
]


@dataclass(frozen=True)
class VolcanoRecord:
    """One row of the dataset, with the numeric fields already coerced"""
    index: int
    fields: Dict[str, str]
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[float] = None

    @property
    def name(self) -> str:
        return self.fields.get(NAME_COLUMN, "")

    @property
    def category(self) -> str:
        return self.fields.get(CATEGORY_COLUMN, "")

    @property
    def last_eruption(self) -> str:
        return self.fields.get(ERUPTION_COLUMN, "")

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def abs_elevation(self) -> Optional[float]:
        if self.elevation is None:
            return None
        return abs(self.elevation)

    @property
    def is_renderable(self) -> bool:
        """True when the record can be placed and sized on the map."""
        return self.has_location and self.elevation is not None

    def get(self, column: str, default: str = "") -> str:
        return self.fields.get(column, default)


@dataclass
class VolcanoDataset:
    """Ordered volcano records and the header that produced them"""
    columns: List[str]
    records: List[VolcanoRecord] = field(default_factory=list)
    source: Optional[str] = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, index: int) -> VolcanoRecord:
        return self.records[index]

    @property
    def row_count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class GeoBounds:
    """Bounding box of the valid coordinates, in degrees"""
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


@dataclass(frozen=True)
class ElevationRange:
    """Range of absolute elevations, in meters"""
    min_elev: float
    max_elev: float


@dataclass(frozen=True)
class ScreenBox:
    """Pixel rectangle inside the canvas where markers are placed"""
    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def for_canvas(cls, width: float, height: float, outer_margin: float = 100,
                   legend_offset: float = 0, title_offset: float = 120) -> 'ScreenBox':
        """
        Derive the drawing box from the canvas size and margins

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            outer_margin: Margin kept free on every side
            legend_offset: Extra space on the left for a legend
            title_offset: Extra space on top for the title block

        Returns:
            ScreenBox: The drawing rectangle
        """
        return cls(
            left=outer_margin + legend_offset,
            right=width - outer_margin,
            top=outer_margin + title_offset,
            bottom=height - outer_margin,
        )

    def contains(self, point: Tuple[float, float]) -> bool:
        x, y = point
        return (min(self.left, self.right) <= x <= max(self.left, self.right)
                and min(self.top, self.bottom) <= y <= max(self.top, self.bottom))


@dataclass(frozen=True)
class MapMarker:
    """A visible record's circle on the canvas"""
    row_index: int
    x: float
    y: float
    diameter: float
    fill: str

    @property
    def radius(self) -> float:
        return self.diameter / 2
