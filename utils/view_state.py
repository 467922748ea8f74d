"""
View state for the volcano visualization.

A ViewState is built once from the loaded dataset and carries everything the
views derive from it: ranges, the color and opacity tables and the category
list. FilterState holds the legend checkboxes of the map view.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from utils.volcano_types import (
    VolcanoDataset,
    VolcanoRecord,
    GeoBounds,
    ElevationRange,
    ScreenBox,
    MapMarker,
)
from utils.visual_encoding import (
    collect_categories,
    compute_color_table,
    compute_opacity_table,
    compute_geo_bounds,
    compute_elevation_range,
    filter_predicate,
    project_point,
    marker_diameter,
    marker_fill,
    eruption_opacity,
)

logger = logging.getLogger(__name__)


@dataclass
class ViewState:
    dataset: VolcanoDataset
    bounds: Optional[GeoBounds]
    elevation_range: Optional[ElevationRange]
    categories: List[str]
    color_table: Dict[str, str]
    opacity_table: Dict[str, int]

    @classmethod
    def from_dataset(cls, dataset: VolcanoDataset) -> 'ViewState':
        """
        Compute the derived state of a dataset.

        Args:
            dataset (VolcanoDataset): The full dataset; ranges and colors are
                always computed over every row, never a filtered subset

        Returns:
            ViewState: State shared by both views
        """
        records = dataset.records
        state = cls(
            dataset=dataset,
            bounds=compute_geo_bounds(records),
            elevation_range=compute_elevation_range(records),
            categories=collect_categories(records),
            color_table=compute_color_table(records),
            opacity_table=compute_opacity_table(),
        )
        if state.bounds is None:
            logger.warning("No volcano has valid coordinates; the map will be empty")
        return state

    @property
    def row_count(self) -> int:
        return self.dataset.row_count

    @property
    def columns(self) -> List[str]:
        return self.dataset.columns

    def opacity_for(self, record: VolcanoRecord) -> int:
        return eruption_opacity(record.last_eruption, self.opacity_table)

    def fill_for(self, record: VolcanoRecord) -> str:
        return marker_fill(record, self.color_table, self.opacity_table)

    def diameter_for(self, record: VolcanoRecord, size_range: Tuple[float, float]) -> Optional[float]:
        if record.elevation is None or self.elevation_range is None:
            return None
        return marker_diameter(record.elevation, self.elevation_range, size_range)


@dataclass
class FilterState:
    """Legend checkboxes: category -> visible and eruption code -> visible."""
    categories: Dict[str, bool] = field(default_factory=dict)
    eruptions: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def all_visible(cls, state: ViewState) -> 'FilterState':
        return cls(
            categories={c: True for c in state.color_table},
            eruptions={code: True for code in state.opacity_table},
        )

    def set_category(self, category: str, visible: bool):
        self.categories[category] = visible

    def set_eruption(self, code: str, visible: bool):
        self.eruptions[code] = visible

    def toggle_category(self, category: str):
        self.categories[category] = not self.categories.get(category, False)

    def allows(self, record: VolcanoRecord) -> bool:
        return filter_predicate(record, self.categories, self.eruptions)


def build_markers(state: ViewState, filters: FilterState, screen: ScreenBox,
                  size_range: Tuple[float, float]) -> List[MapMarker]:
    """
    Markers of every renderable record that passes the filters.

    Args:
        state (ViewState): Derived dataset state
        filters (FilterState): Current legend selection
        screen (ScreenBox): Drawing box on the canvas
        size_range (Tuple[float, float]): Min and max diameter in pixels

    Returns:
        List[MapMarker]: Markers in dataset order
    """
    if state.bounds is None or state.elevation_range is None:
        return []

    markers = []
    for record in state.dataset:
        if not record.is_renderable or not filters.allows(record):
            continue
        x, y = project_point(record.longitude, record.latitude, state.bounds, screen)
        markers.append(MapMarker(
            row_index=record.index,
            x=x,
            y=y,
            diameter=marker_diameter(record.elevation, state.elevation_range, size_range),
            fill=state.fill_for(record),
        ))
    return markers
