import os

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Core configuration for the volcano visualization
CONFIG = {
    # Dataset
    "data_path": os.environ.get(
        "VOLCANO_DATA_PATH", os.path.join(_PROJECT_ROOT, "data", "volcanoes.csv")
    ),

    # Canvas (pixels)
    "canvas_width": int(os.environ.get("VOLCANO_CANVAS_WIDTH", 1200)),
    "canvas_height": int(os.environ.get("VOLCANO_CANVAS_HEIGHT", 750)),
    "canvas_min_size": 400,
    "canvas_max_size": 2400,

    # Margins around the drawing box
    "outer_margin": 100,
    "legend_offset": 0,  # legend lives in the sidebar
    "title_offset": 120,

    # Circle diameters (pixels) per view
    "map_size_range": (5, 80),
    "detail_size_range": (35, 560),
    "detail_center_offset": 50,

    # Text
    "title": "Volcanoes of the World",
    "subtitle": "Computer Graphics for Information Design - Assignment 04",
    "hint": "Click a circle for details • Use the legend to filter",
    "accent_color": "#FFB347",
    "background_color": "#000000",
}
