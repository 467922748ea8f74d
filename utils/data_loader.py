"""
Data loading utilities for the volcano visualization.

This module reads the volcano CSV into an ordered VolcanoDataset. Every cell
is kept as text; latitude, longitude and elevation are coerced to numbers
alongside so the views never parse strings while drawing.
"""

import os
import logging
import pandas as pd
import numpy as np
import streamlit as st
from typing import List, Optional

from utils.config import CONFIG
from utils.volcano_types import (
    VolcanoDataset,
    VolcanoRecord,
    REQUIRED_COLUMNS,
    LATITUDE_COLUMN,
    LONGITUDE_COLUMN,
    ELEVATION_COLUMN,
)

logger = logging.getLogger(__name__)


class DatasetLoadError(Exception):
    """Raised when the volcano dataset cannot be read or lacks required columns."""


def coerce_numeric(series: pd.Series) -> List[Optional[float]]:
    """
    Convert a text column to floats, using None for blank, non-numeric
    or non-finite cells.

    Args:
        series (pd.Series): Column of strings

    Returns:
        List[Optional[float]]: One value per row
    """
    values = pd.to_numeric(series.str.strip(), errors="coerce")
    return [float(v) if np.isfinite(v) else None for v in values]


def load_volcano_dataset(path: Optional[str] = None) -> VolcanoDataset:
    """
    Load the volcano CSV from disk.

    Args:
        path (str, optional): CSV path, defaults to CONFIG["data_path"]

    Returns:
        VolcanoDataset: Records in file order with the header's column order

    Raises:
        DatasetLoadError: If the file is missing, unreadable, empty or lacks
            one of the recognized columns
    """
    if path is None:
        path = CONFIG["data_path"]

    if not os.path.isfile(path):
        raise DatasetLoadError(f"Volcano dataset not found: {path}")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise DatasetLoadError(f"Volcano dataset is empty: {path}") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Could not parse volcano dataset {path}: {str(e)}") from e

    columns = [str(c) for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in columns]
    if missing:
        raise DatasetLoadError(
            f"Volcano dataset {path} is missing required columns: {', '.join(missing)}"
        )

    latitudes = coerce_numeric(df[LATITUDE_COLUMN])
    longitudes = coerce_numeric(df[LONGITUDE_COLUMN])
    elevations = coerce_numeric(df[ELEVATION_COLUMN])

    records = []
    for i, row in enumerate(df.itertuples(index=False, name=None)):
        records.append(VolcanoRecord(
            index=i,
            fields=dict(zip(columns, row)),
            latitude=latitudes[i],
            longitude=longitudes[i],
            elevation=elevations[i],
        ))

    no_location = sum(1 for r in records if not r.has_location)
    no_elevation = sum(1 for r in records if r.elevation is None)
    logger.info(f"Loaded {len(records)} volcanoes with {len(columns)} columns from {path}")
    if no_location or no_elevation:
        logger.info(
            f"{no_location} rows without valid coordinates, "
            f"{no_elevation} rows without valid elevation"
        )

    return VolcanoDataset(columns=columns, records=records, source=path)


@st.cache_data(show_spinner="Loading volcano data...")
def get_volcano_data(path: Optional[str] = None) -> VolcanoDataset:
    """
    Cached wrapper around load_volcano_dataset used by the views.

    Args:
        path (str, optional): CSV path, defaults to CONFIG["data_path"]

    Returns:
        VolcanoDataset: The loaded dataset
    """
    return load_volcano_dataset(path)
