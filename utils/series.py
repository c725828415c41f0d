# utils/series.py
"""Turn a SkillDataset into plot-ready (x, y) series, axis bounds and labels.

x values are epoch seconds, y values are the selected skill cast to float.
The y axis always runs from 0 to the last value: experience never goes down,
so the final point is also the maximum. Feeding a series that can decrease
through axis_bounds() will clip it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from skill_dataset import SkillDataset
from utils.skills import SKILL_CATALOG, SKILL_NAMES, skill_index, skill_value
from utils.timestamps import format_date

Point = Tuple[float, float]
Series = List[Point]

DEFAULT_SECONDARY_INDEX = skill_index("Hunter")
Y_LABEL_WIDTH = 13


class SelectionError(IndexError):
    """A skill index outside the catalog reached the extraction code."""

    def __init__(self, index: object):
        self.index = index
        super().__init__(f"skill index {index!r} outside catalog [0, {len(SKILL_CATALOG)})")


def check_index(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(SKILL_CATALOG):
        raise SelectionError(index)
    return index


def _series_for(dataset: SkillDataset, index: int) -> Series:
    return [(ts.epoch_seconds(), float(skill_value(snap, index))) for ts, snap in dataset.iter_ordered()]


def extract_series(dataset: SkillDataset, skill_index: Optional[int]) -> Optional[Series]:
    """
    Series for the selected skill.

    Returns None when nothing is selected or when the dataset is empty; both
    mean "nothing to draw", not an error. A bad index raises SelectionError.
    """
    if skill_index is None:
        return None
    check_index(skill_index)
    if dataset.is_empty():
        return None
    return _series_for(dataset, skill_index)


def secondary_series(dataset: SkillDataset, skill_index: int = DEFAULT_SECONDARY_INDEX) -> Optional[Series]:
    """Fixed comparison overlay, independent of the current selection."""
    return extract_series(dataset, skill_index)


@dataclass(frozen=True)
class ChartBounds:
    x: Tuple[float, float]
    y: Tuple[float, float]


def axis_bounds(series: Series) -> ChartBounds:
    """x spans first..last point, y spans 0..last value. One point collapses x to a single value."""
    if not series:
        raise ValueError("axis_bounds() needs at least one point")
    first_x = series[0][0]
    last_x, last_y = series[-1]
    return ChartBounds(x=(first_x, last_x), y=(0.0, last_y))


def x_labels(series: Series) -> List[str]:
    """Dates at the start, midpoint and end of the series."""
    start = series[0][0]
    end = series[-1][0]
    mid = start + (end - start) / 2
    return [format_date(start), format_date(mid), format_date(end)]


def format_amount(value: float) -> str:
    return f"{int(value):,}"


def y_labels(series: Series) -> List[str]:
    return [f"{0:>{Y_LABEL_WIDTH}}", f"{format_amount(series[-1][1]):>{Y_LABEL_WIDTH}}"]


@dataclass(frozen=True)
class ChartView:
    """Everything a renderer needs to draw one chart."""

    skill_name: str
    series: Series
    secondary_name: str
    secondary: Series
    bounds: ChartBounds
    x_labels: List[str]
    y_labels: List[str]


def build_chart(
    dataset: SkillDataset,
    selection: Optional[int],
    secondary_index: int = DEFAULT_SECONDARY_INDEX,
) -> Optional[ChartView]:
    series = extract_series(dataset, selection)
    if series is None:
        return None
    secondary = secondary_series(dataset, secondary_index) or []
    return ChartView(
        skill_name=SKILL_NAMES[selection],
        series=series,
        secondary_name=SKILL_NAMES[secondary_index],
        secondary=secondary,
        bounds=axis_bounds(series),
        x_labels=x_labels(series),
        y_labels=y_labels(series),
    )
