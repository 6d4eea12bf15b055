"""Project a (date, value) series onto a fixed chart canvas.

The canvas is ``WIDTH`` x ``HEIGHT`` logical units with ``PADDING`` on every
side; y grows downward, so higher values get smaller y. An empty series
projects to ``NO_DATA`` so callers render a placeholder instead of a chart.
"""

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from vitaltrack import formatting
from vitaltrack.config import TREND_LIMIT
from vitaltrack.models import WeightEntry

WIDTH = 460
HEIGHT = 140
PADDING = 24


@dataclass(frozen=True)
class TrendPoint:
    date: dt.date
    value: float


@dataclass(frozen=True)
class PlotPoint:
    x: float
    y: float
    value: float
    label: str
    date_label: str


@dataclass(frozen=True)
class TrendChart:
    points: List[PlotPoint]
    width: int
    height: int
    padding: int
    min_value: float
    max_value: float
    line_path: str
    area_path: str

    @property
    def baseline(self) -> float:
        return self.height - self.padding


class NoData:
    def __repr__(self) -> str:
        return "NO_DATA"

    def __bool__(self) -> bool:
        return False


NO_DATA = NoData()


def weight_series(records: Sequence[WeightEntry]) -> List[TrendPoint]:
    return [TrendPoint(r.date, round(r.weight_kg, 1)) for r in sorted(records, key=lambda r: r.date)]


def _path(points: Sequence[PlotPoint]) -> str:
    return " ".join(f"{'M' if i == 0 else 'L'} {p.x:g},{p.y:g}" for i, p in enumerate(points))


def project(
    points: Sequence[TrendPoint],
    unit: Optional[str] = None,
    width: int = WIDTH,
    height: int = HEIGHT,
    padding: int = PADDING,
    limit: int = TREND_LIMIT,
) -> Union[TrendChart, NoData]:
    if not points:
        return NO_DATA
    series = sorted(points, key=lambda p: p.date)[-limit:]
    values = [p.value for p in series]
    lo, hi = min(values), max(values)
    # A flat series would divide by zero; it is drawn along the baseline.
    span = (hi - lo) or 1
    inner_w = width - padding * 2
    inner_h = height - padding * 2
    last = max(len(series) - 1, 1)

    plotted = [
        PlotPoint(
            x=padding + (i / last) * inner_w,
            y=height - padding - ((p.value - lo) / span) * inner_h,
            value=p.value,
            label=formatting.with_unit(p.value, unit),
            date_label=formatting.short_date(p.date),
        )
        for i, p in enumerate(series)
    ]
    line = _path(plotted)
    base = height - padding
    area = f"{line} L {padding + inner_w:g},{base:g} L {padding:g},{base:g} Z"
    return TrendChart(
        points=plotted,
        width=width,
        height=height,
        padding=padding,
        min_value=lo,
        max_value=hi,
        line_path=line,
        area_path=area,
    )
