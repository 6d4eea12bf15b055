import datetime as dt

import pytest

from conftest import days_before, weight
from vitaltrack.trend import HEIGHT, NO_DATA, PADDING, WIDTH, TrendPoint, project, weight_series


def series(values, start=dt.date(2026, 10, 1)):
    return [TrendPoint(start + dt.timedelta(days=i), v) for i, v in enumerate(values)]


class TestProject:
    def test_empty_series_is_no_data(self):
        chart = project([])
        assert chart is NO_DATA
        assert not chart

    def test_extremes_map_to_edges(self):
        chart = project(series([70.0, 72.5, 68.0, 71.0]))
        ys = [p.y for p in chart.points]
        assert ys[1] == min(ys) == pytest.approx(PADDING)
        assert ys[2] == max(ys) == pytest.approx(HEIGHT - PADDING)

    def test_x_strictly_increasing_and_spans_canvas(self):
        chart = project(series([3, 1, 2, 5, 4]))
        xs = [p.x for p in chart.points]
        assert all(a < b for a, b in zip(xs, xs[1:]))
        assert xs[0] == pytest.approx(PADDING)
        assert xs[-1] == pytest.approx(WIDTH - PADDING)

    def test_flat_series_sits_on_baseline(self):
        chart = project(series([70, 70, 70]))
        assert {p.y for p in chart.points} == {HEIGHT - PADDING}
        assert chart.baseline == HEIGHT - PADDING

    def test_single_point(self):
        chart = project(series([65.2]))
        assert len(chart.points) == 1
        assert chart.points[0].x == PADDING
        assert chart.points[0].y == HEIGHT - PADDING

    def test_sorts_and_keeps_last_fourteen(self):
        points = list(reversed(series(list(range(20)))))
        chart = project(points)
        assert len(chart.points) == 14
        assert [p.value for p in chart.points] == list(range(6, 20))
        assert chart.min_value == 6

    def test_labels(self):
        chart = project([TrendPoint(dt.date(2026, 3, 4), 71.4), TrendPoint(dt.date(2026, 3, 5), 72.0)], unit="kg")
        assert [p.label for p in chart.points] == ["71.4kg", "72kg"]
        assert [p.date_label for p in chart.points] == ["03/04", "03/05"]
        assert project(series([5.5])).points[0].label == "5.5"

    def test_paths(self):
        chart = project(series([1, 2]))
        assert chart.line_path == f"M {PADDING},{HEIGHT - PADDING} L {WIDTH - PADDING},{PADDING}"
        assert chart.area_path.startswith(chart.line_path)
        assert chart.area_path.endswith(f"L {WIDTH - PADDING},{HEIGHT - PADDING} L {PADDING},{HEIGHT - PADDING} Z")


class TestWeightSeries:
    def test_ascending_and_rounded(self):
        records = [weight("b", days_before(0), 71.44), weight("a", days_before(3), 72.08)]
        points = weight_series(records)
        assert [p.date for p in points] == [days_before(3), days_before(0)]
        assert [p.value for p in points] == [72.1, 71.4]
