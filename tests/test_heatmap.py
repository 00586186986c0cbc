"""Tests for crowding analysis."""

import pytest


def _raw(x, y):
    from sigilforge.models import RawIntersection
    return RawIntersection(x=x, y=y, segment_indices=(0, 1), crossing_angle=90.0)


class TestBinning:
    """Tests for grid binning."""

    def test_cell_index_clamped(self):
        """Coordinates off the canvas land in the edge cells."""
        from sigilforge.analysis.heatmap import cell_index

        cell = 200 / 6
        assert cell_index(-5, cell, 6) == 0
        assert cell_index(200, cell, 6) == 5
        assert cell_index(250, cell, 6) == 5
        assert cell_index(40, cell, 6) == 1

    def test_counts_indexed_row_major(self):
        from sigilforge.analysis.heatmap import bin_intersections

        counts, members = bin_intersections([_raw(190, 10), _raw(195, 12)], 200.0, 6)

        assert counts.shape == (6, 6)
        assert counts[0, 5] == 2
        assert counts.sum() == 2
        assert len(members[(5, 0)]) == 2


class TestAnalyzeHeatmap:
    """Tests for zones and the global score."""

    def test_single_warm_cell(self, default_config):
        """One cell with two crossings is one zone of severity 2, and hot."""
        from sigilforge.analysis.heatmap import analyze_heatmap

        heat = analyze_heatmap([_raw(10, 10), _raw(20, 20)], 200.0, default_config)

        assert len(heat.zones) == 1
        zone = heat.zones[0]
        assert zone.severity == 2
        assert zone.cells == ((0, 0),)
        assert (zone.center_x, zone.center_y) == pytest.approx((100 / 6, 100 / 6))
        assert zone.radius == pytest.approx(200 / 6)
        assert heat.global_score == 2
        assert heat.is_hot is True

    def test_single_crossing_not_hot(self, default_config):
        from sigilforge.analysis.heatmap import analyze_heatmap

        heat = analyze_heatmap([_raw(10, 10)], 200.0, default_config)

        assert heat.zones == ()
        assert heat.global_score == 0
        assert heat.is_hot is False

    def test_empty(self, default_config):
        from sigilforge.analysis.heatmap import analyze_heatmap

        heat = analyze_heatmap([], 200.0, default_config)

        assert len(heat.cells) == 36
        assert heat.global_score == 0

    def test_diagonal_cells_join(self, default_config):
        """Diagonally touching warm cells form one zone."""
        from sigilforge.analysis.heatmap import analyze_heatmap

        raws = [_raw(10, 10), _raw(20, 20), _raw(40, 40), _raw(50, 50)]
        heat = analyze_heatmap(raws, 200.0, default_config)

        assert len(heat.zones) == 1
        zone = heat.zones[0]
        assert zone.severity == 4
        assert zone.cells == ((0, 0), (1, 1))
        assert (zone.center_x, zone.center_y) == pytest.approx((100 / 3, 100 / 3))

    def test_separate_zones(self, default_config):
        from sigilforge.analysis.heatmap import analyze_heatmap

        raws = [_raw(10, 10), _raw(20, 20), _raw(110, 110), _raw(120, 120)]
        heat = analyze_heatmap(raws, 200.0, default_config)

        assert len(heat.zones) == 2
        assert heat.global_score == 4

    def test_cells_row_major(self, default_config):
        from sigilforge.analysis.heatmap import analyze_heatmap

        heat = analyze_heatmap([_raw(150, 10)], 200.0, default_config)

        assert (heat.cells[1].grid_x, heat.cells[1].grid_y) == (1, 0)
        assert (heat.cells[6].grid_x, heat.cells[6].grid_y) == (0, 1)
        assert heat.cells[4].count == 1
        assert heat.cells[4].x == pytest.approx(4 * 200 / 6)

    def test_monotonic(self, default_config):
        """Adding crossings to a warm cell never lowers the score."""
        from sigilforge.analysis.heatmap import analyze_heatmap

        raws = [_raw(10, 10), _raw(20, 20), _raw(150, 150)]
        previous = analyze_heatmap(raws, 200.0, default_config).global_score

        for extra in [(15, 15), (25, 5), (45, 20), (160, 160), (5, 30)]:
            raws.append(_raw(*extra))
            score = analyze_heatmap(raws, 200.0, default_config).global_score
            assert score >= previous
            previous = score
