"""Tests for layout selection."""

import pytest


def _heat(score):
    from sigilforge.models import HeatAnalysis
    return HeatAnalysis(grid_size=6, cell_size=200 / 6, global_score=score, is_hot=score >= 2)


class TestRecommend:
    """Tests for picking the least crowded layout."""

    def test_lowest_score(self):
        from sigilforge.layout.selector import recommend
        from sigilforge.models import LayoutMode

        scores = {
            LayoutMode.STANDARD: 6,
            LayoutMode.VENN: 4,
            LayoutMode.EXTRA_RINGS: 2,
            LayoutMode.SATELLITE: 3,
        }
        assert recommend(scores) == LayoutMode.EXTRA_RINGS

    def test_tie_goes_to_first_declared(self):
        from sigilforge.layout.selector import recommend
        from sigilforge.models import LayoutMode

        scores = {
            LayoutMode.SATELLITE: 2,
            LayoutMode.VENN: 2,
            LayoutMode.STANDARD: 5,
        }
        assert recommend(scores) == LayoutMode.VENN


class TestSelectLayout:
    """Tests for select_layout."""

    def test_calm_standard_only(self, three_letters, default_config):
        """A crossing-free standard layout is the only one built."""
        from sigilforge.layout.selector import select_layout
        from sigilforge.models import LayoutMode

        result = select_layout(three_letters, 200.0, 5, config=default_config)

        assert list(result.layouts) == [LayoutMode.STANDARD]
        assert result.scores is None
        assert not result.has_alternatives
        assert result.is_hot is False
        assert result.recommended == LayoutMode.STANDARD
        assert result.recommended_sigil is result.layouts[LayoutMode.STANDARD]

    def test_force_all(self, clarity_letters, default_config):
        """Forcing builds and scores every layout in declaration order."""
        from sigilforge.layout.selector import select_layout
        from sigilforge.models import LayoutMode

        result = select_layout(clarity_letters, 200.0, 5, force_all=True, config=default_config)

        assert list(result.layouts) == list(LayoutMode)
        assert set(result.scores) == set(LayoutMode)
        assert result.scores[LayoutMode.STANDARD] == result.heat.global_score
        best = min(result.scores.values())
        assert result.scores[result.recommended] == best

    def test_heat_from_raw_intersections(self, clarity_letters, default_config):
        """Scores come from the raw crossings of each layout."""
        from sigilforge.analysis.heatmap import analyze_heatmap
        from sigilforge.layout.selector import select_layout

        result = select_layout(clarity_letters, 200.0, 5, force_all=True, config=default_config)

        for mode, sigil in result.layouts.items():
            expected = analyze_heatmap(sigil.raw_intersections, 200.0, default_config)
            assert result.heat_by_layout[mode] == expected

    def test_hot_standard_builds_alternatives(self, clarity_letters, default_config, monkeypatch):
        """A crowded standard layout triggers scoring of all layouts."""
        import sigilforge.layout.selector as selector
        from sigilforge.models import LayoutMode

        scores = iter([5, 3, 1, 1])
        monkeypatch.setattr(selector, "analyze_heatmap", lambda raw, size, config: _heat(next(scores)))

        result = selector.select_layout(clarity_letters, 200.0, 5, config=default_config)

        assert result.is_hot is True
        assert result.scores == {
            LayoutMode.STANDARD: 5,
            LayoutMode.VENN: 3,
            LayoutMode.EXTRA_RINGS: 1,
            LayoutMode.SATELLITE: 1,
        }
        assert result.recommended == LayoutMode.EXTRA_RINGS
        assert result.heat.global_score == 5

    def test_empty_letter_set(self, default_config):
        from sigilforge.layout.selector import select_layout
        from sigilforge.models import LayoutMode, LetterSet

        result = select_layout(LetterSet(), 200.0, 5, config=default_config)

        assert result.recommended == LayoutMode.STANDARD
        assert result.recommended_sigil.is_empty

    def test_default_config(self, three_letters):
        from sigilforge.layout.selector import select_layout

        assert select_layout(three_letters, 200.0, 5).recommended.value == "standard"

    def test_debug_dumps(self, three_letters, default_config, temp_dir):
        import os

        from sigilforge.layout.selector import select_layout

        select_layout(three_letters, 200.0, 5, config=default_config, debug_root=temp_dir)

        assert os.path.exists(os.path.join(temp_dir, "debug", "standard", "stage5", "heat.json"))

    @pytest.mark.parametrize("points_per_ring", [3, 5, 12])
    def test_point_conservation_all_layouts(self, clarity_letters, default_config, points_per_ring):
        from sigilforge.layout.selector import select_layout

        result = select_layout(clarity_letters, 200.0, points_per_ring, force_all=True, config=default_config)

        for sigil in result.layouts.values():
            assert len(sigil.layout.points) == 9
            assert len(sigil.segments) == 8
