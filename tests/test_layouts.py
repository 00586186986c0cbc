"""Tests for layout generation."""

import math
from collections import Counter

import pytest


ALL_MODES = ["standard", "venn", "extra_rings", "satellite"]


class TestPointConservation:
    """Every layout places exactly one point per letter."""

    @pytest.mark.parametrize("mode", ALL_MODES)
    @pytest.mark.parametrize("phrase", ["clarity and focus", "bcd", "the quick brown fox jumps over"])
    def test_point_count(self, mode, phrase):
        """Total placed points equals the letter count and every letter is placed once."""
        from sigilforge.io.load_phrase import extract_letters
        from sigilforge.layout.generators import generate_layout

        letter_set = extract_letters(phrase)
        layout = generate_layout(letter_set, 200.0, 5, mode)

        assert len(layout.points) == len(letter_set)
        assert sorted(p.index for p in layout.points) == list(range(len(letter_set)))

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_groups_partition_points(self, mode, clarity_letters):
        """ring_total matches the number of points sharing a ring and group."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(clarity_letters, 200.0, 5, mode)
        sizes = Counter((p.group, p.ring_index) for p in layout.points)

        assert sum(sizes.values()) == len(clarity_letters)
        for p in layout.points:
            assert p.ring_total == sizes[(p.group, p.ring_index)]

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_points_lie_on_their_circle(self, mode, clarity_letters):
        """Each point sits at its radius from its own circle centre."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(clarity_letters, 200.0, 5, mode)

        for p in layout.points:
            distance = math.hypot(p.x - p.circle_cx, p.y - p.circle_cy)
            assert distance == pytest.approx(p.radius)

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_fewer_than_two_letters(self, mode):
        """A single letter gives an empty layout."""
        from sigilforge.layout.generators import generate_layout
        from sigilforge.models import LetterSet

        layout = generate_layout(LetterSet(letters=("b",), numbers=(2,)), 200.0, 5, mode)

        assert layout.points == ()
        assert layout.cx == 100.0


class TestStandardLayout:
    """Tests for concentric ring placement."""

    def test_clarity_rings(self, clarity_letters):
        """Nine letters with 5 per ring fill two rings, the second with 4."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(clarity_letters, 200.0, 5, "standard")

        assert len(layout.ring_radii) == math.ceil(9 / 5)
        per_ring = Counter(p.ring_index for p in layout.points)
        assert per_ring == {0: 5, 1: 4}
        assert all(count <= 5 for count in per_ring.values())
        assert [p.ring_total for p in layout.points] == [5] * 5 + [4] * 4

    def test_ring_radii(self, clarity_letters):
        """Outer ring at 0.42 * size, rings spaced by half the innermost radius."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(clarity_letters, 200.0, 5, "standard")

        assert layout.ring_radii == pytest.approx((84.0, 56.0))
        assert layout.max_radius == pytest.approx(84.0)

    def test_first_point_at_top(self, clarity_letters):
        """Angles start at the top of the ring."""
        from sigilforge.layout.generators import generate_layout

        first = generate_layout(clarity_letters, 200.0, 5, "standard").points[0]

        assert first.angle == pytest.approx(-math.pi / 2)
        assert first.x == pytest.approx(100.0)
        assert first.y == pytest.approx(16.0)

    def test_centre_is_canvas_centre(self, clarity_letters):
        """Single-circle layouts use the canvas centre as every point's circle centre."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(clarity_letters, 200.0, 5, "standard")

        assert all(p.circle_cx == 100.0 and p.circle_cy == 100.0 for p in layout.points)
        assert len(layout.guides) == 2
        assert layout.connector is None


class TestExtraRingsLayout:
    """Tests for the reduced-capacity ring layout."""

    def test_reduced_ring_capacity(self, clarity_letters):
        """5 points per ring become 3, so nine letters need three rings."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(clarity_letters, 200.0, 5, "extra_rings")

        assert len(layout.ring_radii) == 3
        assert all(p.ring_total == 3 for p in layout.points)

    def test_minimum_capacity(self, clarity_letters):
        """Capacity never drops below 3."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(clarity_letters, 200.0, 3, "extra_rings")

        assert max(p.ring_total for p in layout.points) == 3


class TestVennLayout:
    """Tests for the two-circle layout."""

    def test_split_and_centres(self, clarity_letters):
        """First ceil(n/2) letters go left, the rest right, in input order."""
        from sigilforge.layout.generators import generate_layout
        from sigilforge.models import PointGroup

        layout = generate_layout(clarity_letters, 200.0, 5, "venn")

        left = [p for p in layout.points if p.group == PointGroup.LEFT]
        right = [p for p in layout.points if p.group == PointGroup.RIGHT]
        assert [p.index for p in left] == [0, 1, 2, 3, 4]
        assert [p.index for p in right] == [5, 6, 7, 8]

        # radius = 180 / 2.4, offset = 0.4 * radius
        assert left[0].radius == pytest.approx(75.0)
        assert left[0].circle_cx == pytest.approx(85.0)
        assert right[0].circle_cx == pytest.approx(115.0)
        assert all(p.ring_index == 0 for p in layout.points)


class TestSatelliteLayout:
    """Tests for the main ring plus satellite layout."""

    def test_ten_letters_split(self, ten_letters):
        """n=10 gives 7 main points and 3 satellite points."""
        from sigilforge.layout.generators import generate_layout
        from sigilforge.models import PointGroup

        layout = generate_layout(ten_letters, 200.0, 5, "satellite")

        main = [p for p in layout.points if p.group == PointGroup.MAIN]
        satellite = [p for p in layout.points if p.group == PointGroup.SATELLITE]
        assert len(main) == 7
        assert len(satellite) == 3

    def test_satellite_holds_highest_codes_in_input_order(self, ten_letters):
        """The three highest codes go to the satellite, in their original order."""
        from sigilforge.layout.generators import generate_layout
        from sigilforge.models import PointGroup

        layout = generate_layout(ten_letters, 200.0, 5, "satellite")
        satellite = [p for p in layout.points if p.group == PointGroup.SATELLITE]

        assert [p.letter for p in satellite] == ["k", "l", "m"]
        assert [p.position_in_ring for p in satellite] == [0, 1, 2]
        assert all(p.ring_index == 1 for p in satellite)

    def test_highest_codes_not_at_the_end(self):
        """Satellite membership follows the codes, not input position."""
        from sigilforge.layout.generators import generate_layout
        from sigilforge.models import LetterSet, PointGroup

        letters = ("z", "b", "c", "y", "d")
        letter_set = LetterSet(letters=letters, numbers=tuple(ord(ch) - 96 for ch in letters))
        layout = generate_layout(letter_set, 200.0, 5, "satellite")

        # ceil(5 * 0.7) = 4 main, 1 satellite
        satellite = [p.letter for p in layout.points if p.group == PointGroup.SATELLITE]
        assert satellite == ["z"]

    def test_geometry(self, ten_letters):
        """Main and satellite circles sit side by side with a connector between them."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(ten_letters, 200.0, 5, "satellite")

        assert layout.ring_radii == pytest.approx((58.0, 29.0))
        assert layout.guides[0].cx == pytest.approx(68.0)
        assert layout.guides[1].cx == pytest.approx(161.0)
        assert layout.connector.x1 == pytest.approx(126.0)
        assert layout.connector.x2 == pytest.approx(132.0)

    def test_no_satellite_no_connector(self, three_letters):
        """When every letter fits the main ring there is no connector."""
        from sigilforge.layout.generators import generate_layout

        layout = generate_layout(three_letters, 200.0, 5, "satellite")

        assert len(layout.points) == 3
        assert layout.connector is None
        assert len(layout.guides) == 1
