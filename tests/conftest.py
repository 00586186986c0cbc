"""Pytest fixtures for SigilForge tests."""

import tempfile

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Create default pipeline configuration."""
    from sigilforge.config import PipelineConfig
    return PipelineConfig()


@pytest.fixture
def clarity_letters():
    """Letter set of the phrase 'clarity and focus' (9 letters)."""
    from sigilforge.io.load_phrase import extract_letters
    return extract_letters("clarity and focus")


@pytest.fixture
def ten_letters():
    """Ten consonants in alphabetical order: b c d f g h j k l m."""
    from sigilforge.models import LetterSet
    letters = tuple("bcdfghjklm")
    return LetterSet(letters=letters, numbers=tuple(ord(ch) - 96 for ch in letters))


@pytest.fixture
def three_letters():
    """A single ring of three neighbouring letters: every segment is an arc."""
    from sigilforge.models import LetterSet
    return LetterSet(letters=("b", "c", "d"), numbers=(2, 3, 4))


@pytest.fixture
def make_point():
    """Factory for Point models at arbitrary coordinates."""
    from sigilforge.models import Point, PointGroup

    def _make(x, y, number=1, letter="a", ring_index=0, position=0, ring_total=1,
              radius=0.0, group=PointGroup.MAIN, cx=100.0, cy=100.0, index=0):
        return Point(
            letter=letter,
            number=number,
            index=index,
            ring_index=ring_index,
            position_in_ring=position,
            ring_total=ring_total,
            radius=radius,
            x=x,
            y=y,
            angle=0.0,
            group=group,
            circle_cx=cx,
            circle_cy=cy,
        )

    return _make


@pytest.fixture
def make_line(make_point):
    """Factory for LineSegment models between two coordinate pairs."""
    from sigilforge.models import LineSegment

    def _make(index, start, end):
        return LineSegment(
            index=index,
            start=make_point(*start),
            end=make_point(*end),
        )

    return _make
