"""
Pydantic data models for the SigilForge scene description.

Every stage of the geometry pipeline hands its results on through these
validated models. Geometry records are frozen so a finished Sigil can be
passed to a renderer as a read-only snapshot.
Content-based ID generation keeps outputs deterministic.
"""

import hashlib
import math
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LayoutMode(str, Enum):
    """Point-placement geometries. Declaration order is the tie-break order."""
    STANDARD = "standard"
    VENN = "venn"
    EXTRA_RINGS = "extra_rings"
    SATELLITE = "satellite"


class PointGroup(str, Enum):
    """Circle a point belongs to in multi-circle layouts."""
    MAIN = "main"
    LEFT = "left"
    RIGHT = "right"
    SATELLITE = "satellite"


class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


_FROZEN = ConfigDict(extra="forbid", frozen=True)


class LetterSet(BaseModel):
    """Ordered unique consonants of a phrase and their alphabet positions."""
    letters: Tuple[str, ...] = ()
    numbers: Tuple[int, ...] = ()

    model_config = _FROZEN

    @model_validator(mode="after")
    def _check_parallel(self):
        if len(self.letters) != len(self.numbers):
            raise ValueError(
                f"letters and numbers differ in length: {len(self.letters)} != {len(self.numbers)}"
            )
        return self

    def __len__(self):
        return len(self.letters)


class Point(BaseModel):
    """A placed letter. circle_cx/circle_cy is the centre of the circle it sits on."""
    letter: str
    number: int
    index: int
    ring_index: int
    position_in_ring: int
    ring_total: int
    radius: float
    x: float
    y: float
    angle: float
    group: PointGroup = PointGroup.MAIN
    circle_cx: float
    circle_cy: float

    model_config = _FROZEN


class LineSegment(BaseModel):
    """Straight stroke segment."""
    kind: Literal["line"] = "line"
    index: int
    start: Point
    end: Point

    model_config = _FROZEN


class ArcSegment(BaseModel):
    """Stroke segment following the shorter arc of a ring."""
    kind: Literal["arc"] = "arc"
    index: int
    start: Point
    end: Point
    center_x: float
    center_y: float
    radius: float

    model_config = _FROZEN


Segment = Annotated[Union[LineSegment, ArcSegment], Field(discriminator="kind")]


class RawIntersection(BaseModel):
    """A single detected crossing between two segments."""
    x: float
    y: float
    segment_indices: Tuple[int, int]
    crossing_angle: float

    model_config = _FROZEN


class ConsolidatedIntersection(BaseModel):
    """One or more nearby crossings merged into a representative point."""
    x: float
    y: float
    segment_indices: Tuple[int, ...]
    crossing_angle: float
    consolidated: int = 1
    use_circle: bool = False

    model_config = _FROZEN


class HeatCell(BaseModel):
    """One cell of the crowding grid. x/y is the top-left corner."""
    grid_x: int
    grid_y: int
    x: float
    y: float
    count: int = 0
    members: Tuple[RawIntersection, ...] = ()

    model_config = _FROZEN


class HeatZone(BaseModel):
    """A connected cluster of warm cells."""
    center_x: float
    center_y: float
    radius: float
    severity: int
    cells: Tuple[Tuple[int, int], ...] = ()

    model_config = _FROZEN


class HeatAnalysis(BaseModel):
    """Crowding diagnostic for one layout."""
    grid_size: int
    cell_size: float
    cells: Tuple[HeatCell, ...] = ()
    zones: Tuple[HeatZone, ...] = ()
    global_score: int = 0
    is_hot: bool = False

    model_config = _FROZEN


class GuideCircle(BaseModel):
    cx: float
    cy: float
    r: float

    model_config = _FROZEN


class GuideLine(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float

    model_config = _FROZEN


class Layout(BaseModel):
    """Placed points plus the guide geometry of one layout mode."""
    mode: LayoutMode
    size: float
    cx: float
    cy: float
    points: Tuple[Point, ...] = ()
    ring_radii: Tuple[float, ...] = ()
    max_radius: float = 0.0
    guides: Tuple[GuideCircle, ...] = ()
    connector: Optional[GuideLine] = None

    model_config = _FROZEN


def _fmt(value):
    return f"{value:.3f}"


class LinePrimitive(BaseModel):
    """Drawable straight piece (a line segment, or part of one after breaks)."""
    kind: Literal["line"] = "line"
    x1: float
    y1: float
    x2: float
    y2: float
    segment_index: int

    model_config = _FROZEN

    @property
    def d(self):
        return f"M {_fmt(self.x1)} {_fmt(self.y1)} L {_fmt(self.x2)} {_fmt(self.y2)}"


class ArcPrimitive(BaseModel):
    """Drawable circular arc. sweep is the SVG sweep flag (1 = positive angle)."""
    kind: Literal["arc"] = "arc"
    x1: float
    y1: float
    x2: float
    y2: float
    radius: float
    sweep: int
    segment_index: int

    model_config = _FROZEN

    @property
    def d(self):
        r = _fmt(self.radius)
        return (
            f"M {_fmt(self.x1)} {_fmt(self.y1)} "
            f"A {r} {r} 0 0 {self.sweep} {_fmt(self.x2)} {_fmt(self.y2)}"
        )


Drawable = Annotated[Union[LinePrimitive, ArcPrimitive], Field(discriminator="kind")]


class StartMarker(BaseModel):
    kind: Literal["start"] = "start"
    x: float
    y: float
    letter: str

    model_config = _FROZEN


class EndMarker(BaseModel):
    """Terminal point with its perpendicular bar."""
    kind: Literal["end"] = "end"
    x: float
    y: float
    letter: str
    incoming_angle: float
    bar_length: float

    model_config = _FROZEN

    @property
    def bar_tips(self):
        """Both ends of the bar as ((x1, y1), (x2, y2))."""
        perp = self.incoming_angle + math.pi / 2
        dx = math.cos(perp) * self.bar_length
        dy = math.sin(perp) * self.bar_length
        return (self.x + dx, self.y + dy), (self.x - dx, self.y - dy)


Marker = Annotated[Union[StartMarker, EndMarker], Field(discriminator="kind")]


class AcuteVertex(BaseModel):
    x: float
    y: float
    angle: float
    index: int

    model_config = _FROZEN


class DecorationDot(BaseModel):
    x: float
    y: float
    segment_index: int

    model_config = _FROZEN


class Sigil(BaseModel):
    """The complete generated figure for one phrase and one layout."""
    sigil_id: str
    mode: LayoutMode
    size: float
    points_per_ring: int
    layout: Layout
    segments: Tuple[Segment, ...] = ()
    drawables: Tuple[Drawable, ...] = ()
    raw_intersections: Tuple[RawIntersection, ...] = ()
    intersections: Tuple[ConsolidatedIntersection, ...] = ()
    markers: Tuple[Marker, ...] = ()
    acute_vertices: Tuple[AcuteVertex, ...] = ()
    arc_dots: Tuple[DecorationDot, ...] = ()

    model_config = _FROZEN

    @property
    def circle_joints(self):
        """Intersections drawn as circle markers."""
        return tuple(i for i in self.intersections if i.use_circle)

    @property
    def is_empty(self):
        return not self.segments and not self.markers

    @property
    def start_marker(self):
        return next((m for m in self.markers if m.kind == "start"), None)

    @property
    def end_marker(self):
        return next((m for m in self.markers if m.kind == "end"), None)


class SelectionResult(BaseModel):
    """Layouts computed for a phrase and the recommendation among them."""
    layouts: Dict[LayoutMode, Sigil] = Field(default_factory=dict)
    heat: HeatAnalysis
    heat_by_layout: Dict[LayoutMode, HeatAnalysis] = Field(default_factory=dict)
    scores: Optional[Dict[LayoutMode, int]] = None
    is_hot: bool = False
    recommended: LayoutMode = LayoutMode.STANDARD

    model_config = ConfigDict(extra="forbid")

    @property
    def has_alternatives(self):
        return self.scores is not None

    @property
    def recommended_sigil(self):
        return self.layouts[self.recommended]


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationReport(BaseModel):
    """Collection of validation check results."""
    checks: List[CheckResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self):
        """Check if any errors exist."""
        return any(c.severity == Severity.ERROR and not c.passed for c in self.checks)

    @property
    def error_count(self):
        """Count of failed error-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        """Count of failed warning-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)


class Scene(BaseModel):
    """Everything a pipeline run produced for one phrase (scene.json)."""
    phrase_id: str
    text: str
    letter_set: LetterSet
    chosen: LayoutMode
    selection: SelectionResult
    validation: Optional[ValidationReport] = None

    model_config = ConfigDict(extra="forbid")

    @property
    def chosen_sigil(self):
        return self.selection.layouts[self.chosen]


# ID generation functions for deterministic outputs

def generate_sigil_id(letters, size, points_per_ring, mode):
    """
    Generate deterministic sigil ID from the inputs that define a figure.
    """
    mode_value = mode.value if isinstance(mode, LayoutMode) else str(mode)
    data = f"{''.join(letters)}:{float(size)}:{points_per_ring}:{mode_value}"
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"sigil_{h}"


def generate_phrase_id(text):
    """
    Generate deterministic ID for an input phrase.

    Whitespace runs and letter case do not change the ID.
    """
    normalized = " ".join(text.lower().split())
    h = hashlib.sha256(normalized.encode()).hexdigest()[:16]
    return f"phrase_{h}"

