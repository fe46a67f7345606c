"""
PinchView — core contracts.

Detector feed → Interpreter → Presentation layer.
Everything that crosses a boundary is a frozen dataclass defined here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


# ============================================================
# Detector → Interpreter
# ============================================================

NUM_LANDMARKS = 21

# anatomical indices (MediaPipe hand model numbering)
WRIST = 0
THUMB_MCP = 2
THUMB_IP = 3
THUMB_TIP = 4
INDEX_MCP, INDEX_PIP, INDEX_TIP = 5, 6, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_TIP = 9, 10, 12
RING_MCP, RING_PIP, RING_TIP = 13, 14, 16
PINKY_MCP, PINKY_PIP, PINKY_TIP = 17, 18, 20

# (tip, pip, mcp) for the four non-thumb fingers
FINGERS: Tuple[Tuple[int, int, int], ...] = (
    (INDEX_TIP, INDEX_PIP, INDEX_MCP),
    (MIDDLE_TIP, MIDDLE_PIP, MIDDLE_MCP),
    (RING_TIP, RING_PIP, RING_MCP),
    (PINKY_TIP, PINKY_PIP, PINKY_MCP),
)


@dataclass(frozen=True)
class Landmark:
    """One tracked point, normalized image coordinates (y grows downward)."""
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class HandFrame:
    """All 21 landmarks of one detected hand at one instant."""
    landmarks: Tuple[Landmark, ...]

    def __post_init__(self) -> None:
        if len(self.landmarks) != NUM_LANDMARKS:
            raise ValueError(f"HandFrame needs {NUM_LANDMARKS} landmarks, got {len(self.landmarks)}")

    def __getitem__(self, i: int) -> Landmark:
        return self.landmarks[i]


@dataclass(frozen=True)
class DetectionResult:
    """A timestamped detector output: zero or one hand."""
    t_ms: float
    hand: Optional[HandFrame] = None


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be positive, got {self.width}x{self.height}")


# ============================================================
# Hit-test boundary
# ============================================================

class TargetKind(str, Enum):
    ITEM = "ITEM"     # selectable thumbnail
    CLOSE = "CLOSE"   # viewer close affordance


@dataclass(frozen=True)
class Target:
    kind: TargetKind
    id: str


# ============================================================
# Interpreter → Presentation
# ============================================================

class Mode(str, Enum):
    BROWSING = "BROWSING"
    VIEWING = "VIEWING"


class EventType(str, Enum):
    HOVER_CHANGED = "HOVER_CHANGED"
    OPEN = "OPEN"
    CLOSE = "CLOSE"


@dataclass(frozen=True)
class HoverChange:
    previous: Optional[Target]
    next: Optional[Target]


@dataclass(frozen=True)
class OpenRequest:
    item_id: str


@dataclass(frozen=True)
class GestureEvent:
    """
    A single discrete output event.

    At most ONE payload field is non-None depending on `type`
    (CLOSE carries none).
    """
    t_ms: float
    type: EventType
    hover: Optional[HoverChange] = None
    open: Optional[OpenRequest] = None


@dataclass(frozen=True)
class ScaleSample:
    """Periodic raw/smoothed hand size, for calibrating far/near."""
    raw_px: float
    smooth_px: float
    t: float


@dataclass(frozen=True)
class TickOutput:
    t_ms: float
    cursor_x: float
    cursor_y: float
    intensity: float
    mode: Mode
    hovered: Optional[Target]
    selected: Optional[Target]
    hand_present: bool
    events: Tuple[GestureEvent, ...] = ()
    diagnostic: Optional[ScaleSample] = None


def clamp01(x: float) -> float:
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


def ease_out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
