"""
Demo presentation layout: a row of thumbnails plus the viewer's close button,
laid out in viewport pixels. Implements the interpreter's hit-test capability.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from pinchview.core.types import Target, TargetKind, Viewport


@dataclass(frozen=True)
class DemoFile:
    id: str
    name: str
    color: Tuple[int, int, int]   # BGR, stands in for the image


FILES: Tuple[DemoFile, ...] = (
    DemoFile(id="1", name="Mountains", color=(140, 110, 60)),
    DemoFile(id="2", name="City", color=(90, 90, 160)),
    DemoFile(id="3", name="Forest", color=(60, 140, 60)),
)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.x + self.w and self.y <= py < self.y + self.h


class ThumbnailGrid:
    """
    Single-row grid centred vertically; close button in the top-right corner.
    The close button only exists while the viewer is open, which the
    interpreter already expresses through the eligible kinds.
    """

    def __init__(self, viewport: Viewport, files: Tuple[DemoFile, ...] = FILES,
                 margin_frac: float = 0.05, close_size_px: float = 64.0) -> None:
        self.files = files
        self.margin_frac = margin_frac
        self.close_size_px = close_size_px
        self.cells: Tuple[Tuple[Target, Rect], ...] = ()
        self.close_rect = Rect(0, 0, 0, 0)
        self.viewport = viewport
        self.relayout(viewport)

    def relayout(self, viewport: Viewport) -> None:
        self.viewport = viewport
        n = max(1, len(self.files))
        m = self.margin_frac * viewport.width
        cell_w = (viewport.width - m * (n + 1)) / n
        cell_h = min(cell_w * 0.75, viewport.height * 0.6)
        top = (viewport.height - cell_h) / 2.0
        self.cells = tuple(
            (Target(TargetKind.ITEM, f.id), Rect(m + i * (cell_w + m), top, cell_w, cell_h))
            for i, f in enumerate(self.files)
        )
        s = self.close_size_px
        self.close_rect = Rect(viewport.width - s - 16, 16, s, s)

    def hit_test(self, x: float, y: float, eligible: FrozenSet[TargetKind]) -> Optional[Target]:
        # close button sits above the grid
        if TargetKind.CLOSE in eligible and self.close_rect.contains(x, y):
            return Target(TargetKind.CLOSE, "close")
        if TargetKind.ITEM in eligible:
            for target, rect in self.cells:
                if rect.contains(x, y):
                    return target
        return None

    def rect_of(self, item_id: str) -> Optional[Rect]:
        for target, rect in self.cells:
            if target.id == item_id:
                return rect
        return None

    def file_of(self, item_id: str) -> Optional[DemoFile]:
        for f in self.files:
            if f.id == item_id:
                return f
        return None
