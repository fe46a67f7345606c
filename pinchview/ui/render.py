"""
Minimal OpenCV presentation: thumbnail grid, viewer, cursor and finger dots.
Reads TickOutput only; holds no gesture state.
"""
from __future__ import annotations

import cv2
import numpy as np

from pinchview.core.geometry import project_to_screen
from pinchview.core.types import HandFrame, Mode, TickOutput, TargetKind, lerp, THUMB_TIP, INDEX_TIP, Viewport
from pinchview.runtime.layout import ThumbnailGrid

WHITE = (255, 255, 255)
HOVER = (255, 200, 120)
SELECTED = (80, 220, 255)


def _pt(x: float, y: float):
    return int(round(x)), int(round(y))


def new_canvas(viewport: Viewport):
    return np.full((int(viewport.height), int(viewport.width), 3), 24, dtype=np.uint8)


def draw_grid(img, grid: ThumbnailGrid, out: TickOutput) -> None:
    for target, r in grid.cells:
        f = grid.file_of(target.id)
        cv2.rectangle(img, _pt(r.x, r.y), _pt(r.x + r.w, r.y + r.h), f.color, -1)
        if out.selected == target:
            cv2.rectangle(img, _pt(r.x, r.y), _pt(r.x + r.w, r.y + r.h), SELECTED, 6)
        elif out.hovered == target:
            cv2.rectangle(img, _pt(r.x, r.y), _pt(r.x + r.w, r.y + r.h), HOVER, 4)
        cv2.putText(img, f.name, _pt(r.x + 12, r.y + r.h - 40), cv2.FONT_HERSHEY_SIMPLEX, 0.8, WHITE, 2, cv2.LINE_AA)
        cv2.putText(img, "pinch to open", _pt(r.x + 12, r.y + r.h - 14), cv2.FONT_HERSHEY_SIMPLEX, 0.5, WHITE, 1, cv2.LINE_AA)


def draw_viewer(img, grid: ThumbnailGrid, out: TickOutput) -> None:
    vw, vh = grid.viewport.width, grid.viewport.height
    f = grid.file_of(out.selected.id) if out.selected else None
    color = f.color if f else (60, 60, 60)
    cv2.rectangle(img, _pt(vw * 0.05, vh * 0.05), _pt(vw * 0.95, vh * 0.95), color, -1)
    if f:
        cv2.putText(img, f.name, _pt(vw * 0.08, vh * 0.15), cv2.FONT_HERSHEY_SIMPLEX, 1.4, WHITE, 3, cv2.LINE_AA)
    cv2.putText(img, "thumbs-up to close", _pt(vw * 0.08, vh * 0.9), cv2.FONT_HERSHEY_SIMPLEX, 0.7, WHITE, 2, cv2.LINE_AA)

    r = grid.close_rect
    hovered = out.hovered is not None and out.hovered.kind == TargetKind.CLOSE
    cv2.rectangle(img, _pt(r.x, r.y), _pt(r.x + r.w, r.y + r.h), HOVER if hovered else (40, 40, 40), -1)
    cv2.line(img, _pt(r.x + 16, r.y + 16), _pt(r.x + r.w - 16, r.y + r.h - 16), WHITE, 3)
    cv2.line(img, _pt(r.x + r.w - 16, r.y + 16), _pt(r.x + 16, r.y + r.h - 16), WHITE, 3)


def draw_cursor(img, out: TickOutput) -> None:
    # diameter 14..34 px driven by closeness
    d = lerp(14, 34, out.intensity)
    color = WHITE if out.hand_present else (120, 120, 120)
    cv2.circle(img, _pt(out.cursor_x, out.cursor_y), int(d / 2), color, 2, cv2.LINE_AA)


def draw_finger_dots(img, hand: HandFrame, viewport: Viewport, t: float) -> None:
    tx, ty = project_to_screen(hand[THUMB_TIP], viewport)
    ix, iy = project_to_screen(hand[INDEX_TIP], viewport)
    cv2.circle(img, _pt(tx, ty), int(lerp(5, 16, t)), (230, 230, 230), 2, cv2.LINE_AA)
    cv2.circle(img, _pt(ix, iy), int(lerp(7, 22, t)), (255, 180, 120), 2, cv2.LINE_AA)


def render(grid: ThumbnailGrid, out: TickOutput, hand: HandFrame | None):
    img = new_canvas(grid.viewport)
    if out.mode == Mode.BROWSING:
        draw_grid(img, grid, out)
    else:
        draw_viewer(img, grid, out)
    if hand is not None:
        draw_finger_dots(img, hand, grid.viewport, out.intensity)
    draw_cursor(img, out)
    return img
