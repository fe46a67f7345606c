from __future__ import annotations

import logging
from typing import Callable, FrozenSet, Optional

from pinchview.core.config import Preset
from pinchview.core.types import (
    DetectionResult, HandFrame, Viewport,
    Target, TargetKind, Mode,
    GestureEvent, EventType, HoverChange, OpenRequest,
    ScaleSample, TickOutput,
)
from pinchview.interpreter.detectors import PinchDetector, ThumbsUpDetector
from pinchview.interpreter.hover import HoverStabilizer
from pinchview.interpreter.trackers import CursorTracker, ScaleTracker

log = logging.getLogger(__name__)

# (x, y, eligible kinds) -> topmost eligible target at that display point, or None
HitTest = Callable[[float, float, FrozenSet[TargetKind]], Optional[Target]]

ELIGIBLE = {
    Mode.BROWSING: frozenset({TargetKind.ITEM}),
    Mode.VIEWING: frozenset({TargetKind.CLOSE}),
}


class FrameInterpreter:
    """
    Deterministic per-tick interpreter.
    Converts DetectionResult -> TickOutput (pointer state + discrete events).

    Pure and synchronous: the host owns timing and calls advance() once per
    displayed frame. One instance per session; instances share nothing.
    """

    def __init__(self, preset: Preset, hit_test: HitTest, mode: Mode = Mode.BROWSING) -> None:
        self.preset = preset
        self.hit_test = hit_test

        self.mode: Mode = mode
        self.selected: Optional[Target] = None

        self.cursor = CursorTracker(preset.pos_filter)
        self.scale = ScaleTracker(preset.scale_filter, preset.scale)
        self.pinch = PinchDetector(preset.pinch)
        self.thumbs_up = ThumbsUpDetector(preset.thumbs_up)
        self.hover: HoverStabilizer[Target] = HoverStabilizer(preset.hover.dwell_ms)

        self._last_seen_ms: float | None = None
        self._last_tick_ms: float | None = None
        self._was_pinching = False
        self._was_thumbs_up = False
        self._lost = True
        self._last_scale_log_ms: float | None = None
        self._last_output: TickOutput | None = None

    def advance(self, result: DetectionResult, viewport: Viewport) -> TickOutput:
        t_ms = result.t_ms

        # detector has not advanced: no state change, no events
        if self._last_tick_ms is not None and t_ms <= self._last_tick_ms and self._last_output is not None:
            return self._output(t_ms, hand_present=self._last_output.hand_present, events=[])
        self._last_tick_ms = t_ms

        if result.hand is not None:
            out = self._hand_present(result.hand, viewport, t_ms)
        else:
            out = self._hand_absent(t_ms)
        self._last_output = out
        return out

    # ---------------------- hand present ----------------------

    def _hand_present(self, hand: HandFrame, viewport: Viewport, t_ms: float) -> TickOutput:
        events: list[GestureEvent] = []
        self._last_seen_ms = t_ms
        self._lost = False

        x, y = self.cursor.update(hand, viewport, t_ms)
        t = self.scale.update(hand, viewport, t_ms)

        eligible = ELIGIBLE[self.mode]
        raw = self.hit_test(x, y, eligible)
        if raw is not None and raw.kind not in eligible:
            raw = None
        self._emit_hover(self.hover.update(raw, t_ms), t_ms, events)

        pinching = self.pinch.update(hand)
        pinch_edge = pinching and not self._was_pinching
        self._was_pinching = pinching

        if pinch_edge:
            self._on_pinch(t_ms, events)

        thumbs_up = self.thumbs_up.update(hand)
        thumbs_edge = thumbs_up and not self._was_thumbs_up
        self._was_thumbs_up = thumbs_up

        if thumbs_edge and self.mode == Mode.VIEWING:
            self._close(t_ms, events)
            # stays active until a full release, so one pose closes once
            self.thumbs_up.hold()

        return self._output(t_ms, hand_present=True, events=events, diagnostic=self._maybe_sample(t_ms, t))

    def _on_pinch(self, t_ms: float, events: list[GestureEvent]) -> None:
        target = self.hover.current
        if self.mode == Mode.BROWSING:
            if target is not None and target.kind == TargetKind.ITEM:
                self._open(target, t_ms, events)
            else:
                log.debug("pinch down: nothing selected")
        elif self.preset.policy.close_on_pinch and target is not None and target.kind == TargetKind.CLOSE:
            self._close(t_ms, events)

    def _open(self, target: Target, t_ms: float, events: list[GestureEvent]) -> None:
        self.selected = target
        self.mode = Mode.VIEWING
        log.info("OPEN item %s", target.id)
        events.append(GestureEvent(t_ms=t_ms, type=EventType.OPEN, open=OpenRequest(item_id=target.id)))

    def _close(self, t_ms: float, events: list[GestureEvent]) -> None:
        self.mode = Mode.BROWSING
        self.selected = None
        log.info("CLOSE viewer")
        events.append(GestureEvent(t_ms=t_ms, type=EventType.CLOSE))
        self._emit_hover(self.hover.clear(), t_ms, events)

    def _maybe_sample(self, t_ms: float, t: float) -> ScaleSample | None:
        interval = self.preset.diagnostics.scale_log_interval_ms
        if self._last_scale_log_ms is not None and (t_ms - self._last_scale_log_ms) <= interval:
            return None
        self._last_scale_log_ms = t_ms
        sample = ScaleSample(raw_px=self.scale.raw_px, smooth_px=self.scale.smooth_px, t=t)
        log.debug("handScalePx(raw=%.1f smooth=%.1f) t=%.2f", sample.raw_px, sample.smooth_px, sample.t)
        return sample

    # ---------------------- hand absent ----------------------

    def _hand_absent(self, t_ms: float) -> TickOutput:
        events: list[GestureEvent] = []
        within_grace = (
            self._last_seen_ms is not None
            and (t_ms - self._last_seen_ms) <= self.preset.tracking.grace_ms
        )
        if not within_grace and not self._lost:
            self._emit_hover(self.hover.clear(), t_ms, events)
            self.reset_tracking()
            self._lost = True
            log.info("hand lost (> %.0f ms), tracking reset", self.preset.tracking.grace_ms)
        return self._output(t_ms, hand_present=False, events=events)

    def reset_tracking(self) -> None:
        """Hard-reset every filter and debounce state. Mode and selection are kept."""
        self.cursor.reset()
        self.scale.reset()
        self.pinch.reset()
        self.thumbs_up.reset()
        self.hover.reset()
        self._was_pinching = False
        self._was_thumbs_up = False

    # ---------------------- helpers ----------------------

    def _emit_hover(self, change: HoverChange | None, t_ms: float, events: list[GestureEvent]) -> None:
        if change is not None:
            events.append(GestureEvent(t_ms=t_ms, type=EventType.HOVER_CHANGED, hover=change))

    def _output(self, t_ms: float, hand_present: bool, events: list[GestureEvent],
                diagnostic: ScaleSample | None = None) -> TickOutput:
        x, y = self.cursor.last_known()
        return TickOutput(
            t_ms=t_ms,
            cursor_x=x,
            cursor_y=y,
            intensity=self.scale.t,
            mode=self.mode,
            hovered=self.hover.current,
            selected=self.selected,
            hand_present=hand_present,
            events=tuple(events),
            diagnostic=diagnostic,
        )
