from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass

from pinchview.core.config import PRESETS, PresetName
from pinchview.core.types import DetectionResult, EventType, Viewport
from pinchview.interpreter.state_machine import FrameInterpreter
from pinchview.runtime.layout import ThumbnailGrid
from pinchview.tools.synthetic import hand, index_tip_wrist

CYCLE_MS = 10000


@dataclass
class FakeSource:
    """
    Deterministic scripted hand to validate runtime wiring, 10 s cycle:
    sweep onto the middle thumbnail, pinch (open), thumbs-up (close),
    a short dropout inside the grace window, a long one past it, drift back.
    """
    start_ms: float

    def frame(self, t_ms: float) -> DetectionResult:
        ph = (t_ms - self.start_ms) % CYCLE_MS

        if 5500 <= ph < 5700 or 6500 <= ph < 7500:
            return DetectionResult(t_ms=t_ms, hand=None)

        # index tip x in camera space; screen x is mirrored
        if ph < 2000:
            nx = 0.8 - 0.3 * (ph / 2000.0)
        elif ph >= 7500:
            nx = 0.5 + 0.3 * ((ph - 7500) / 2500.0)
        else:
            nx = 0.5
        wrist = index_tip_wrist((nx, 0.5))

        if 2000 <= ph < 2600:
            pose = "pinch"
        elif 3500 <= ph < 5000:
            pose = "thumbs_up"
        else:
            pose = "open"
        return DetectionResult(t_ms=t_ms, hand=hand(pose, norm_dist=0.1, wrist=wrist))


def run():
    ap = argparse.ArgumentParser(description="PinchView runtime loop with a fake hand source")
    ap.add_argument("--preset", default=PresetName.DEFAULT.value, choices=[p.value for p in PresetName])
    ap.add_argument("--seconds", type=float, default=0.0, help="stop after N seconds (0 = run until Ctrl+C)")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    viewport = Viewport(width=1280, height=720)
    grid = ThumbnailGrid(viewport)
    interp = FrameInterpreter(PRESETS[PresetName(args.preset)], hit_test=grid.hit_test)

    start = time.monotonic() * 1000.0
    src = FakeSource(start_ms=start)

    print("[PinchView] Runtime loop (FAKE SOURCE). Ctrl+C to exit.")

    try:
        while True:
            t_ms = time.monotonic() * 1000.0
            if args.seconds and (t_ms - start) > args.seconds * 1000.0:
                break

            out = interp.advance(src.frame(t_ms), viewport)
            for ev in out.events:
                if ev.type == EventType.OPEN:
                    print(f"[PinchView] OPEN {ev.open.item_id}")
                elif ev.type == EventType.CLOSE:
                    print("[PinchView] CLOSE")
                elif ev.type == EventType.HOVER_CHANGED:
                    prev = ev.hover.previous.id if ev.hover.previous else None
                    nxt = ev.hover.next.id if ev.hover.next else None
                    print(f"[PinchView] hover {prev} -> {nxt}")

            time.sleep(0.016)  # ~60Hz loop
    except KeyboardInterrupt:
        print("\n[PinchView] exiting")


if __name__ == "__main__":
    run()
