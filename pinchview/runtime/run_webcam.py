from __future__ import annotations

import argparse
import json
import logging
import time
from dataclasses import replace

import cv2

from pinchview.core.config import GesturePolicy, PRESETS, PresetName, apply_profile
from pinchview.core.types import EventType, Viewport
from pinchview.interpreter.state_machine import FrameInterpreter
from pinchview.runtime.calibration import ScaleCalibrator, save_profile, load_profile
from pinchview.runtime.layout import ThumbnailGrid
from pinchview.sensor.webcam_mp import CameraError, WebcamMPSrc
from pinchview.tools.feel_recorder import FeelRecorder
from pinchview.ui.render import render

log = logging.getLogger("pinchview.webcam")

WINDOW = "PinchView"
PREVIEW = "PinchView Camera"


def _viewport_of(window: str, fallback: Viewport) -> Viewport:
    # window may be resized between ticks
    try:
        _, _, w, h = cv2.getWindowImageRect(window)
    except cv2.error:
        return fallback
    if w <= 0 or h <= 0:
        return fallback
    return Viewport(width=w, height=h)


def main():
    ap = argparse.ArgumentParser(description="PinchView webcam runtime")
    ap.add_argument("--camera", type=int, default=0)
    ap.add_argument("--preset", default=PresetName.DEFAULT.value, choices=[p.value for p in PresetName])
    ap.add_argument("--close-on-pinch", action="store_true",
                    help="also close the viewer by pinching the close button")
    ap.add_argument("--no-log", action="store_true", help="disable the feel log")
    ap.add_argument("--preview", action="store_true", help="show the camera with landmarks")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    preset = PRESETS[PresetName(args.preset)]
    try:
        preset = apply_profile(preset, load_profile())
        print(f"[Calibration] far={preset.scale.far_px:.0f}px near={preset.scale.near_px:.0f}px")
    except (ValueError, TypeError, json.JSONDecodeError) as e:
        print(f"[Calibration] failed to apply profile ({e}); using preset defaults")
    if args.close_on_pinch:
        preset = replace(preset, policy=GesturePolicy(close_on_pinch=True))

    try:
        src = WebcamMPSrc(cam_index=args.camera)
    except CameraError as e:
        print(f"[PinchView] {e}")
        return

    viewport = Viewport(width=1280, height=720)
    cv2.namedWindow(WINDOW, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW, int(viewport.width), int(viewport.height))

    grid = ThumbnailGrid(viewport)
    interp = FrameInterpreter(preset, hit_test=grid.hit_test)

    cal = ScaleCalibrator()
    calibrating = False

    rec = None if args.no_log else FeelRecorder()
    if rec is not None:
        print(f"[FeelLog] writing {rec.path}")

    print("[PinchView] Webcam runtime. Index = cursor, pinch opens, thumbs-up closes.")
    print("  ESC = quit, C = calibrate closeness")

    try:
        while True:
            result, frame = src.read()
            if result is None:
                time.sleep(0.005)
                continue

            vp = _viewport_of(WINDOW, viewport)
            if vp != viewport:
                viewport = vp
                grid.relayout(viewport)

            out = interp.advance(result, viewport)
            for ev in out.events:
                if ev.type == EventType.OPEN:
                    print(f"[PinchView] OPEN file {ev.open.item_id}")
                elif ev.type == EventType.CLOSE:
                    print("[PinchView] CLOSE viewer")
            if out.diagnostic is not None:
                d = out.diagnostic
                log.debug("handScalePx(raw=%.1f smooth=%.1f) t=%.2f", d.raw_px, d.smooth_px, d.t)

            if rec is not None:
                rec.write(result, viewport, out)

            img = render(grid, out, result.hand)

            # calibration wizard: overlay instruction and collect samples when active
            if calibrating:
                cal.update(result.hand, viewport, result.t_ms)
                cv2.putText(img, cal.instruction(), (12, 32), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (200, 200, 200), 2)
                if cal.done:
                    r = cal.finalize(preset.scale.far_px, preset.scale.near_px)
                    path = save_profile(r)
                    print(f"[Calibration] saved profile {path}: {r}")
                    preset = apply_profile(preset, r.__dict__)
                    interp.scale.calibration = preset.scale
                    calibrating = False

            cv2.imshow(WINDOW, img)
            if args.preview and frame is not None:
                src.draw_last(frame)
                cv2.imshow(PREVIEW, cv2.flip(frame, 1))

            key = cv2.waitKey(1) & 0xFF
            if key == 27:  # ESC
                break
            if key in (ord('c'), ord('C')):
                calibrating = True
                cal.start()
    finally:
        if rec is not None:
            rec.close()
        src.close()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
