from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from pinchview.core.config import DEFAULT_PRESET, PRESETS, Preset, PresetName
from pinchview.core.types import EventType, TickOutput
from pinchview.interpreter.state_machine import FrameInterpreter
from pinchview.runtime.layout import ThumbnailGrid
from pinchview.tools.feel_recorder import read_trace


def replay(path: Path, preset: Preset = DEFAULT_PRESET) -> List[TickOutput]:
    """Feed a recorded session through a fresh interpreter against the demo layout."""
    grid = None
    interp = None
    outs: List[TickOutput] = []
    for result, viewport in read_trace(path):
        if grid is None:
            grid = ThumbnailGrid(viewport)
            interp = FrameInterpreter(preset, hit_test=grid.hit_test)
        elif viewport != grid.viewport:
            grid.relayout(viewport)
        outs.append(interp.advance(result, viewport))
    return outs


def main():
    ap = argparse.ArgumentParser(description="Replay a PinchView feel log")
    ap.add_argument("path", type=Path)
    ap.add_argument("--preset", default=PresetName.DEFAULT.value,
                    choices=[p.value for p in PresetName])
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    outs = replay(args.path, PRESETS[PresetName(args.preset)])
    n_open = n_close = 0
    for out in outs:
        for ev in out.events:
            if ev.type == EventType.OPEN:
                n_open += 1
                print(f"[Replay] t={out.t_ms:.0f} OPEN {ev.open.item_id}")
            elif ev.type == EventType.CLOSE:
                n_close += 1
                print(f"[Replay] t={out.t_ms:.0f} CLOSE")
    print(f"[Replay] {len(outs)} ticks, {n_open} open, {n_close} close")


if __name__ == "__main__":
    main()
