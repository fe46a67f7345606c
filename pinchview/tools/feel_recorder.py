from __future__ import annotations

import json
import time
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Tuple

from pinchview.core.types import DetectionResult, HandFrame, Landmark, TickOutput, Viewport

"""
PinchView Feel Recorder
Writes JSONL logs to ~/.cache/pinchview/feel_logs/feel_<timestamp>.jsonl
One line = one tick's detection + viewport + interpreter output.
The detection part is enough to replay the session (see tools/replay.py).
"""


def _ser(x):
    if x is None:
        return None
    if isinstance(x, Enum):
        return x.value
    if is_dataclass(x):
        return {k: _ser(v) for k, v in asdict(x).items()}
    if isinstance(x, dict):
        return {k: _ser(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_ser(v) for v in x]
    return x


def log_path() -> Path:
    outdir = Path.home() / ".cache" / "pinchview" / "feel_logs"
    outdir.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y%m%d_%H%M%S")
    return outdir / f"feel_{ts}.jsonl"


class FeelRecorder:

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else log_path()
        self.path.expanduser().parent.mkdir(parents=True, exist_ok=True)
        self._f = open(self.path, "a", buffering=1)

    def write(self, result: DetectionResult, viewport: Viewport, out: TickOutput) -> None:
        hand = None
        if result.hand is not None:
            hand = [[lm.x, lm.y, lm.z] for lm in result.hand.landmarks]
        rec = {
            "t_ms": result.t_ms,
            "viewport": [viewport.width, viewport.height],
            "hand": hand,
            "mode": out.mode.value,
            "cursor": [out.cursor_x, out.cursor_y],
            "t": out.intensity,
            "hovered": out.hovered.id if out.hovered else None,
            "events": _ser(list(out.events)),
        }
        self._f.write(json.dumps(rec) + "\n")

    def close(self) -> None:
        self._f.close()

    def __enter__(self) -> "FeelRecorder":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def read_trace(path: Path) -> Iterator[Tuple[DetectionResult, Viewport]]:
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            rec = json.loads(line)
            hand = None
            if rec.get("hand"):
                hand = HandFrame(landmarks=tuple(Landmark(x=p[0], y=p[1], z=p[2]) for p in rec["hand"]))
            w, h = rec["viewport"]
            yield DetectionResult(t_ms=rec["t_ms"], hand=hand), Viewport(width=w, height=h)


if __name__ == "__main__":
    p = log_path()
    print(f"[FeelRecorder] next log would be {p}")
    print("[FeelRecorder] run_webcam records automatically; pass --no-log to disable.")
    print("[FeelRecorder] Replay a log with:")
    print(f"  python -m pinchview.tools.replay '{p}'")
