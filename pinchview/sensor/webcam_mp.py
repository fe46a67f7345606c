from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import cv2
import mediapipe as mp

from pinchview.core.types import DetectionResult, HandFrame, Landmark


class CameraError(RuntimeError):
    pass


@dataclass
class WebcamMPSrc:
    """
    Detector feed: OpenCV capture + MediaPipe Hands (single hand).

    Frames are NOT mirrored before detection; the interpreter mirrors x when
    projecting to screen. `read()` returns the raw BGR frame for previews.
    """
    cam_index: int = 0
    width: int = 1280
    height: int = 720

    def __post_init__(self) -> None:
        self.cap = cv2.VideoCapture(self.cam_index)
        if not self.cap.isOpened():
            raise CameraError(f"cannot open camera {self.cam_index}")
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=1,
            model_complexity=1,
            min_detection_confidence=0.6,
            min_tracking_confidence=0.6,
        )
        self.mp_draw = mp.solutions.drawing_utils
        self._last_raw = None

    def read(self) -> Tuple[Optional[DetectionResult], Optional[Any]]:
        ok, frame = self.cap.read()
        if not ok:
            return None, None

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        res = self.hands.process(rgb)

        t_ms = time.monotonic() * 1000.0

        if not res.multi_hand_landmarks:
            self._last_raw = None
            return DetectionResult(t_ms=t_ms, hand=None), frame

        raw = res.multi_hand_landmarks[0]
        self._last_raw = raw
        hand = HandFrame(landmarks=tuple(
            Landmark(x=float(lm.x), y=float(lm.y), z=float(lm.z)) for lm in raw.landmark
        ))
        return DetectionResult(t_ms=t_ms, hand=hand), frame

    def draw_last(self, frame) -> None:
        # skeleton overlay for the camera preview
        if self._last_raw is not None:
            self.mp_draw.draw_landmarks(frame, self._last_raw, self.mp_hands.HAND_CONNECTIONS)

    def close(self) -> None:
        self.hands.close()
        self.cap.release()
