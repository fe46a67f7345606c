from __future__ import annotations

import math


def _alpha(cutoff_hz: float, dt: float) -> float:
    # smoothing factor from cutoff frequency at sampling period dt
    tau = 1.0 / (2.0 * math.pi * cutoff_hz)
    return 1.0 / (1.0 + tau / dt)


class OneEuro:
    """
    One Euro Filter (Casiez et al. 2012) over millisecond timestamps.
    Smooths jitter when slow, low latency when fast.

    One instance per scalar signal; state is never shared.
    """

    def __init__(self, min_cutoff: float = 1.0, beta: float = 0.02, d_cutoff: float = 1.0):
        self.min_cutoff = float(min_cutoff)
        self.beta = float(beta)
        self.d_cutoff = float(d_cutoff)

        self._x: float | None = None
        self._dx: float = 0.0
        self._last_t: float | None = None

    @classmethod
    def from_params(cls, params) -> "OneEuro":
        return cls(min_cutoff=params.min_cutoff_hz, beta=params.beta, d_cutoff=params.d_cutoff_hz)

    @property
    def initialized(self) -> bool:
        return self._last_t is not None

    @property
    def value(self) -> float | None:
        return self._x

    def reset(self) -> None:
        self._x = None
        self._dx = 0.0
        self._last_t = None

    def apply(self, x: float, t_ms: float) -> float:
        if self._x is None or self._last_t is None:
            self._x = x
            self._dx = 0.0
            self._last_t = t_ms
            return x

        dt = max(1e-6, (t_ms - self._last_t) / 1000.0)

        # derivative of signal, itself low-passed at a fixed cutoff
        dx = (x - self._x) / dt
        edx = self._dx + _alpha(self.d_cutoff, dt) * (dx - self._dx)

        cutoff = self.min_cutoff + self.beta * abs(edx)
        a = _alpha(cutoff, dt)
        x_hat = self._x + a * (x - self._x)

        self._x = x_hat
        self._dx = edx
        self._last_t = t_ms
        return x_hat
