import math

import numpy as np


class OneEuroFilter:
    def __init__(self, t0, x0, dx0=0.0, min_cutoff=1.0, beta=0.0, d_cutoff=1.0):
        """
        One Euro filter over scalars or fixed-size vectors.

        Args:
            t0: Initial time (seconds)
            x0: Initial value (float or sequence)
            dx0: Initial derivative, default 0.0
            min_cutoff: Minimum cutoff frequency in Hz. Lower = less jitter when still.
            beta: Speed coefficient. Higher = less lag when moving fast.
            d_cutoff: Cutoff frequency for derivative smoothing (Hz).
        """
        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff

        self.x_prev = np.asarray(x0, dtype=float)
        self.dx_prev = np.zeros_like(self.x_prev) + dx0
        self.t_prev = float(t0)

    def _smoothing_factor(self, t_e, cutoff):
        r = 2 * math.pi * cutoff * t_e
        return r / (r + 1)

    def _exponential_smoothing(self, a, x, x_prev):
        return a * x + (1 - a) * x_prev

    def __call__(self, t, x):
        """
        Filter one sample.

        Returns:
            Filtered value, same shape as x (a float for scalar input)
        """
        x = np.asarray(x, dtype=float)
        t_e = t - self.t_prev

        if t_e <= 0.0:
            return self._output(self.x_prev)

        dx = (x - self.x_prev) / t_e
        a_d = self._smoothing_factor(t_e, self.d_cutoff)
        dx_hat = self._exponential_smoothing(a_d, dx, self.dx_prev)

        # Adaptive cutoff from the speed magnitude
        cutoff = self.min_cutoff + self.beta * float(np.linalg.norm(dx_hat))

        a = self._smoothing_factor(t_e, cutoff)
        x_hat = self._exponential_smoothing(a, x, self.x_prev)

        self.x_prev = x_hat
        self.dx_prev = dx_hat
        self.t_prev = t

        return self._output(x_hat)

    @staticmethod
    def _output(value):
        if value.ndim == 0:
            return float(value)
        return value.copy()
