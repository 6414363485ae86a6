"""Scalar signal filters: low-pass, rate limiter, moving average and their chain."""

from __future__ import annotations

from collections import deque

DEFAULT_WINDOW_SIZE = 5


class LowPassFilter:
    """First-order low-pass filter; the first non-zero sample passes straight through."""

    def __init__(self, coefficient: float) -> None:
        self.coefficient = min(1.0, max(0.0, coefficient))
        self.prev_value = 0.0

    def update(self, value: float) -> float:
        if self.prev_value == 0.0 and value != 0.0:
            self.prev_value = value
            return value
        self.prev_value = (
            self.coefficient * value + (1.0 - self.coefficient) * self.prev_value
        )
        return self.prev_value


class RateLimiter:
    """Limit how far the output may move per sample."""

    def __init__(self, max_rate: float) -> None:
        self.max_rate = max_rate
        self.prev_value = 0.0

    def update(self, value: float) -> float:
        change = value - self.prev_value
        if self.prev_value == 0.0 and value != 0.0:
            self.prev_value = value
            return value
        if change > self.max_rate:
            self.prev_value += self.max_rate
        elif change < -self.max_rate:
            self.prev_value -= self.max_rate
        else:
            self.prev_value = value
        return self.prev_value


class MovingAverage:
    """Average over a fixed window that starts filled with zeros."""

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE) -> None:
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        self.window_size = window_size
        self._window: deque[float] = deque([0.0] * window_size, maxlen=window_size)
        self._sum = 0.0

    def update(self, value: float) -> float:
        self._sum -= self._window[0]
        self._sum += value
        self._window.append(value)
        return self._sum / self.window_size


class HybridFilter:
    """Rate limiter, then low-pass filter, then moving average."""

    def __init__(self, coefficient: float, max_rate: float) -> None:
        self.rate_limiter = RateLimiter(max_rate)
        self.low_pass = LowPassFilter(coefficient)
        self.moving_average = MovingAverage(DEFAULT_WINDOW_SIZE)

    def update(self, value: float) -> float:
        limited = self.rate_limiter.update(value)
        smoothed = self.low_pass.update(limited)
        return self.moving_average.update(smoothed)