import threading

from stepsort.settings import DELAY_MAX, DELAY_MIN, SPEED_MAX


def speed_to_delay(speed: int) -> int:
    """Speed slider (0..200, higher is faster) -> delay in ms, never below 1."""
    return max(DELAY_MIN, DELAY_MAX - int(speed))


class PacingController:
    """Live delay between steps. Written by the UI, read once per step."""

    def __init__(self, delay: int = DELAY_MAX):
        self._lock  = threading.Lock()
        self._delay = DELAY_MAX
        self.set_delay(delay)

    def set_delay(self, v: int) -> int:
        clamped = max(DELAY_MIN, min(DELAY_MAX, int(v)))
        with self._lock:
            self._delay = clamped
        return clamped

    def current_delay(self) -> int:
        with self._lock:
            return self._delay

    def set_speed(self, speed: int) -> int:
        return self.set_delay(speed_to_delay(max(0, min(SPEED_MAX, int(speed)))))

    def current_speed(self) -> int:
        return DELAY_MAX - self.current_delay()
