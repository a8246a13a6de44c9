"""Liveness State: the simulated up/down flag owned by one application instance.

Invariants:
    - Starts up; mark_down() is the only transition exposed (no way back short of restart)
    - Single writer (GET /fail), many readers (the app_up gauge callback); both run on
      the event loop, so a plain attribute suffices

Design Decisions:
    - Object on app.state instead of a module-level flag: each create_app() gets its own,
      so tests never leak a "down" state into each other
"""


class LivenessState:
    """Process-visible up/down flag exported as the app_up gauge."""

    def __init__(self) -> None:
        self._up = True

    @property
    def is_up(self) -> bool:
        return self._up

    def mark_down(self) -> None:
        self._up = False

    def gauge_value(self) -> float:
        """1.0 while up, 0.0 once marked down."""
        return 1.0 if self._up else 0.0
