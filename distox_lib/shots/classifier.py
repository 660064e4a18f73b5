# -*- coding: utf-8 -*-
"""Smart-mode shot classifier.

In smart mode the surveyor confirms a stretch between two stations by
taking the same shot three times. The classifier watches a sliding window
of the last three measurements:

1. Fewer than three pending measurements: nothing is decided yet.
2. Three pending measurements that all match pairwise (distance difference
   below 5 cm **and** angular separation below 1.7°): they are averaged into
   a :class:`SurveyShot` and the window is emptied.
3. Three pending measurements that do not match: the oldest is released as
   a :class:`SplayShot`, unchanged, and the two most recent stay pending so
   they can still form a triple with the next arrival.

Only the single oldest measurement is evicted on a pattern break; the two
remaining ones are not re-examined until a third arrives.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from itertools import combinations

from distox_lib.constants import MAX_ANGULAR_DIFFERENCE
from distox_lib.constants import MAX_DISTANCE_DIFFERENCE
from distox_lib.constants import SMART_MODE_WINDOW
from distox_lib.shots.direction import angular_separation
from distox_lib.shots.direction import average_directions
from distox_lib.shots.direction import average_distances
from distox_lib.shots.direction import to_angles
from distox_lib.shots.models import DetectedShot
from distox_lib.shots.models import RawMeasurement
from distox_lib.shots.models import SplayShot
from distox_lib.shots.models import SurveyShot

logger = logging.getLogger(__name__)

ShotCallback = Callable[[DetectedShot], None]


def measurements_match(a: RawMeasurement, b: RawMeasurement) -> bool:
    """Check if two measurements are repeats of the same shot.

    Both thresholds are strict.
    """
    if abs(a.distance - b.distance) >= MAX_DISTANCE_DIFFERENCE:
        return False
    return angular_separation(a.direction, b.direction) < MAX_ANGULAR_DIFFERENCE


def is_triple(measurements: list[RawMeasurement]) -> bool:
    """Check if every pair among the measurements matches."""
    return all(measurements_match(a, b) for a, b in combinations(measurements, 2))


def average_shot(measurements: list[RawMeasurement]) -> SurveyShot:
    """Average repeated measurements into a survey shot."""
    azimuth, inclination = to_angles(
        average_directions([m.direction for m in measurements])
    )
    return SurveyShot(
        distance=average_distances([m.distance for m in measurements]),
        azimuth=azimuth,
        inclination=inclination,
        measurements=tuple(measurements),
    )


class ShotClassifier:
    """Sliding-window smart-mode state machine.

    The only state is the pending buffer (0 to 3 measurements). Emitted
    shots are returned to the caller and also delivered, synchronously and
    in emission order, to every subscriber.

    Example:
        classifier = ShotClassifier()
        classifier.subscribe(print)
        for measurement in measurements:
            classifier.add_measurement(measurement)
        classifier.flush()
    """

    def __init__(self) -> None:
        self._pending: deque[RawMeasurement] = deque()
        self._subscribers: list[ShotCallback] = []

    # -------------------------------------------------------------------------
    # Subscribers
    # -------------------------------------------------------------------------

    def subscribe(self, callback: ShotCallback) -> None:
        """Register a callback invoked once per emitted shot."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: ShotCallback) -> None:
        """Remove a previously registered callback.

        Raises:
            ValueError: If the callback is not registered
        """
        self._subscribers.remove(callback)

    def _emit(self, shot: DetectedShot) -> DetectedShot:
        logger.debug(
            "Emitting %s: %.3fm %.1f° %.1f°",
            shot.type.value,
            shot.distance,
            shot.azimuth,
            shot.inclination,
        )
        for callback in list(self._subscribers):
            callback(shot)
        return shot

    # -------------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------------

    @property
    def pending_count(self) -> int:
        """Number of measurements waiting to be classified."""
        return len(self._pending)

    @property
    def pending(self) -> tuple[RawMeasurement, ...]:
        """Pending measurements, oldest first."""
        return tuple(self._pending)

    def add_measurement(
        self, measurement: RawMeasurement
    ) -> SplayShot | SurveyShot | None:
        """Add a measurement and classify the window if it is full.

        Returns:
            The emitted shot, or None while fewer than three measurements
            are pending
        """
        self._pending.append(measurement)
        if len(self._pending) < SMART_MODE_WINDOW:
            return None

        window = list(self._pending)
        if is_triple(window):
            self._pending.clear()
            return self._emit(average_shot(window))

        return self._emit(SplayShot.from_measurement(self._pending.popleft()))

    def flush(self) -> list[DetectedShot]:
        """Emit every pending measurement as a splay, oldest first."""
        shots = [SplayShot.from_measurement(m) for m in self._pending]
        self._pending.clear()
        for shot in shots:
            self._emit(shot)
        return shots

    def clear(self) -> None:
        """Discard pending measurements without emitting anything."""
        if self._pending:
            logger.debug("Discarding %d pending measurements", len(self._pending))
        self._pending.clear()
