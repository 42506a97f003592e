"""
Calibration Engine
Owns the calibration state and turns location fixes and step counts into
step length calibrations and distance reports.

Location fixes and step samples may arrive from different threads. Every
mutation and every snapshot read goes through the same lock, so each fix or
sample is processed to completion before the next one is admitted.

Usage:
    engine = CalibrationEngine(config, outbox=queue.Queue())
    engine.start_measuring()

    engine.on_location_fix(fix)        # status snapshots -> outbox
    engine.on_step_sample(raw_steps)   # distance snapshots -> outbox

    engine.status_snapshot()
    engine.stop_measuring()
"""

import copy
import logging
import math
import numbers
import queue
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from .config import LocalizationConfig
from .distance import cumulative_distance
from .models import (
    CalibrationState,
    DistanceSnapshot,
    LocationFix,
    StatusSnapshot,
    round_accuracy,
)
from .path_detector import is_on_path

_LOGGER = logging.getLogger(__name__)

# Accuracy assumed before the first fix arrives; never passes the filter
NO_FIX_ACCURACY = 9999.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CalibrationEngine:
    """
    Step length calibration state machine.

    The engine is idle until start_measuring() creates a fresh
    CalibrationState. Fixes received while idle only update readiness.
    """

    def __init__(
        self,
        config: LocalizationConfig,
        outbox: Optional[queue.Queue] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Validated localization parameters
            outbox: Queue receiving StatusSnapshot and DistanceSnapshot values
            clock: Returns the current time for calibration timestamps.
                   Defaults to timezone-aware UTC now.
        """
        self.config = config
        self.outbox = outbox
        self._clock = clock or _utcnow

        self._state: Optional[CalibrationState] = None
        self._last_accuracy = NO_FIX_ACCURACY

        # Thread safety
        self.lock = threading.Lock()

    # ---------------------------------------------------------------- lifecycle

    @property
    def is_measuring(self) -> bool:
        with self.lock:
            return self._state is not None

    @property
    def state(self) -> Optional[CalibrationState]:
        """Copy of the current calibration state, None while idle."""
        with self.lock:
            return copy.deepcopy(self._state)

    def start_measuring(self) -> None:
        """Reset the calibration state to defaults and begin measuring."""
        with self.lock:
            self._state = CalibrationState()
        _LOGGER.info("Distance measuring started")

    def stop_measuring(self) -> None:
        """Stop measuring and discard the calibration state."""
        with self.lock:
            if self._state is None:
                return
            steps, distance = self._state.steps_taken, self._state.distance_traveled
            self._state = None
        _LOGGER.info("Distance measuring stopped after %d steps, %d m", steps, distance)

    # ---------------------------------------------------------------- inputs

    def on_location_fix(self, fix: LocationFix) -> None:
        """
        Process one location fix.

        A status snapshot reflecting the fix accuracy is emitted first. While
        measuring, the fix then runs through the calibration state machine,
        which emits another status snapshot when a calibration commits.

        Args:
            fix: Location fix from the location source
        """
        with self.lock:
            self._last_accuracy = fix.horizontal_accuracy
            self._emit(self._status())

            if self._state is not None:
                self._process_location(fix)

    def on_step_sample(self, raw_count) -> Optional[DistanceSnapshot]:
        """
        Process a cumulative step count from the pedometer.

        Args:
            raw_count: Steps counted since measuring began

        Returns:
            The emitted DistanceSnapshot, or None if the engine is idle or
            the sample was dropped
        """
        with self.lock:
            state = self._state
            if state is None:
                return None

            if (
                isinstance(raw_count, bool)
                or not isinstance(raw_count, numbers.Integral)
                or raw_count < state.steps_taken
            ):
                _LOGGER.debug("Dropping malformed step sample %r", raw_count)
                return None

            state.steps_taken_provisional = int(raw_count) - state.steps_taken_persistent
            state.distance_traveled_provisional = int(
                round(state.steps_taken_provisional * state.step_length)
            )

            snapshot = self._distance(state)
            self._emit(snapshot)
            return snapshot

    # ---------------------------------------------------------------- snapshots

    def status_snapshot(self) -> StatusSnapshot:
        with self.lock:
            return self._status()

    def distance_snapshot(self) -> Optional[DistanceSnapshot]:
        """Current distance totals, None while idle."""
        with self.lock:
            if self._state is None:
                return None
            return self._distance(self._state)

    def publish_status(self) -> StatusSnapshot:
        """Emit the current status without waiting for a fix."""
        with self.lock:
            snapshot = self._status()
            self._emit(snapshot)
            return snapshot

    # ---------------------------------------------------------------- internals

    def _process_location(self, fix: LocationFix) -> None:
        config = self.config
        state = self._state

        if fix.rounded_accuracy > config.accuracy_filter:
            _LOGGER.debug(
                "Discarding fix with accuracy %.1f m (filter %.1f m)",
                fix.rounded_accuracy, config.accuracy_filter,
            )
            return

        if not (math.isfinite(fix.latitude) and math.isfinite(fix.longitude)):
            _LOGGER.debug("Discarding fix without coordinates: %r", fix)
            return

        on_path = is_on_path(
            fix,
            state.location_events,
            config.locations_sequence_filter,
            config.perpendicular_distance_filter,
        )

        if on_path:
            distance = cumulative_distance(state.location_events)
            if distance >= config.locations_sequence_distance_filter:
                state.calibration_in_progress = True
                self._calibrate(state, distance)
                self._emit(self._status())
        else:
            if state.calibration_in_progress:
                _LOGGER.info(
                    "Straight segment closed, committing %d steps / %d m",
                    state.steps_taken_provisional,
                    state.distance_traveled_provisional,
                )
                state.commit_provisional()
            state.location_events.clear()
            state.calibration_in_progress = False

        state.location_events.append(fix)

    def _calibrate(self, state: CalibrationState, distance: float) -> None:
        steps = state.steps_taken_provisional
        if steps <= 0:
            _LOGGER.debug("No provisional steps over %.1f m, calibration skipped", distance)
            return

        step_length = distance / steps
        if not step_length > 0:
            _LOGGER.debug("Non-positive step length %.3f, calibration skipped", step_length)
            return

        state.step_length = step_length
        state.last_calibration = self._clock()
        _LOGGER.debug(
            "Calibrated step length %.3f m from %.1f m over %d steps",
            step_length, distance, steps,
        )

    def _status(self) -> StatusSnapshot:
        state = self._state
        return StatusSnapshot(
            is_ready_to_start=round_accuracy(self._last_accuracy) <= self.config.accuracy_filter,
            is_calibrating=state.calibration_in_progress if state else False,
            last_calibrated=state.last_calibration if state else None,
            step_length=state.step_length if state else None,
        )

    @staticmethod
    def _distance(state: CalibrationState) -> DistanceSnapshot:
        return DistanceSnapshot(
            distance_traveled=state.distance_traveled,
            steps_taken=state.steps_taken,
        )

    def _emit(self, snapshot) -> None:
        if self.outbox is None:
            return
        # Called under the lock; a full outbox must not stall the engine
        try:
            self.outbox.put_nowait(snapshot)
        except queue.Full:
            _LOGGER.warning("Outbox full, dropping %s", type(snapshot).__name__)
