"""
Measurement Session
Message-passing front end for the calibration engine.

Sensor collaborators push LocationFix and StepSample messages into the
inbox from any thread. A single worker thread hands them to the engine one
at a time, and every snapshot the engine produces lands in the outbox.

Usage:
    with MeasurementSession(config) as session:
        session.submit_fix(fix)
        session.submit_steps(42)
        session.wait_idle()
        for snapshot in session.drain():
            send_to_host(snapshot.to_dict())
"""

import logging
import queue
import threading
from datetime import datetime
from typing import Callable, List, Optional, Union

from .config import LocalizationConfig
from .engine import CalibrationEngine
from .models import DistanceSnapshot, LocationFix, StatusSnapshot, StepSample

_LOGGER = logging.getLogger(__name__)

_STOP = object()

Snapshot = Union[StatusSnapshot, DistanceSnapshot]


class MeasurementSession:
    """Owns one engine plus its inbound and outbound queues."""

    def __init__(
        self,
        config: LocalizationConfig,
        clock: Optional[Callable[[], datetime]] = None,
        maxsize: int = 0,
    ):
        """
        Args:
            config: Validated localization parameters
            clock: Clock passed to the engine for calibration timestamps
            maxsize: Inbox capacity, 0 for unbounded
        """
        self.inbox: queue.Queue = queue.Queue(maxsize=maxsize)
        self.outbox: queue.Queue = queue.Queue()
        self.engine = CalibrationEngine(config, outbox=self.outbox, clock=clock)
        self._worker: Optional[threading.Thread] = None
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def start(self) -> None:
        """Start measuring, publish the initial status and start the worker."""
        if self._stopping:
            raise RuntimeError("Previous worker is still stopping; call stop() again first")
        if self.is_running:
            return

        self.engine.start_measuring()
        self.engine.publish_status()
        self._worker = threading.Thread(
            target=self._run, name="stepdist-session", daemon=True
        )
        self._worker.start()

    def stop(self, timeout: Optional[float] = None) -> Optional[DistanceSnapshot]:
        """
        Process the messages already queued, then stop measuring.

        Args:
            timeout: Seconds to wait for the worker to finish

        Returns:
            Distance totals at the moment measuring stopped

        Raises:
            TimeoutError: If the worker is still busy after `timeout`. The
                session stays in the stopping state; call stop() again.
        """
        if self._worker is None:
            return None

        if not self._stopping:
            self.inbox.put(_STOP)
            self._stopping = True

        self._worker.join(timeout)
        if self._worker.is_alive():
            _LOGGER.warning("Worker still busy after %s s, stop pending", timeout)
            raise TimeoutError("Measurement worker did not finish in time")

        self._worker = None
        self._stopping = False

        final = self.engine.distance_snapshot()
        self.engine.stop_measuring()
        return final

    def submit_fix(self, fix: LocationFix) -> None:
        self.inbox.put(fix)

    def submit_steps(self, steps, timestamp: Optional[datetime] = None) -> None:
        self.inbox.put(StepSample(steps=steps, timestamp=timestamp))

    def wait_idle(self) -> None:
        """Block until every submitted message has been processed."""
        self.inbox.join()

    def drain(self) -> List[Snapshot]:
        """Take every snapshot currently waiting in the outbox."""
        snapshots = []
        while True:
            try:
                snapshots.append(self.outbox.get_nowait())
            except queue.Empty:
                return snapshots

    def _run(self) -> None:
        while True:
            message = self.inbox.get()
            try:
                if message is _STOP:
                    return
                self._dispatch(message)
            except Exception:
                _LOGGER.exception("Failed to process %r", message)
            finally:
                self.inbox.task_done()

    def _dispatch(self, message) -> None:
        if isinstance(message, LocationFix):
            self.engine.on_location_fix(message)
        elif isinstance(message, StepSample):
            self.engine.on_step_sample(message.steps)
        else:
            _LOGGER.warning("Ignoring unknown message %r", message)

    def __enter__(self) -> "MeasurementSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
