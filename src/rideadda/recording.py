# rideadda/recording.py
"""
Live track recording for a single ride.

A location timer appends fixes while the ride is active; the ride-session
controller may ask for provisional statistics at any time. Once stop() has
been called no further fixes are accepted, so the statistics returned by
finish() are computed over a frozen track and are the ones to keep.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Iterable, Optional

from rideadda.analyze.track import AnalyticsSettings, IdFactory, compute_ride_statistics
from rideadda.models import GeoSample, RideStatistics
from rideadda.util.logging import log


class RecorderState(Enum):
    """Recording state machine states."""

    IDLE = "idle"
    RECORDING = "recording"
    STOPPED = "stopped"


class TrackRecorder:
    """
    Thread-safe holder of the growing track of one ride.

    IDLE -> start() -> RECORDING -> stop() -> STOPPED
    """

    def __init__(self, settings: Optional[AnalyticsSettings] = None):
        self.settings = settings or AnalyticsSettings()
        self._state = RecorderState.IDLE
        self._lock = threading.Lock()
        self._samples: list[GeoSample] = []

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state == RecorderState.RECORDING

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)

    def start(self, initial: Iterable[GeoSample] = ()) -> bool:
        """
        Begin recording, optionally seeded with the rider's current fix.

        Returns:
            True if recording started; False if already started or stopped.
        """
        with self._lock:
            if self._state != RecorderState.IDLE:
                log(f"Cannot start recording in state: {self._state.value}")
                return False
            self._samples = list(initial)
            self._state = RecorderState.RECORDING
            return True

    def append(self, sample: GeoSample) -> bool:
        """Add a fix in capture order. Ignored unless recording."""
        with self._lock:
            if self._state != RecorderState.RECORDING:
                log(f"Dropping fix while {self._state.value}")
                return False
            self._samples.append(sample)
            return True

    def snapshot(self) -> tuple[GeoSample, ...]:
        """Immutable copy of the fixes recorded so far."""
        with self._lock:
            return tuple(self._samples)

    def partial_statistics(
            self, ride_id: str, user_id: str, *,
            id_factory: Optional[IdFactory] = None,
    ) -> RideStatistics:
        """Provisional summary of the track so far; not authoritative while recording."""
        return compute_ride_statistics(
            ride_id, user_id, self.snapshot(),
            settings=self.settings, id_factory=id_factory,
        )

    def stop(self) -> tuple[GeoSample, ...]:
        """Freeze the track and return it. Idempotent."""
        with self._lock:
            # A ride that never recorded still ends with an (empty) track.
            self._state = RecorderState.STOPPED
            return tuple(self._samples)

    def finish(
            self, ride_id: str, user_id: str, *,
            id_factory: Optional[IdFactory] = None,
    ) -> RideStatistics:
        """Stop recording (if needed) and summarize the frozen track."""
        frozen = self.stop()
        return compute_ride_statistics(
            ride_id, user_id, frozen,
            settings=self.settings, id_factory=id_factory,
        )
