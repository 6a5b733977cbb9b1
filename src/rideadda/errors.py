# rideadda/errors

"""
rideadda.errors

Central exception hierarchy for RideAdda.

Rationale:
  - The analytics engine itself is total and raises none of these.
  - File readers, config and CLI helpers raise specific, meaningful errors.
  - Callers can catch RideAddaError (broad) or specific subclasses (narrow).
"""


class RideAddaError(RuntimeError):
    """Base class for all RideAdda runtime errors."""


# ---- Configuration errors ----------------------

class ConfigError(RideAddaError):
    """A config file exists but could not be parsed."""


# ---- Track input errors ------------------------

class TrackFormatError(RideAddaError):
    """Errors reading a recorded track from disk."""

class InvalidGpxError(TrackFormatError):
    """GPX file could not be parsed or did not contain expected data structures."""


# ---- Selection errors --------------------------

class SelectionError(RideAddaError):
    """Errors in interactive file selection."""

class FzfNotFoundError(SelectionError):
    """fzf is required but not available on PATH."""
