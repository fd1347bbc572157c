# trackmetrics/errors

"""
trackmetrics.errors

Central exception hierarchy for trackmetrics.

Rationale:
  - The analysis engine raises specific, meaningful errors.
  - Callers can catch TrackMetricsError (broad) or specific subclasses (narrow).
  - Individual bad samples are never raised; the normalizer drops them.
"""


class TrackMetricsError(RuntimeError):
    """Base class for all trackmetrics runtime errors."""


# ---- Analysis errors ---------------------------

class AnalysisError(TrackMetricsError):
    """Errors raised while analyzing a track."""

class InsufficientDataError(AnalysisError):
    """Fewer than two usable points remained after normalization."""


# ---- Input errors ------------------------------

class InputError(TrackMetricsError):
    """Errors interpreting the input handed to the engine."""

class MalformedInputError(InputError):
    """Input could not be interpreted as a sequence of samples at all."""


# ---- Configuration errors ----------------------

class ConfigError(TrackMetricsError):
    """Configuration file or override could not be used."""
