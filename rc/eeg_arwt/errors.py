from __future__ import annotations

class FeatureExtractionError(Exception):
    """Base class for every error raised by the feature pipeline."""

class ConfigurationError(FeatureExtractionError, ValueError):
    """Bad option or malformed input, detected before any computation."""

class ShapeMismatch(FeatureExtractionError, ValueError):
    """Feature blocks disagree on channel or trial count."""

class CollaboratorFailure(FeatureExtractionError, RuntimeError):
    """
    The AR estimator or the wavelet decomposer failed on one segment.
    The failing (channel, trial) is kept so the bad segment can be found;
    the original exception is chained as __cause__.
    """

    def __init__(self, stage: str, channel: int, trial: int, cause: BaseException):
        self.stage = stage
        self.channel = channel
        self.trial = trial
        self.cause = cause
        super().__init__(
            f"{stage} failed on channel {channel}, trial {trial}: "
            f"{type(cause).__name__}: {cause}"
        )

    def __reduce__(self):
        # joblib workers send this back across process boundaries
        return (type(self), (self.stage, self.channel, self.trial, self.cause))
