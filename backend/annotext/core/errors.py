from __future__ import annotations


class AnnotextError(Exception):
    """Base class for errors raised by the annotation pipeline."""


class ExclusiveAccessError(AnnotextError):
    """Raised when a dictionary cannot obtain sole access to its word set."""


class PipelineFrozenError(AnnotextError, RuntimeError):
    """Raised when an enricher is registered after the pipeline was built."""
