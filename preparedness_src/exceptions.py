"""Error types for outbreak detection and proactive alerting."""


class PreparednessError(Exception):
    """Base class for all service errors."""


class DataSourceUnavailable(PreparednessError):
    """The report store or alert sink could not be read or written.

    Fatal to the current detection run. Callers decide whether to retry;
    this is never reported as an empty result.
    """


class EnrichmentUnavailable(PreparednessError):
    """The optional LLM briefing could not be produced."""


class NotifierUnavailable(PreparednessError):
    """The broadcast transport is down or rejected the alert."""


class InvalidReport(PreparednessError, ValueError):
    """A citizen symptom report failed validation."""
