"""
Exception hierarchy for the chart / signal pipeline.

    ChartAlchemistError (base)
    ├── MalformedRecord        provider data failed to parse
    ├── UpstreamUnavailable    market-data or decision-step call failed
    └── StaleRequestDiscarded  result belongs to a superseded request

Running out of history is deliberately *not* an error: indicators just
return shorter (or empty) series.
"""

from typing import Optional


class ChartAlchemistError(Exception):
    """Base class for pipeline errors."""

    def __init__(self, message: str, code: str = "CHART_ALCHEMIST_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class MalformedRecord(ChartAlchemistError):
    """A raw kline could not be turned into a Candle."""

    def __init__(self, message: str, index: Optional[int] = None, field: Optional[str] = None):
        super().__init__(message, code="MALFORMED_RECORD")
        self.index = index
        self.field = field


class UpstreamUnavailable(ChartAlchemistError):
    """Network failure or non-2xx answer from an external service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, code="UPSTREAM_UNAVAILABLE")
        self.status_code = status_code


class StaleRequestDiscarded(ChartAlchemistError):
    """Raised when work finishes for a request that has since been superseded."""

    def __init__(self, token):
        super().__init__(
            f"Request #{token.generation} was superseded; result discarded",
            code="STALE_REQUEST",
        )
        self.token = token


_UNAVAILABLE_MARKERS = ("UNAVAILABLE", "APIConnectionError", "RateLimitError", "InternalServerError")
_INVALID_ARGUMENT_MARKERS = ("INVALID_ARGUMENT", "BadRequestError", "invalid_request_error")


def describe_analysis_error(error: BaseException) -> str:
    """Turn a decision-step failure into the message shown to the user."""
    text = f"{type(error).__name__}: {error}"
    if isinstance(error, UpstreamUnavailable) or any(m in text for m in _UNAVAILABLE_MARKERS):
        reason = "The AI model is currently unavailable. Please try again later."
    elif any(m in text for m in _INVALID_ARGUMENT_MARKERS):
        reason = "There was an issue with the data sent for analysis. Please refresh and try again."
    else:
        reason = str(error) or "An unknown error occurred during analysis."
    return f"Failed to get analysis: {reason}"
