"""Errors raised by the response pipeline."""

from __future__ import annotations


class ResponseError(ValueError):
    """Base class for responses that cannot become a ProjectConfiguration."""


class ParseFailure(ResponseError):
    """No valid JSON could be recovered, even after every repair transform."""

    def __init__(self, candidate: str, reason: str = ""):
        self.candidate = candidate
        self.reason = reason
        message = "Failed to extract valid JSON from the model response"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class QualityError(ResponseError):
    """Parsed JSON that does not meet the minimum content requirements.

    ``failures`` is the itemised list meant to be shown to the user as-is.
    """

    def __init__(self, failures: list[str]):
        self.failures = list(failures)
        super().__init__(
            "Response failed quality validation: " + "; ".join(self.failures)
        )
