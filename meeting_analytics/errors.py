"""Errors surfaced to HTTP clients as ``{"error": ..., "details": ...}``."""

from typing import Optional


class AnalysisError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(AnalysisError):
    """The Gemini API key is missing."""

    status_code = 500


class InputValidationError(AnalysisError):
    """No file was uploaded, or it is over the size cap."""

    status_code = 400


class UpstreamError(AnalysisError):
    """The Gemini call itself failed."""

    status_code = 500
