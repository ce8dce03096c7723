"""Errors raised while building the rate window report."""


class RateReportError(Exception):
    pass


class FetchError(RateReportError):
    """Transport failure: timeout, connection error or non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """Transport errors, throttling and server errors; other 4xx are permanent."""
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


class DecodeError(RateReportError):
    """Malformed document, unsupported encoding or unparseable number."""
