"""Error taxonomy for the scan lifecycle.

Only these four reach callers. Degraded input (bad line numbers, narrative
without directives, unmatched keywords) is skipped, never raised.
"""

from __future__ import annotations


class ScanError(Exception):
    """Base class for every lifecycle error."""

    kind = "scan_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SubmissionError(ScanError):
    """Malformed or missing request field. Raised before any network call."""

    kind = "submission"


class ProtocolError(ScanError):
    """Backend response is missing a required field or has the wrong shape."""

    kind = "protocol"


class TransportError(ScanError):
    """Network failure, timeout or non-2xx HTTP reply."""

    kind = "transport"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class ScanFailure(ScanError):
    """Backend explicitly reported ``status == "error"``. Never retried."""

    kind = "scan_failure"
