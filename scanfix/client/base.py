"""Abstract scan backend.

The lifecycle controller only talks to this interface, so tests can swap in
a scripted fake and the HTTP client stays a one-file concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from scanfix.domain.schemas import PollResponse, SubmitPayload


class ScanBackend(ABC):
    @abstractmethod
    async def submit(self, payload: SubmitPayload) -> str:
        """Create a scan job and return its ``scan_id``."""

    @abstractmethod
    async def poll(self, scan_id: str) -> PollResponse:
        """Fetch the current status of one job."""
