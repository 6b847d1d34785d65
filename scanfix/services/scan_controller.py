"""Scan lifecycle controller.

States: IDLE -> SUBMITTING -> POLLING -> COMPLETED | FAILED, and back to
SUBMITTING whenever a new scan starts.

Every submit advances a generation counter. A poll loop carries the
generation it was started under and becomes a no-op as soon as that value is
no longer current: it checks before issuing each request and again before
applying each response. Starting a new scan (or ``teardown()``) therefore
neutralises stale loops without cancelling tasks.

All mutation happens on one asyncio task of control; network calls are the
only suspension points, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable

from scanfix.client.base import ScanBackend
from scanfix.core.config import settings
from scanfix.core.errors import ProtocolError, ScanError, ScanFailure, TransportError
from scanfix.domain.models import (
    FileAnalysis,
    ScanJob,
    ScanRequest,
    ScanSnapshot,
    SynthesizedCorrection,
)
from scanfix.domain.schemas import PollResponse, SubmitPayload
from scanfix.normalizers.results_normalizer import ResultsNormalizer
from scanfix.services.correction_cache import CorrectionCache
from scanfix.services.request_service import RequestService

logger = logging.getLogger(__name__)

STATUS_MAP = {
    "pending": "PENDING",
    "running": "RUNNING",
    "completed": "COMPLETED",
    "error": "FAILED",
}

Listener = Callable[[ScanSnapshot], None]


@dataclass(frozen=True)
class ScanHandle:
    job_id: str
    generation: int


class ScanController:
    def __init__(
        self,
        backend: ScanBackend,
        cache: CorrectionCache | None = None,
        poll_interval_ms: int | None = None,
        poll_retries: int | None = None,
        normalizer: ResultsNormalizer | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        interval = settings.SCAN_POLL_INTERVAL_MS if poll_interval_ms is None else poll_interval_ms
        self._backend = backend
        self._cache = cache if cache is not None else CorrectionCache()
        self._interval = interval / 1000
        self._retries = settings.SCAN_POLL_RETRIES if poll_retries is None else poll_retries
        self._normalizer = normalizer or ResultsNormalizer()
        self._sleep = sleep
        self._state = ScanSnapshot()
        self._listeners: list[Listener] = []

    # ── Read access ──────────────────────────────────────────────

    @property
    def snapshot(self) -> ScanSnapshot:
        return self._state

    @property
    def generation(self) -> int:
        return self._state.generation

    @property
    def cache(self) -> CorrectionCache:
        return self._cache

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for every state change; returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def correction_for(self, file_name: str) -> SynthesizedCorrection | None:
        results = self._state.results
        if self._state.state != "COMPLETED" or results is None:
            return None
        file = results.file_named(file_name)
        return self._cache.get_or_compute(file) if file else None

    def corrections(self) -> list[tuple[FileAnalysis, SynthesizedCorrection | None]]:
        """Pair every analysed file with its (cached) correction, in payload order."""
        results = self._state.results
        if self._state.state != "COMPLETED" or results is None:
            return []
        return [(f, self._cache.get_or_compute(f)) for f in results.files]

    # ── Transitions ──────────────────────────────────────────────

    async def submit(self, request: ScanRequest) -> ScanHandle:
        """Start a new scan and resolve once the backend has issued a job id.

        Raises ``SubmissionError`` before touching any state when the request
        is malformed. Protocol and transport errors move the lifecycle to
        FAILED and are re-raised.
        """
        payload = RequestService.to_payload(request)
        generation = self._begin(request)
        return await self._submit(payload, generation)

    async def poll(self, handle: ScanHandle) -> ScanSnapshot | None:
        """Poll until the job is terminal. Returns ``None`` once superseded."""
        while True:
            if not self._is_current(handle.generation):
                logger.debug("Poll loop superseded", extra=self._log_extra(handle))
                return None

            try:
                response = await self._poll_once(handle)
            except ScanError as e:
                if not self._is_current(handle.generation):
                    return None
                self._fail(handle.generation, e)
                return self._state

            if response is None or not self._is_current(handle.generation):
                logger.debug("Discarding stale poll response", extra=self._log_extra(handle))
                return None

            job = ScanJob(
                id=handle.job_id,
                status=STATUS_MAP[response.status],
                progress_percent=response.progress_percent,
                status_message=response.message,
            )

            if response.status == "completed":
                try:
                    results = self._normalizer.normalize(response.results)
                except Exception as e:
                    logger.exception("Could not read scan results", extra=self._log_extra(handle))
                    self._fail(handle.generation, ProtocolError(f"Invalid scan results from server: {e}"))
                    return self._state
                self._set(state="COMPLETED", job=job, results=results, error_kind=None, error_message=None)
                logger.info(
                    "Scan completed: %d files, %d dependency reports",
                    len(results.files),
                    len(results.dependencies),
                    extra=self._log_extra(handle),
                )
                return self._state

            if response.status == "error":
                self._set(job=job)
                self._fail(handle.generation, ScanFailure(response.message or "An error occurred during scanning"))
                return self._state

            self._set(job=job)
            await self._sleep(self._interval)

    async def run(self, request: ScanRequest) -> ScanSnapshot | None:
        """Submit and poll to completion.

        Lifecycle errors end up in the returned snapshot instead of being
        raised. Returns ``None`` if a newer scan superseded this one.
        """
        payload = RequestService.to_payload(request)
        generation = self._begin(request)
        try:
            handle = await self._submit(payload, generation)
        except ScanError:
            return self._state if self._is_current(generation) else None
        return await self.poll(handle)

    def start(self, request: ScanRequest) -> asyncio.Task:
        """Schedule ``run`` on the running loop. Validation errors raise immediately."""
        RequestService.validate(request)
        return asyncio.get_running_loop().create_task(self.run(request))

    def teardown(self) -> None:
        """Abandon the current scan: stops any poll loop at its next check."""
        generation = self._state.generation + 1
        self._cache.clear()
        self._replace(ScanSnapshot(state="IDLE", generation=generation))
        logger.info("Scan lifecycle torn down", extra={"generation": generation})

    # ── Internals ────────────────────────────────────────────────

    def _begin(self, request: ScanRequest) -> int:
        generation = self._state.generation + 1
        self._cache.clear()
        self._replace(ScanSnapshot(state="SUBMITTING", generation=generation, request=request))
        return generation

    async def _submit(self, payload: SubmitPayload, generation: int) -> ScanHandle:
        try:
            job_id = await self._backend.submit(payload)
            if not job_id:
                raise ProtocolError("Invalid response from server: missing scan_id")
        except ScanError as e:
            if self._is_current(generation):
                self._fail(generation, e)
            raise

        handle = ScanHandle(job_id=job_id, generation=generation)
        if self._is_current(generation):
            self._set(state="POLLING", job=ScanJob(id=job_id))
            logger.info("Polling scan", extra=self._log_extra(handle))
        else:
            logger.debug("Submit resolved after being superseded", extra=self._log_extra(handle))
        return handle

    async def _poll_once(self, handle: ScanHandle) -> PollResponse | None:
        """One poll request, retried on retryable transport errors. ``None`` once superseded."""
        attempt = 0
        while True:
            try:
                return await self._backend.poll(handle.job_id)
            except TransportError as e:
                if not e.retryable or attempt >= self._retries or not self._is_current(handle.generation):
                    raise
                attempt += 1
                logger.warning(
                    "Poll transport error (attempt %d/%d): %s",
                    attempt,
                    self._retries,
                    e.message,
                    extra=self._log_extra(handle),
                )
                await self._sleep(self._interval)
                if not self._is_current(handle.generation):
                    logger.debug("Retry abandoned, scan superseded", extra=self._log_extra(handle))
                    return None

    def _fail(self, generation: int, error: ScanError) -> None:
        logger.warning(
            "Scan failed (%s): %s",
            error.kind,
            error.message,
            extra={"generation": generation},
        )
        self._set(state="FAILED", error_kind=error.kind, error_message=error.message)

    def _is_current(self, generation: int) -> bool:
        return generation == self._state.generation

    def _set(self, **changes) -> None:
        self._replace(replace(self._state, **changes))

    def _replace(self, state: ScanSnapshot) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Scan state listener failed")

    @staticmethod
    def _log_extra(handle: ScanHandle) -> dict:
        return {"scan_id": handle.job_id, "generation": handle.generation}
