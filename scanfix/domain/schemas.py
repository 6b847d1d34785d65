"""Wire schemas for the scan backend's submit / poll contract."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class SubmitPayload(BaseModel):
    """Body of ``POST /api/scan``. Exactly one of ``repo_url`` / ``code`` is set."""

    repo_url: str | None = None
    code: str | None = None
    check_dependencies: bool = True
    language: Literal["python", "javascript"] = "python"


class SubmitAck(BaseModel):
    scan_id: str = Field(..., min_length=1)


class PollResponse(BaseModel):
    """Body of ``GET /api/scan/{scan_id}``."""

    status: Literal["pending", "running", "completed", "error"]
    progress: float = 0
    message: str = ""
    results: dict[str, Any] | None = None

    @field_validator("progress", mode="before")
    @classmethod
    def _coerce_progress(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("message", mode="before")
    @classmethod
    def _coerce_message(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def progress_percent(self) -> int:
        return int(min(100, max(0, self.progress)))
