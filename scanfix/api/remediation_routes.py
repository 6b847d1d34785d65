from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from scanfix.domain.models import FileAnalysis
from scanfix.normalizers.results_normalizer import ResultsNormalizer
from scanfix.services.correction_cache import CorrectionCache
from scanfix.services.patch_service import PatchService

router = APIRouter(prefix="/api", tags=["remediation"])

_normalizer = ResultsNormalizer()


# ── Request / Response schemas ────────────────────────────────────
class VulnerabilityIn(BaseModel):
    severity: str = "LOW"
    description: str = ""
    line_numbers: list[int] | None = None
    line_number: int | None = None


class StaticAnalysisIn(BaseModel):
    vulnerabilities: list[VulnerabilityIn] = Field(default_factory=list)


class CodeAnalysisIn(BaseModel):
    """One ``code_analysis`` entry as produced by the scan backend."""

    file: str = Field(..., min_length=1, json_schema_extra={"examples": ["src\\app/views.py"]})
    original_code: str | None = None
    static_analysis: StaticAnalysisIn = Field(default_factory=StaticAnalysisIn)
    ai_analysis: str | None = None


class ResultsIn(BaseModel):
    """A completed scan's ``results`` object."""

    code_analysis: list[CodeAnalysisIn] = Field(default_factory=list)


class CorrectionOut(BaseModel):
    file_name: str
    code: str
    has_explicit_fix: bool
    directive_source: str | None = None
    applied_lines: list[int]
    diff: str = Field("", description="Unified diff between original and patched source.")


class RemediateResponse(BaseModel):
    correction: CorrectionOut | None = Field(
        None,
        description="Null when the file has no findings or no source.",
    )


class BatchRemediateResponse(BaseModel):
    corrections: list[CorrectionOut]
    colliding_file_names: list[str] = Field(
        default_factory=list,
        description="Basenames reported for more than one path; only the first path was used.",
    )


def _to_out(file: FileAnalysis, cache: CorrectionCache) -> CorrectionOut | None:
    correction = cache.get_or_compute(file)
    if correction is None:
        return None
    return CorrectionOut(
        file_name=correction.file_name,
        code=correction.code,
        has_explicit_fix=correction.has_explicit_fix,
        directive_source=correction.directive_source,
        applied_lines=list(correction.applied_lines),
        diff=PatchService.unified_diff(file.original_source, correction.patched_source, correction.file_name),
    )


# ── Endpoints ─────────────────────────────────────────────────────
@router.post(
    "/remediate",
    response_model=RemediateResponse,
    summary="Synthesize a corrected file",
    response_description="Patched source for one analysed file",
)
def remediate(entry: CodeAnalysisIn) -> dict[str, Any]:
    """Apply narrative-derived fixes (or keyword fallback comments) to one
    analysed file and return the patched source with a unified diff.
    """
    return {"correction": _to_out(_normalizer.normalize_file(entry.model_dump()), CorrectionCache())}


@router.post(
    "/remediate/batch",
    response_model=BatchRemediateResponse,
    summary="Synthesize corrected files for a whole scan",
    response_description="One correction per distinct file name",
)
def remediate_batch(results: ResultsIn) -> dict[str, Any]:
    """Synthesize corrections for every file of a completed scan.

    Files are keyed by basename, exactly as the UI cache keys them: the first
    path that yields a correction claims the name and later paths ending in
    the same file name are reported as collisions.
    """
    cache = CorrectionCache()
    seen: set[str] = set()
    colliding: list[str] = []
    corrections: list[CorrectionOut] = []

    for entry in results.code_analysis:
        file = _normalizer.normalize_file(entry.model_dump())
        if file.file_name in seen:
            if file.file_name not in colliding:
                colliding.append(file.file_name)
            continue
        out = _to_out(file, cache)
        if out is None:
            continue
        seen.add(out.file_name)
        corrections.append(out)

    return {"corrections": corrections, "colliding_file_names": colliding}
