from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

Severity = Literal["LOW", "MEDIUM", "HIGH", "CRITICAL"]
Language = Literal["python", "javascript"]
JobStatus = Literal["PENDING", "RUNNING", "COMPLETED", "FAILED"]
ScanState = Literal["IDLE", "SUBMITTING", "POLLING", "COMPLETED", "FAILED"]

SEVERITIES: tuple[str, ...] = ("CRITICAL", "HIGH", "MEDIUM", "LOW")
LANGUAGES: tuple[str, ...] = ("python", "javascript")


def file_basename(file_path: str) -> str:
    """Strip every ``/`` and ``\\`` prefix from a backend-reported path.

    Two different paths with the same basename map to the same name;
    downstream code keys on this value on purpose.
    """
    if not file_path:
        return ""
    return file_path.replace("\\", "/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ScanRequest:
    repository_reference: str | None = None
    inline_source: str | None = None
    language_hint: Language = "python"
    check_dependencies: bool = True

    @property
    def is_repository_scan(self) -> bool:
        return self.repository_reference is not None


@dataclass(frozen=True)
class ScanJob:
    id: str
    status: JobStatus = "PENDING"
    progress_percent: int = 0
    status_message: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.status in ("COMPLETED", "FAILED")


@dataclass(frozen=True)
class VulnerabilityFinding:
    severity: Severity
    description: str
    affected_lines: tuple[int, ...] = ()


@dataclass(frozen=True)
class FileAnalysis:
    file_path: str
    original_source: tuple[str, ...] = ()
    findings: tuple[VulnerabilityFinding, ...] = ()
    narrative: str | None = None

    @property
    def file_name(self) -> str:
        return file_basename(self.file_path)

    @property
    def has_findings(self) -> bool:
        return len(self.findings) > 0


@dataclass(frozen=True)
class CorrectionDirective:
    target_line: int
    replacement_text: str


@dataclass(frozen=True)
class SynthesizedCorrection:
    file_name: str
    patched_source: tuple[str, ...]
    has_explicit_fix: bool
    directive_source: str | None = None
    applied_lines: tuple[int, ...] = ()

    @property
    def code(self) -> str:
        return "\n".join(self.patched_source)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["patched_source"] = list(self.patched_source)
        d["applied_lines"] = list(self.applied_lines)
        d["code"] = self.code
        return d


@dataclass(frozen=True)
class ScanSummary:
    """Counts exactly as the backend reported them."""

    total_files_analyzed: int | None = None
    total_vulnerabilities: int | None = None
    critical_vulnerabilities: int | None = None
    high_vulnerabilities: int | None = None
    medium_vulnerabilities: int | None = None
    low_vulnerabilities: int | None = None


@dataclass(frozen=True)
class DependencyVulnerability:
    cve_id: str
    severity: str
    description: str


@dataclass(frozen=True)
class DependencyReport:
    package: str
    version: str
    vulnerabilities: tuple[DependencyVulnerability, ...] = ()


@dataclass(frozen=True)
class ScanResults:
    files: tuple[FileAnalysis, ...] = ()
    dependencies: tuple[DependencyReport, ...] = ()
    summary: ScanSummary | None = None

    def file_named(self, file_name: str) -> FileAnalysis | None:
        """First file whose basename matches, in payload order."""
        for f in self.files:
            if f.file_name == file_name:
                return f
        return None


@dataclass(frozen=True)
class ScanSnapshot:
    """Read-only view of the lifecycle controller's state record."""

    state: ScanState = "IDLE"
    generation: int = 0
    request: ScanRequest | None = None
    job: ScanJob | None = None
    results: ScanResults | None = None
    error_kind: str | None = None
    error_message: str | None = None

    @property
    def is_busy(self) -> bool:
        return self.state in ("SUBMITTING", "POLLING")
