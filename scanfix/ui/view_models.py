"""Plain data for the Streamlit page; no Streamlit imports here."""

from __future__ import annotations

from dataclasses import dataclass

from scanfix.domain.models import (
    FileAnalysis,
    ScanRequest,
    ScanResults,
    ScanSummary,
    SynthesizedCorrection,
    VulnerabilityFinding,
)


@dataclass(frozen=True)
class FileCard:
    file_name: str
    findings: list[str]
    narrative: str | None
    fixed_code: str | None


def finding_label(finding: VulnerabilityFinding) -> str:
    label = f"{finding.severity} - {finding.description}"
    lines = finding.affected_lines
    if len(lines) > 1:
        label += f" (Line(s): {', '.join(str(n) for n in lines)})"
    elif lines:
        label += f" (Line: {lines[0]})"
    return label


def file_card(file: FileAnalysis, correction: SynthesizedCorrection | None) -> FileCard:
    # Only corrections that actually changed a line are offered
    fixed = correction.code if correction is not None and correction.has_explicit_fix else None
    return FileCard(
        file_name=file.file_name,
        findings=[finding_label(f) for f in file.findings],
        narrative=file.narrative or None,
        fixed_code=fixed,
    )


def summary_rows(summary: ScanSummary | None) -> list[tuple[str, int | None]]:
    if summary is None:
        return []
    return [
        ("Total Files Analyzed", summary.total_files_analyzed),
        ("Total Vulnerabilities", summary.total_vulnerabilities),
        ("Critical Vulnerabilities", summary.critical_vulnerabilities),
        ("High Severity Issues", summary.high_vulnerabilities),
        ("Medium Severity Issues", summary.medium_vulnerabilities),
        ("Low Severity Issues", summary.low_vulnerabilities),
    ]


def dependency_rows(results: ScanResults, request: ScanRequest | None) -> list[str]:
    """Dependency findings only make sense for repository scans."""
    if request is None or not request.is_repository_scan:
        return []
    rows: list[str] = []
    for dep in results.dependencies:
        rows.append(f"Package: {dep.package} (v{dep.version})")
        for v in dep.vulnerabilities:
            rows.append(f"  CVE: {v.cve_id} (Severity: {v.severity}) {v.description}".rstrip())
    return rows


def can_scan(use_repo: bool, repo_url: str, code: str, busy: bool) -> bool:
    if busy:
        return False
    return bool(repo_url.strip()) if use_repo else bool(code.strip())
