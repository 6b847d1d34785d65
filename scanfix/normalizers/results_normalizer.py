"""Turn the backend's completed-scan payload into domain objects.

The payload is produced elsewhere and is trusted only loosely: entries that
do not have the expected shape are skipped so valid analysis still reaches
the user.
"""

from __future__ import annotations

import logging
from typing import Any

from scanfix.domain.models import (
    DependencyReport,
    DependencyVulnerability,
    FileAnalysis,
    ScanResults,
    ScanSummary,
    VulnerabilityFinding,
)

from .util import affected_lines, as_list, normalize_severity, split_source, to_int

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = (
    "total_files_analyzed",
    "total_vulnerabilities",
    "critical_vulnerabilities",
    "high_vulnerabilities",
    "medium_vulnerabilities",
    "low_vulnerabilities",
)


class ResultsNormalizer:
    def normalize(self, raw: dict[str, Any] | None) -> ScanResults:
        if not isinstance(raw, dict):
            raw = {}
        return ScanResults(
            files=tuple(self._files(raw.get("code_analysis"))),
            dependencies=tuple(self._dependencies(raw.get("dependency_vulnerabilities"))),
            summary=self._summary(raw.get("summary")),
        )

    def normalize_file(self, entry: dict[str, Any]) -> FileAnalysis:
        static = entry.get("static_analysis") or {}
        vulns = static.get("vulnerabilities") if isinstance(static, dict) else None

        findings: list[VulnerabilityFinding] = []
        for v in as_list(vulns):
            if not isinstance(v, dict):
                continue
            findings.append(
                VulnerabilityFinding(
                    severity=normalize_severity(v.get("severity")),
                    description=str(v.get("description") or ""),
                    affected_lines=affected_lines(v),
                )
            )

        narrative = entry.get("ai_analysis")
        return FileAnalysis(
            file_path=str(entry.get("file") or ""),
            original_source=split_source(entry.get("original_code")),
            findings=tuple(findings),
            narrative=narrative if isinstance(narrative, str) else None,
        )

    def _files(self, entries: Any) -> list[FileAnalysis]:
        out: list[FileAnalysis] = []
        for entry in as_list(entries):
            if not isinstance(entry, dict) or not entry.get("file"):
                logger.debug("Skipping malformed code_analysis entry: %r", entry)
                continue
            out.append(self.normalize_file(entry))
        return out

    @staticmethod
    def _dependencies(entries: Any) -> list[DependencyReport]:
        out: list[DependencyReport] = []
        for entry in as_list(entries):
            if not isinstance(entry, dict) or not entry.get("package"):
                logger.debug("Skipping malformed dependency entry: %r", entry)
                continue
            vulns = tuple(
                DependencyVulnerability(
                    cve_id=str(v.get("cve_id") or ""),
                    severity=str(v.get("severity") or ""),
                    description=str(v.get("description") or ""),
                )
                for v in as_list(entry.get("vulnerabilities"))
                if isinstance(v, dict)
            )
            out.append(
                DependencyReport(
                    package=str(entry["package"]),
                    version=str(entry.get("version") or ""),
                    vulnerabilities=vulns,
                )
            )
        return out

    @staticmethod
    def _summary(raw: Any) -> ScanSummary | None:
        if not isinstance(raw, dict):
            return None
        return ScanSummary(**{name: to_int(raw.get(name)) for name in SUMMARY_FIELDS})
