"""Canned remediation comments keyed on finding descriptions.

Used only when the narrative yields no directive. The first matching keyword
wins; a finding that matches none contributes nothing.
"""

from __future__ import annotations

from scanfix.domain.models import CorrectionDirective, FileAnalysis

from .base import DirectiveSource

# Checked in order; case-sensitive substring match on the description
KEYWORD_TEMPLATES: tuple[tuple[str, str], ...] = (
    ("eval", "SECURITY: Use a safer alternative to eval()"),
    ("command injection", "SECURITY: Use parameterized commands or input validation"),
    ("hardcoded", "SECURITY: Use environment variables or secure storage for credentials"),
    ("file", "SECURITY: Validate file paths and implement proper access controls"),
)

HASH_COMMENT_SUFFIXES = (".py", ".pyw")


def comment_token(file_name: str) -> str:
    return "#" if file_name.lower().endswith(HASH_COMMENT_SUFFIXES) else "//"


def template_for(description: str) -> str | None:
    text = description or ""
    for keyword, template in KEYWORD_TEMPLATES:
        if keyword in text:
            return template
    return None


class KeywordFallbackSource(DirectiveSource):
    def name(self) -> str:
        return "keyword-fallback"

    def directives(self, file: FileAnalysis) -> list[CorrectionDirective]:
        token = comment_token(file.file_name)
        out: list[CorrectionDirective] = []
        for finding in file.findings:
            template = template_for(finding.description)
            if template is None:
                continue
            for line in finding.affected_lines:
                out.append(CorrectionDirective(target_line=line, replacement_text=f"{token} {template}"))
        return out
