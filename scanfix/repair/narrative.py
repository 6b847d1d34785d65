"""Pull line directives out of the free-text narrative.

This is a heuristic, not a parser. A directive is "line <n>", then (lazily)
one of the fix phrases, then (lazily) the first backtick-delimited fragment.
Phrasing that does not fit simply yields nothing, and the keyword fallback
takes over.
"""

from __future__ import annotations

import re

from scanfix.domain.models import CorrectionDirective, FileAnalysis

from .base import DirectiveSource

RECOMMENDATION_PATTERN = re.compile(
    r"line\s+(\d+)[\s\S]+?(recommended fix|suggested fix|fix)[\s\S]+?`([^`]+)`",
    re.IGNORECASE,
)


def extract_directives(narrative: str | None) -> list[CorrectionDirective]:
    if not narrative:
        return []
    return [
        CorrectionDirective(target_line=int(m.group(1)), replacement_text=m.group(3).strip())
        for m in RECOMMENDATION_PATTERN.finditer(narrative)
    ]


class NarrativeDirectiveSource(DirectiveSource):
    def name(self) -> str:
        return "narrative"

    def directives(self, file: FileAnalysis) -> list[CorrectionDirective]:
        return extract_directives(file.narrative)
