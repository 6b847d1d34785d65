from __future__ import annotations

from dataclasses import dataclass

from scanfix.domain.models import CorrectionDirective, FileAnalysis

from .base import DirectiveSource


@dataclass
class DirectiveSourceRegistry:
    sources: list[DirectiveSource]

    def pick(self, file: FileAnalysis) -> tuple[str | None, list[CorrectionDirective]]:
        """Return the first source (by order) that yields any directive."""
        for s in self.sources:
            found = s.directives(file)
            if found:
                return s.name(), found
        return None, []
