from __future__ import annotations
from abc import ABC, abstractmethod

from scanfix.domain.models import CorrectionDirective, FileAnalysis


class DirectiveSource(ABC):
    """Produces line directives for one analysed file."""

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def directives(self, file: FileAnalysis) -> list[CorrectionDirective]: ...
