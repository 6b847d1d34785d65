from __future__ import annotations

import difflib
import logging
from typing import Sequence

from scanfix.domain.models import CorrectionDirective

logger = logging.getLogger(__name__)


class PatchService:
    @staticmethod
    def apply_directives(
        source: Sequence[str],
        directives: Sequence[CorrectionDirective],
    ) -> tuple[tuple[str, ...], tuple[int, ...]]:
        """
        Replace whole lines; later directives on the same line win.
        Directives outside ``[1, len(source)]`` are dropped.

        Returns (patched_lines, sorted applied line numbers).
        """
        patched = list(source)
        applied: set[int] = set()
        for d in directives:
            if 1 <= d.target_line <= len(patched):
                patched[d.target_line - 1] = d.replacement_text
                applied.add(d.target_line)
            else:
                logger.debug("Discarding directive for line %d (file has %d lines)", d.target_line, len(patched))
        return tuple(patched), tuple(sorted(applied))

    @staticmethod
    def unified_diff(original: Sequence[str], patched: Sequence[str], file_name: str) -> str:
        """Unified diff between the original and patched line sequences."""
        diff = difflib.unified_diff(
            list(original),
            list(patched),
            fromfile=f"a/{file_name}",
            tofile=f"b/{file_name}",
            lineterm="",
        )
        return "\n".join(diff)
