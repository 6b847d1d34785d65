from __future__ import annotations

import logging
from typing import Callable

from scanfix.domain.models import FileAnalysis, SynthesizedCorrection
from scanfix.repair.synthesizer import synthesize

logger = logging.getLogger(__name__)


class CorrectionCache:
    """
    Memoizes synthesized corrections for one completed scan.

    Keyed by basename, so two files sharing a basename share an entry (the
    first one presented wins). Only ever cleared as a whole.
    """

    def __init__(
        self,
        synthesizer: Callable[[FileAnalysis], SynthesizedCorrection | None] = synthesize,
    ) -> None:
        self._synthesize = synthesizer
        self._entries: dict[str, SynthesizedCorrection] = {}

    def get_or_compute(self, file: FileAnalysis) -> SynthesizedCorrection | None:
        key = file.file_name
        hit = self._entries.get(key)
        if hit is not None:
            return hit

        correction = self._synthesize(file)
        if correction is not None:
            self._entries[key] = correction
        return correction

    def get(self, file_name: str) -> SynthesizedCorrection | None:
        return self._entries.get(file_name)

    def clear(self) -> None:
        if self._entries:
            logger.debug("Clearing %d cached corrections", len(self._entries))
        self._entries.clear()

    def __contains__(self, file_name: object) -> bool:
        return file_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
