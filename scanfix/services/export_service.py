"""Export a patched file: fire-and-forget, reported through a notice."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from scanfix.core.config import settings
from scanfix.domain.models import SynthesizedCorrection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    ok: bool
    message: str


def export_correction(
    correction: SynthesizedCorrection,
    sink: Callable[[str], None],
    done: str = "{file_name} copied to clipboard",
    failed: str = "Failed to copy to clipboard",
) -> Notice:
    """Hand the patched text to ``sink``; ``done``/``failed`` may use ``{file_name}``."""
    try:
        sink(correction.code)
    except Exception as e:
        logger.error("Could not export %s: %s", correction.file_name, e)
        return Notice(ok=False, message=failed.format(file_name=correction.file_name))
    return Notice(ok=True, message=done.format(file_name=correction.file_name))


def file_sink(file_name: str, export_dir: str | None = None) -> Callable[[str], None]:
    """Sink that writes the text to ``EXPORT_DIR/<file_name>``."""
    target = Path(export_dir or settings.EXPORT_DIR) / file_name

    def _write(text: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")

    return _write


def export_to_file(correction: SynthesizedCorrection, export_dir: str | None = None) -> Notice:
    directory = export_dir or settings.EXPORT_DIR
    return export_correction(
        correction,
        file_sink(correction.file_name, export_dir=directory),
        done=f"{{file_name}} saved to {directory}",
        failed="Failed to save {file_name}",
    )
