"""Remediation synthesizer.

Flow for one file:
  1. Nothing to do without findings (or without source lines)
  2. Ask directive sources in order: narrative first, keyword fallback second
  3. Apply the directives as whole-line replacements
  4. ``has_explicit_fix`` is set only when at least one directive landed

The result depends only on the ``FileAnalysis`` passed in.
"""

from __future__ import annotations

import logging

from scanfix.domain.models import FileAnalysis, SynthesizedCorrection
from scanfix.services.patch_service import PatchService

from .keyword_fallback import KeywordFallbackSource
from .narrative import NarrativeDirectiveSource
from .registry import DirectiveSourceRegistry

logger = logging.getLogger(__name__)


def build_directive_registry() -> DirectiveSourceRegistry:
    return DirectiveSourceRegistry([NarrativeDirectiveSource(), KeywordFallbackSource()])


_registry = build_directive_registry()


def synthesize(
    file: FileAnalysis,
    registry: DirectiveSourceRegistry | None = None,
) -> SynthesizedCorrection | None:
    if not file.findings or not file.original_source:
        return None

    source_name, directives = (registry or _registry).pick(file)
    patched, applied = PatchService.apply_directives(file.original_source, directives)

    logger.debug(
        "Synthesized %s: %d directives from %s, %d applied",
        file.file_name,
        len(directives),
        source_name or "none",
        len(applied),
        extra={"file_name": file.file_name},
    )

    return SynthesizedCorrection(
        file_name=file.file_name,
        patched_source=patched,
        has_explicit_fix=len(applied) > 0,
        directive_source=source_name,
        applied_lines=applied,
    )
