#!/usr/bin/env python3
"""Run one scan from the command line and export the corrected files.

    scanfix --repo https://github.com/owner/repo --out fixed/
    scanfix --code-file app.py --language python
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from scanfix.client.base import ScanBackend
from scanfix.client.http_client import HttpScanBackend
from scanfix.core.config import settings
from scanfix.core.errors import SubmissionError
from scanfix.core.logging import setup_logging
from scanfix.domain.models import LANGUAGES, ScanRequest
from scanfix.services.export_service import export_to_file
from scanfix.services.scan_controller import ScanController

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="scanfix", description=__doc__.splitlines()[0])
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--repo", help="Repository URL to scan")
    src.add_argument("--code-file", type=Path, help="Local file whose content is scanned inline")
    ap.add_argument("--language", choices=LANGUAGES, default="python")
    ap.add_argument("--no-deps", action="store_true", help="Skip the dependency vulnerability check")
    ap.add_argument("--out", default=settings.EXPORT_DIR, help="Directory for corrected files")
    ap.add_argument("--base-url", default=settings.SCANNER_BASE_URL)
    return ap


async def run_scan(request: ScanRequest, backend: ScanBackend, out_dir: str) -> int:
    controller = ScanController(backend)
    snapshot = await controller.run(request)

    if snapshot is None or snapshot.state != "COMPLETED":
        message = snapshot.error_message if snapshot else "scan superseded"
        print(f"[scan] FAILED: {message}", file=sys.stderr)
        return 1

    exported = 0
    for file, correction in controller.corrections():
        if correction is None or not correction.has_explicit_fix:
            continue
        notice = export_to_file(correction, export_dir=out_dir)
        print(f"[scan] {notice.message}" if notice.ok else f"[scan] {file.file_path}: {notice.message}")
        exported += notice.ok

    summary = snapshot.results.summary
    if summary is not None:
        print(f"[scan] vulnerabilities={summary.total_vulnerabilities} critical={summary.critical_vulnerabilities}")
    print(f"[scan] COMPLETED, {exported} corrected file(s) written to {out_dir}")
    return 0


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    request = ScanRequest(
        repository_reference=args.repo,
        inline_source=args.code_file.read_text(encoding="utf-8") if args.code_file else None,
        language_hint=args.language,
        check_dependencies=not args.no_deps,
    )

    async def _go() -> int:
        async with HttpScanBackend(base_url=args.base_url) as backend:
            return await run_scan(request, backend, args.out)

    try:
        return asyncio.run(_go())
    except SubmissionError as e:
        print(f"[scan] invalid request: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
