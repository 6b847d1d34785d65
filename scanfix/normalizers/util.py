from __future__ import annotations

from typing import Any

from scanfix.domain.models import SEVERITIES


def to_int(value: Any) -> int | None:
    """Best-effort integer coercion; ``None`` for anything non-numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def normalize_severity(raw: Any) -> str:
    sev = str(raw or "LOW").strip().upper()
    return sev if sev in SEVERITIES else "LOW"


def affected_lines(vuln: dict) -> tuple[int, ...]:
    """
    Read candidate lines from a backend vulnerability entry.

    ``line_numbers`` (list) wins over the single ``line_number``. Order is
    kept, duplicates and non-integers are dropped.
    """
    raw = vuln.get("line_numbers")
    if not raw:
        single = vuln.get("line_number")
        raw = [single] if single is not None else []
    if not isinstance(raw, (list, tuple)):
        raw = [raw]

    out: list[int] = []
    for item in raw:
        n = to_int(item)
        if n is not None and n not in out:
            out.append(n)
    return tuple(out)


def split_source(text: Any) -> tuple[str, ...]:
    if not isinstance(text, str):
        return ()
    return tuple(text.split("\n"))


def as_list(value: Any) -> list | tuple:
    """``value`` if it is a list or tuple, otherwise an empty list."""
    return value if isinstance(value, (list, tuple)) else []
