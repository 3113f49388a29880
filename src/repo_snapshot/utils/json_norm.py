"""Canonical JSON serialization for scan reports.

Every JSON artifact goes through :func:`stable_json_dumps` so that two
scans of the same tree produce byte-identical files:

  - keys sorted, two-space indent, trailing newline
  - ``Path`` objects become POSIX strings
  - dataclasses expose ``to_dict()`` or fall back to ``asdict``
  - read-only mappings and tuples become plain dicts and lists
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Any, Mapping


def _to_builtin(obj: Any) -> Any:
    if obj is None or isinstance(obj, (str, int, bool, float)):
        return obj
    if isinstance(obj, Enum):
        return _to_builtin(obj.value)
    if isinstance(obj, Path):
        return obj.as_posix()
    if is_dataclass(obj) and not isinstance(obj, type):
        to_dict = getattr(obj, "to_dict", None)
        return _to_builtin(to_dict() if callable(to_dict) else asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v) for v in obj]
    return str(obj)


def _round_floats(obj: Any, *, ndigits: int = 4) -> Any:
    """Round floats recursively so percentages compare across platforms."""
    if isinstance(obj, float):
        return round(obj, ndigits)
    if isinstance(obj, Mapping):
        return {k: _round_floats(v, ndigits=ndigits) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_round_floats(v, ndigits=ndigits) for v in obj]
    return obj


def stable_json_dumps(
    obj: Any,
    *,
    ci_mode: bool = False,
    indent: int | None = 2,
) -> str:
    """Serialize *obj* to canonical JSON text (with trailing newline)."""
    built = _to_builtin(obj)
    if ci_mode:
        built = _round_floats(built)
    return json.dumps(built, indent=indent, sort_keys=True, ensure_ascii=False) + "\n"


def stable_json_dump(
    obj: Any,
    fp: IO[str],
    *,
    ci_mode: bool = False,
    indent: int | None = 2,
) -> None:
    fp.write(stable_json_dumps(obj, ci_mode=ci_mode, indent=indent))
