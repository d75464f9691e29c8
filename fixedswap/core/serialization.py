"""Canonical serialization for wire payloads.

canonical_bytes(obj) -> Result[bytes, str]: deterministic JSON bytes
(sorted keys, compact separators). Integers stay exact at any size.
"""

from __future__ import annotations

import json
from typing import Any

from fixedswap.core.result import Err, Ok


def _to_serializable(obj: object) -> Any:
    """Recursively convert a value to a JSON-compatible Python value."""
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, (tuple, list)):
        return [_to_serializable(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_serializable(v) for k, v in obj.items()}
    msg = f"Cannot serialize {type(obj).__name__}"
    raise TypeError(msg)


def canonical_bytes(obj: object) -> Ok[bytes] | Err[str]:
    """Convert a value to canonical JSON bytes. Never raises."""
    try:
        serializable = _to_serializable(obj)
    except TypeError as e:
        return Err(f"Unsupported type in canonical serialization: {e}")
    return Ok(
        json.dumps(serializable, sort_keys=True, separators=(",", ":")).encode("utf-8")
    )
