"""
Hash commitments over pool data (pool ids, snapshot roots).

A commitment is `"0x" + sha256(tag + body)` where `tag` is
`b"fixedswap/<kind>/v<version>\\n"` and `body` is compact, key-sorted UTF-8 JSON.
Amounts must be ints or decimal strings: floats cannot be committed to.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def _require_committable(value: Any, path: str = "$") -> None:
    if isinstance(value, float):
        raise TypeError(f"{path}: float amounts cannot be committed to")
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: keys must be strings, got {key!r}")
            _require_committable(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _require_committable(item, f"{path}[{i}]")


def canonical_json_bytes(value: Any) -> bytes:
    _require_committable(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def commitment(kind: str, value: Any, *, version: int = 1) -> str:
    """0x-prefixed sha256 of `value`, tagged with what it commits to."""
    if not kind or not kind.isidentifier():
        raise ValueError(f"commitment kind must be an identifier: {kind!r}")
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError(f"commitment version must be a positive int: {version!r}")
    tag = f"fixedswap/{kind}/v{version}\n".encode("ascii")
    return "0x" + hashlib.sha256(tag + canonical_json_bytes(value)).hexdigest()
