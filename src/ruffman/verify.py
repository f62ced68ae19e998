"""Verification helpers.

  - light (default): parse the header, rebuild the tree, check the payload size
  - full: decode the payload and check the CRC32 when present

Errors surface as the typed FormatError family; OSError is left untouched.
"""

from __future__ import annotations

import zlib
from pathlib import Path
from typing import Any

from ruffman.engine.engine import ContainerInfo, extract, inspect_container


def verify_container_bytes(blob: bytes, *, full: bool = False) -> ContainerInfo:
    info = inspect_container(blob)
    if full:
        extract(blob)
    return info


def verify_container_file(path: Path, *, full: bool = False) -> ContainerInfo:
    return verify_container_bytes(Path(path).read_bytes(), full=full)


def describe_container_file(path: Path) -> dict[str, Any]:
    p = Path(path)
    blob = p.read_bytes()
    info = inspect_container(blob)
    out: dict[str, Any] = {"path": str(p)}
    out.update(info.to_json())
    out["ratio"] = round(info.container_size / info.n_symbols, 6) if info.n_symbols else None
    out["container_crc32"] = f"{zlib.crc32(blob):08x}"
    return out
