"""File-level service: read the whole source, transform in memory, write the whole sink.

OSError (missing source, existing destination, permissions) is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ruffman.engine.engine import compress, extract
from ruffman.options import CompressOptions


@dataclass(frozen=True)
class FileStats:
    src: Path
    dest: Path
    in_size: int
    out_size: int

    @property
    def ratio(self) -> float:
        return (self.out_size / self.in_size) if self.in_size else 0.0


def read_all(path: Path) -> bytes:
    return Path(path).read_bytes()


def write_all(path: Path, data: bytes, *, force: bool = False) -> None:
    # "xb": never clobber an existing file unless asked to.
    with Path(path).open("wb" if force else "xb") as f:
        f.write(data)


def compress_file(
    src: Path, dest: Path, options: CompressOptions | None = None, *, force: bool = False
) -> FileStats:
    raw = read_all(src)
    blob = compress(raw, options)
    write_all(dest, blob, force=force)
    return FileStats(src=Path(src), dest=Path(dest), in_size=len(raw), out_size=len(blob))


def extract_file(src: Path, dest: Path, *, force: bool = False) -> FileStats:
    blob = read_all(src)
    data = extract(blob)
    write_all(dest, data, force=force)
    return FileStats(src=Path(src), dest=Path(dest), in_size=len(blob), out_size=len(data))
