from __future__ import annotations

from dataclasses import dataclass

from ruffman.core.freq_table import ALPHABET_SIZE, FrequencyTable
from ruffman.errors import BadMagic, FormatError, UnsupportedVersion

MAGIC = b"RUF"
VERSION = 1

# flags
F_HAS_CRC32 = 0x01
F_KNOWN = F_HAS_CRC32

_VARINT_MAX_BYTES = 10
_VARINT_LIMIT = 1 << 64


def _enc_varint(x: int) -> bytes:
    if x < 0:
        raise ValueError("negative varint not supported")
    if x >= _VARINT_LIMIT:
        raise ValueError(f"varint out of 64-bit range: {x}")
    out = bytearray()
    while True:
        b = x & 0x7F
        x >>= 7
        if x:
            out.append(0x80 | b)
        else:
            out.append(b)
            break
    return bytes(out)


def _dec_varint(buf: bytes, idx: int, *, field: str) -> tuple[int, int]:
    shift = 0
    x = 0
    for _ in range(_VARINT_MAX_BYTES):
        if idx >= len(buf):
            raise FormatError("truncated varint", field=field)
        b = buf[idx]
        idx += 1
        x |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            # one encoding per value: no trailing zero groups
            if b == 0 and shift:
                raise FormatError("non-canonical varint", field=field)
            if x >= _VARINT_LIMIT:
                raise FormatError("varint too large", field=field)
            return x, idx
        shift += 7
    raise FormatError("varint too large", field=field)


@dataclass(frozen=True)
class Container:
    """Everything needed to rebuild the tree and decode the payload."""

    table: FrequencyTable
    n_symbols: int
    payload: bytes
    crc32: int | None = None


# -------------------
# Container v1
# [MAGIC(3)|VER(1)|FLAGS(1)|varint(NENT)|NENT*(SYM(1)|varint(COUNT))|varint(N)|CRC32(u32)?|PAYLOAD]
# -------------------
def pack_container(c: Container) -> bytes:
    if c.n_symbols != c.table.total:
        raise ValueError(f"container: n_symbols={c.n_symbols} != table total={c.table.total}")

    flags = F_HAS_CRC32 if c.crc32 is not None else 0
    chunks = [MAGIC, bytes([VERSION, flags]), _enc_varint(len(c.table))]
    for sym, f in c.table:
        chunks.append(bytes([sym]))
        chunks.append(_enc_varint(f))
    chunks.append(_enc_varint(c.n_symbols))
    if c.crc32 is not None:
        chunks.append((c.crc32 & 0xFFFFFFFF).to_bytes(4, "big"))

    # payload: rest-of-file
    chunks.append(c.payload)
    return b"".join(chunks)


def unpack_container(blob: bytes) -> Container:
    blob = bytes(blob)
    if len(blob) < 3 or blob[:3] != MAGIC:
        raise BadMagic("not a ruffman container", field="magic")
    if len(blob) < 5:
        raise FormatError("header truncated", field="header")

    ver = blob[3]
    if ver != VERSION:
        raise UnsupportedVersion(f"unsupported version: {ver}", field="version")
    flags = blob[4]
    if flags & ~F_KNOWN:
        raise FormatError(f"unknown flags: 0x{flags:02x}", field="flags")

    idx = 5
    n_entries, idx = _dec_varint(blob, idx, field="freq_table.size")
    if n_entries > ALPHABET_SIZE:
        raise FormatError(f"too many entries: {n_entries}", field="freq_table.size")

    entries: list[tuple[int, int]] = []
    for i in range(n_entries):
        if idx >= len(blob):
            raise FormatError(f"truncated at entry {i}", field="freq_table")
        sym = blob[idx]
        idx += 1
        f, idx = _dec_varint(blob, idx, field=f"freq_table[{i}].count")
        entries.append((sym, f))
    try:
        table = FrequencyTable.from_entries(entries)
    except ValueError as e:
        raise FormatError(str(e), field="freq_table") from e

    n_symbols, idx = _dec_varint(blob, idx, field="n_symbols")
    if not table and n_symbols:
        raise FormatError(f"empty table but {n_symbols} symbols declared", field="n_symbols")
    if n_symbols != table.total:
        raise FormatError(
            f"declared {n_symbols} symbols, table counts {table.total}", field="n_symbols"
        )

    crc32 = None
    if flags & F_HAS_CRC32:
        if idx + 4 > len(blob):
            raise FormatError("truncated", field="crc32")
        crc32 = int.from_bytes(blob[idx : idx + 4], "big")
        idx += 4

    payload = blob[idx:]
    if not table and payload:
        raise FormatError("payload present for an empty table", field="payload")

    return Container(table=table, n_symbols=n_symbols, payload=payload, crc32=crc32)
