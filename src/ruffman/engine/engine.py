from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import Any, Dict

from ruffman.core.code_table import build_code_table, payload_bit_length
from ruffman.core.codec_huffman import CodecHuffman
from ruffman.core.huffman_tree import build_huffman_tree
from ruffman.engine.container import Container, pack_container, unpack_container
from ruffman.errors import ChecksumMismatch, FormatError
from ruffman.options import CompressOptions


def compress(data: bytes, options: CompressOptions | None = None) -> bytes:
    """bytes -> container bytes. Deterministic for a given input and options."""
    opts = options or CompressOptions()
    data = bytes(data)
    table, bitstream, _ = CodecHuffman(jobs=opts.jobs).compress_bytes(data)
    c = Container(
        table=table,
        n_symbols=len(data),
        payload=bitstream,
        crc32=zlib.crc32(data) if opts.checksum else None,
    )
    return pack_container(c)


def extract(blob: bytes) -> bytes:
    """container bytes -> original bytes."""
    c = unpack_container(blob)
    data = CodecHuffman().decompress_bytes(c.table, c.payload, c.n_symbols)
    if c.crc32 is not None and zlib.crc32(data) != c.crc32:
        raise ChecksumMismatch(
            f"crc32 mismatch: stored={c.crc32:08x} got={zlib.crc32(data):08x}", field="crc32"
        )
    return data


@dataclass(frozen=True)
class ContainerInfo:
    container_size: int
    n_symbols: int
    n_distinct: int
    payload_size: int
    payload_bits: int
    crc32: int | None
    codes: Dict[int, str]

    def to_json(self) -> Dict[str, Any]:
        return {
            "container_size": self.container_size,
            "n_symbols": self.n_symbols,
            "n_distinct": self.n_distinct,
            "payload_size": self.payload_size,
            "payload_bits": self.payload_bits,
            "crc32": None if self.crc32 is None else f"{self.crc32:08x}",
            "codes": {f"{sym:02x}": code for sym, code in sorted(self.codes.items())},
        }


def inspect_container(blob: bytes) -> ContainerInfo:
    """Parse a container and rebuild its code table without decoding the payload.

    Raises FormatError when the header is invalid or when the payload size does
    not match the bit length implied by the table.
    """
    c = unpack_container(blob)
    codes = build_code_table(build_huffman_tree(c.table))
    bits = payload_bit_length(c.table.as_dict(), codes)
    expected = (bits + 7) // 8
    if len(c.payload) != expected:
        raise FormatError(
            f"payload is {len(c.payload)} bytes, table implies {expected}", field="payload"
        )
    return ContainerInfo(
        container_size=len(blob),
        n_symbols=c.n_symbols,
        n_distinct=len(c.table),
        payload_size=len(c.payload),
        payload_bits=bits,
        crc32=c.crc32,
        codes=codes,
    )
