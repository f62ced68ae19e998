from __future__ import annotations

from typing import Dict, Optional, Tuple

from ruffman.errors import DecodeError

from .bitio import BitReader, BitWriter
from .code_table import build_code_table
from .freq_table import FrequencyTable, build_freq_table
from .huffman_tree import HuffmanNode, build_huffman_tree


def encode_data(data: bytes, codes: Dict[int, str]) -> Tuple[bytes, int]:
    """
    data -> (bitstream, bit_len)
    bit_len = number of meaningful bits; the rest of the last byte is zero padding.
    """
    if not data:
        return b"", 0

    packed = {sym: (int(code, 2), len(code)) for sym, code in codes.items()}
    w = BitWriter()
    for b in data:
        value, nbits = packed[b]
        w.write(value, nbits)
    return w.getvalue(), w.bit_len


def decode_bitstream(root: Optional[HuffmanNode], bitstream: bytes, n: int) -> bytes:
    """
    Walk ``bitstream`` against ``root`` until ``n`` symbols are emitted.

    Running out of bits mid-code, hitting a missing branch, or leaving more
    than zero padding behind raises DecodeError.
    """
    if n == 0:
        if bitstream:
            raise DecodeError("payload present but no symbols declared", field="payload")
        return b""
    if root is None:
        raise DecodeError(f"{n} symbols declared but the tree is empty", field="payload")

    reader = BitReader(bitstream)
    out = bytearray()
    while len(out) < n:
        node = root
        while not node.is_leaf:
            nxt = node.right if reader.read_bit() else node.left
            if nxt is None:
                raise DecodeError(
                    f"no branch at bit {reader.pos - 1} (symbol #{len(out)})", field="payload"
                )
            node = nxt
        out.append(node.symbol)  # type: ignore[arg-type]

    reader.check_padding()
    return bytes(out)


def huffman_compress_core(data: bytes, jobs: int = 1) -> Tuple[FrequencyTable, bytes, int]:
    """
    data -> (freq table, bitstream, bit_len)
    """
    table = build_freq_table(data, jobs=jobs)
    root = build_huffman_tree(table)
    if root is None:
        return table, b"", 0
    codes = build_code_table(root)
    bitstream, bit_len = encode_data(data, codes)
    return table, bitstream, bit_len


def huffman_decompress_core(table: FrequencyTable, bitstream: bytes, n: int) -> bytes:
    """
    (freq table, bitstream, n) -> data
    """
    return decode_bitstream(build_huffman_tree(table), bitstream, n)


class CodecHuffman:
    codec_id = "huffman"

    def __init__(self, jobs: int = 1) -> None:
        self.jobs = max(1, int(jobs))

    def compress_bytes(self, data: bytes) -> Tuple[FrequencyTable, bytes, int]:
        return huffman_compress_core(data, jobs=self.jobs)

    def decompress_bytes(self, table: FrequencyTable, bitstream: bytes, n: int) -> bytes:
        return huffman_decompress_core(table, bitstream, n)
