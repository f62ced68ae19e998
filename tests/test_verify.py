from __future__ import annotations

from pathlib import Path

import pytest

from ruffman.engine.engine import compress
from ruffman.errors import ChecksumMismatch, FormatError
from ruffman.fileio import compress_file, extract_file
from ruffman.options import CompressOptions
from ruffman.verify import describe_container_file, verify_container_bytes, verify_container_file


def test_file_roundtrip_and_stats(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    packed = tmp_path / "a.ruf"
    back = tmp_path / "a.back"
    data = b"FATTURA N. 1\nRIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\nTOTALE 12.00\n" * 30
    src.write_bytes(data)

    st = compress_file(src, packed, CompressOptions(jobs=2))
    assert st.in_size == len(data)
    assert st.out_size == packed.stat().st_size
    assert 0.0 < st.ratio < 1.0

    st = extract_file(packed, back)
    assert st.out_size == len(data)
    assert back.read_bytes() == data


def test_destination_is_created_exclusively(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    dest = tmp_path / "a.ruf"
    src.write_bytes(b"abc")
    dest.write_bytes(b"old")

    with pytest.raises(FileExistsError):
        compress_file(src, dest)
    assert dest.read_bytes() == b"old"

    compress_file(src, dest, force=True)
    assert dest.read_bytes() == compress(b"abc")


def test_verify_light_and_full(tmp_path: Path) -> None:
    p = tmp_path / "x.ruf"
    p.write_bytes(compress(b"HELLO 123\n" * 5))
    assert verify_container_file(p).n_symbols == 50
    assert verify_container_file(p, full=True).n_symbols == 50


def test_verify_detects_tamper() -> None:
    blob = bytearray(compress(b"HELLO 124\n"))
    blob[-1] ^= 0x01
    with pytest.raises(FormatError):
        verify_container_bytes(bytes(blob), full=True)

    blob = bytearray(compress(b"AAABBC"))
    blob[13] ^= 0x01  # first crc32 byte
    verify_container_bytes(bytes(blob))
    with pytest.raises(ChecksumMismatch):
        verify_container_bytes(bytes(blob), full=True)


def test_describe(tmp_path: Path) -> None:
    p = tmp_path / "d.ruf"
    p.write_bytes(compress(b"AAABBC"))
    d = describe_container_file(p)
    assert d["path"] == str(p)
    assert d["n_symbols"] == 6
    assert d["codes"] == {"41": "0", "42": "11", "43": "10"}
    assert d["container_size"] == p.stat().st_size
    assert d["ratio"] == round(d["container_size"] / 6, 6)

    empty = tmp_path / "e.ruf"
    empty.write_bytes(compress(b""))
    assert describe_container_file(empty)["ratio"] is None
