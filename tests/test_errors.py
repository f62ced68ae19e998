from __future__ import annotations

from pathlib import Path

from ruffman import errors
from ruffman.errors import (
    BadMagic,
    ChecksumMismatch,
    DecodeError,
    FormatError,
    RuffmanError,
    UnsupportedVersion,
    UsageError,
)


def test_exit_codes_are_unique() -> None:
    codes = [e.code for e in errors.EXIT_CODES]
    names = [e.name for e in errors.EXIT_CODES]
    assert len(set(codes)) == len(codes)
    assert len(set(names)) == len(names)
    assert errors.exit_code_info(errors.EXIT_IO).name == "IO"
    assert errors.exit_code_info(99) is None


def test_hierarchy_and_exit_codes() -> None:
    for cls in (BadMagic, UnsupportedVersion, DecodeError, ChecksumMismatch):
        assert issubclass(cls, FormatError)
    assert issubclass(FormatError, RuffmanError)
    assert issubclass(UsageError, RuffmanError)

    assert FormatError("x").exit_code == errors.EXIT_FORMAT
    assert BadMagic("x").exit_code == errors.EXIT_FORMAT
    assert UnsupportedVersion("x").exit_code == errors.EXIT_UNSUPPORTED_VERSION
    assert DecodeError("x").exit_code == errors.EXIT_DECODE
    assert ChecksumMismatch("x").exit_code == errors.EXIT_CHECKSUM
    assert UsageError("x").exit_code == errors.EXIT_USAGE


def test_format_error_names_the_field() -> None:
    e = FormatError("truncated", field="crc32")
    assert e.field == "crc32"
    assert str(e) == "crc32: truncated"
    assert FormatError("plain").field is None
    assert str(FormatError("plain")) == "plain"


def test_exit_codes_doc_is_up_to_date() -> None:
    doc = Path(__file__).resolve().parents[1] / "docs" / "exit_codes.md"
    assert doc.read_text(encoding="utf-8") == errors.render_exit_codes_markdown()
