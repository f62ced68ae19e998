"""Typed errors for ruffman.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- OSError from the byte source/sink is never wrapped: the CLI maps it to EXIT_IO.
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_FORMAT = 11
EXIT_UNSUPPORTED_VERSION = 12
EXIT_DECODE = 13
EXIT_CHECKSUM = 14
EXIT_IO = 15


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid options JSON, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(EXIT_FORMAT, "FORMAT", "Malformed, truncated or inconsistent container"),
    ExitCodeInfo(EXIT_UNSUPPORTED_VERSION, "UNSUPPORTED_VERSION", "Unsupported container version"),
    ExitCodeInfo(EXIT_DECODE, "DECODE", "Huffman bitstream does not decode against the rebuilt tree"),
    ExitCodeInfo(EXIT_CHECKSUM, "CHECKSUM", "Integrity failure (CRC32 mismatch after decode)"),
    ExitCodeInfo(EXIT_IO, "IO", "Source unreadable or destination unwritable"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE. Do not edit manually.\n")
    lines.append("> Source of truth: `src/ruffman/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Library errors extend `RuffmanError` and carry an `exit_code`.\n")
    lines.append("- `DecodeError`, `BadMagic`, `UnsupportedVersion` and `ChecksumMismatch` are `FormatError`s.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class RuffmanError(Exception):
    """Base error for ruffman."""

    exit_code: int = EXIT_GENERIC


class UsageError(RuffmanError):
    exit_code = EXIT_USAGE


class FormatError(RuffmanError):
    """The container is malformed, truncated or internally inconsistent.

    ``field`` names the part of the container that failed to parse.
    """

    exit_code = EXIT_FORMAT

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(f"{field}: {message}" if field else message)
        self.field = field


class BadMagic(FormatError):
    pass


class UnsupportedVersion(FormatError):
    exit_code = EXIT_UNSUPPORTED_VERSION


class DecodeError(FormatError):
    """The bit walk could not resolve the declared symbols against the tree."""

    exit_code = EXIT_DECODE


class ChecksumMismatch(FormatError):
    exit_code = EXIT_CHECKSUM
