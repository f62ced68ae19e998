"""ruffman CLI.

This is the stable CLI entrypoint (console-script: ``ruffman``).

  ruffman compress SRC DEST   [--config JSON] [--jobs N] [--no-checksum] [--force] [--quiet]
  ruffman extract  SRC DEST   [--force]
  ruffman verify   SRC        [--full] [--json]
  ruffman info     SRC        [--json]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ruffman import __version__
from ruffman.errors import EXIT_GENERIC, EXIT_IO, EXIT_OK, EXIT_USAGE, RuffmanError, UsageError
from ruffman.fileio import FileStats, compress_file, extract_file
from ruffman.options import CompressOptions, OptionsError, load_options

PROG = "ruffman"


def _err(msg: str) -> None:
    print(f"[{PROG}] {msg}", file=sys.stderr)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def print_stats(label: str, st: FileStats) -> None:
    print(f"=== ruffman {label} ===")
    print(f"Input          : {st.src} ({st.in_size} bytes)")
    print(f"Output         : {st.dest} ({st.out_size} bytes)")
    if st.in_size:
        print(f"Ratio          : {st.ratio:.3f} (1.0 = no compression)")
    print("========================")


def _cmd_compress(ns: argparse.Namespace) -> int:
    base = load_options(ns.config) if ns.config is not None else CompressOptions()
    # precedence: CLI flag > config > default
    opts = base.merged(checksum=False if ns.no_checksum else None, jobs=ns.jobs)

    st = compress_file(ns.src, ns.dest, opts, force=bool(ns.force))
    if not ns.quiet:
        print_stats("compress", st)
    return EXIT_OK


def _cmd_extract(ns: argparse.Namespace) -> int:
    st = extract_file(ns.src, ns.dest, force=bool(ns.force))
    if not ns.quiet:
        print(f"Extracted: {st.dest} ({st.out_size} bytes)")
    return EXIT_OK


def _cmd_verify(ns: argparse.Namespace) -> int:
    from ruffman.verify import verify_container_file

    info = verify_container_file(ns.src, full=bool(ns.full))
    if ns.json:
        obj = {"ok": True, "full": bool(ns.full), "n_symbols": info.n_symbols}
        print(json.dumps(obj, sort_keys=True))
    else:
        print("OK")
    return EXIT_OK


def _cmd_info(ns: argparse.Namespace) -> int:
    from ruffman.verify import describe_container_file

    desc = describe_container_file(ns.src)
    if ns.json:
        print(json.dumps(desc, sort_keys=True))
        return EXIT_OK

    print(f"Container      : {desc['path']} ({desc['container_size']} bytes)")
    print(f"Symbols        : {desc['n_symbols']} ({desc['n_distinct']} distinct)")
    print(f"Payload        : {desc['payload_size']} bytes ({desc['payload_bits']} bits)")
    print(f"CRC32          : {desc['crc32'] or '-'}")
    for sym, code in desc["codes"].items():
        print(f"  {sym}  {code}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=PROG, description="Huffman file compressor")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a file into a ruffman container")
    p_c.add_argument("src", type=Path)
    p_c.add_argument("dest", type=Path)
    p_c.add_argument(
        "--config",
        default=None,
        help="Options JSON ('@file.json' or inline). CLI flags take precedence.",
    )
    p_c.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Threads for frequency counting (default: config or 1). Output is identical for any value.",
    )
    p_c.add_argument("--no-checksum", action="store_true", help="Do not store a CRC32 of the input")
    p_c.add_argument("--force", action="store_true", help="Overwrite DEST if it exists")
    p_c.add_argument("--quiet", action="store_true", help="Do not print stats")
    _add_common_args(p_c)

    p_x = sub.add_parser("extract", help="Extract a ruffman container")
    p_x.add_argument("src", type=Path)
    p_x.add_argument("dest", type=Path)
    p_x.add_argument("--force", action="store_true", help="Overwrite DEST if it exists")
    p_x.add_argument("--quiet", action="store_true", help="Do not print a summary")
    _add_common_args(p_x)

    p_v = sub.add_parser("verify", help="Verify a container")
    p_v.add_argument("src", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode the payload and check the CRC32")
    p_v.add_argument("--json", action="store_true", help="Print a JSON object")
    _add_common_args(p_v)

    p_i = sub.add_parser("info", help="Describe a container (header + code table)")
    p_i.add_argument("src", type=Path)
    p_i.add_argument("--json", action="store_true", help="Print a JSON object")
    _add_common_args(p_i)

    return p


_COMMANDS = {
    "compress": _cmd_compress,
    "extract": _cmd_extract,
    "verify": _cmd_verify,
    "info": _cmd_info,
}


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if getattr(ns, "jobs", None) is not None and ns.jobs < 1:
            raise UsageError("--jobs must be >= 1")
        return _COMMANDS[ns.cmd](ns)

    except SystemExit:
        raise
    except OptionsError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        _err(str(e))
        return EXIT_USAGE
    except RuffmanError as e:
        if getattr(ns, "debug", False):
            raise
        _err(f"{type(e).__name__}: {e}")
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except OSError as e:
        if getattr(ns, "debug", False):
            raise
        _err(f"io error: {e}")
        return EXIT_IO
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        _err(f"error: {e}")
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
