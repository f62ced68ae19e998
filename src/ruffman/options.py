"""Compression options (v1) for ruffman.

Goal: make compress runs reproducible from a small JSON document (CLI, CI).

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

SPEC_ID_V1 = "ruffman.options.v1"


class OptionsError(ValueError):
    pass


def _load_json_arg(options_arg: str) -> dict[str, Any]:
    s = options_arg.strip()
    if not s:
        raise OptionsError("options: empty argument")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise OptionsError(f"options: file not found: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as e:
            raise OptionsError(f"options: invalid JSON in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise OptionsError(f"options: JSON in {p} must be an object")
        return obj

    try:
        obj = json.loads(s)
    except json.JSONDecodeError as e:
        raise OptionsError(f"options: invalid inline JSON: {e}") from e
    if not isinstance(obj, dict):
        raise OptionsError("options: inline JSON must be an object")
    return obj


def _optional_bool(obj: dict[str, Any], key: str) -> bool | None:
    if key not in obj:
        return None
    v = obj.get(key)
    if isinstance(v, bool):
        return v
    raise OptionsError(f"options: field '{key}' must be a boolean")


def _optional_jobs(obj: dict[str, Any]) -> int | None:
    if "jobs" not in obj:
        return None
    v = obj.get("jobs")
    # bool is an int subclass
    if isinstance(v, bool) or not isinstance(v, int) or v < 1:
        raise OptionsError("options: field 'jobs' must be an integer >= 1")
    return v


@dataclass(frozen=True)
class CompressOptions:
    """How to build a container. Neither field changes the decoded bytes."""

    checksum: bool = True
    jobs: int = 1

    def merged(self, *, checksum: bool | None = None, jobs: int | None = None) -> "CompressOptions":
        """Return a copy with explicit (non-None) overrides applied."""
        return CompressOptions(
            checksum=self.checksum if checksum is None else bool(checksum),
            jobs=self.jobs if jobs is None else max(1, int(jobs)),
        )


def load_options(options_arg: str) -> CompressOptions:
    """Load and validate compression options.

    options_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _load_json_arg(options_arg)

    allowed = {"spec", "checksum", "jobs"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise OptionsError(f"options: unsupported keys: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != SPEC_ID_V1:
        raise OptionsError(f"options: unsupported spec: {spec_id!r} (expected {SPEC_ID_V1!r})")

    return CompressOptions().merged(checksum=_optional_bool(obj, "checksum"), jobs=_optional_jobs(obj))
