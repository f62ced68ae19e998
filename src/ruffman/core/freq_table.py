from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

ALPHABET_SIZE = 256


@dataclass(frozen=True)
class FrequencyTable:
    """Occurrence count per byte value.

    ``entries`` holds only the symbols that occur, as ``(symbol, count)``
    pairs sorted by ascending symbol. That order is the on-disk order and
    the leaf insertion order of the tree builder.
    """

    entries: tuple[tuple[int, int], ...] = ()

    @classmethod
    def from_counts(cls, counts: dict[int, int]) -> "FrequencyTable":
        return cls(tuple((sym, f) for sym, f in sorted(counts.items()) if f > 0))

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[int, int]]) -> "FrequencyTable":
        """Build from explicit entries, rejecting anything a decoder could not trust."""
        out: list[tuple[int, int]] = []
        prev = -1
        for sym, f in entries:
            if not 0 <= sym < ALPHABET_SIZE:
                raise ValueError(f"freq table: symbol out of range: {sym}")
            if sym <= prev:
                raise ValueError(f"freq table: symbols not strictly ascending at {sym}")
            if f <= 0:
                raise ValueError(f"freq table: non-positive count for symbol {sym}")
            out.append((int(sym), int(f)))
            prev = sym
        return cls(tuple(out))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    @property
    def total(self) -> int:
        return sum(f for _, f in self.entries)

    def as_dict(self) -> dict[int, int]:
        return dict(self.entries)


def _split_shards(data: bytes, jobs: int) -> list[bytes]:
    step = -(-len(data) // jobs)
    return [data[i : i + step] for i in range(0, len(data), step)]


def build_freq_table(data: bytes, jobs: int = 1) -> FrequencyTable:
    """Count every byte value in ``data``.

    With ``jobs > 1`` the input is split into contiguous shards counted in a
    thread pool. Shard counters are merged before sorting, so the table does
    not depend on how the input was split.
    """
    data = bytes(data)
    jobs = max(1, int(jobs))
    if jobs == 1 or len(data) < jobs:
        return FrequencyTable.from_counts(Counter(data))

    merged: Counter[int] = Counter()
    with ThreadPoolExecutor(max_workers=jobs) as ex:
        for part in ex.map(Counter, _split_shards(data, jobs)):
            merged.update(part)
    return FrequencyTable.from_counts(merged)
