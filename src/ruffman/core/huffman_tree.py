from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import List, Optional

from .freq_table import FrequencyTable


# -------------------
# Huffman tree
# -------------------
@dataclass
class HuffmanNode:
    freq: int
    symbol: Optional[int] = None  # 0-255 for leaves, None for internal nodes
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None and self.left is None and self.right is None


def build_huffman_tree(table: FrequencyTable) -> Optional[HuffmanNode]:
    """Build the Huffman tree for ``table`` (None when the table is empty).

    Heap key is ``(freq, seq)``. Leaves get ``seq`` in ascending symbol order,
    merged nodes get the following values in merge order, so equal weights
    pop leaves first, lower symbols first, older merges first. The first
    node popped becomes the left child.

    This ordering is part of the container format: the decoder rebuilds the
    tree from the stored table and must get the exact same shape.
    """
    heap: List[tuple[int, int, HuffmanNode]] = []
    counter = itertools.count()

    for sym, f in table:
        heapq.heappush(heap, (f, next(counter), HuffmanNode(freq=f, symbol=sym)))

    if not heap:
        return None

    # Single symbol: internal root with the leaf on the left only (code "0").
    if len(heap) == 1:
        f, _, only = heap[0]
        return HuffmanNode(freq=f, left=only)

    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = HuffmanNode(freq=f1 + f2, left=n1, right=n2)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    return heap[0][2]
