from __future__ import annotations

from typing import Dict, Optional

from .huffman_tree import HuffmanNode


def build_code_table(root: Optional[HuffmanNode]) -> Dict[int, str]:
    """Map each leaf symbol to its root-to-leaf path ('0' = left, '1' = right)."""
    codes: Dict[int, str] = {}
    if root is None:
        return codes

    stack: list[tuple[HuffmanNode, str]] = [(root, "")]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = path  # type: ignore[index]
            continue
        if node.right is not None:
            stack.append((node.right, path + "1"))
        if node.left is not None:
            stack.append((node.left, path + "0"))
    return codes


def is_prefix_free(codes: Dict[int, str]) -> bool:
    # After sorting, a prefix always sorts right before some code it prefixes.
    ordered = sorted(codes.values())
    return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))


def payload_bit_length(freq: Dict[int, int], codes: Dict[int, str]) -> int:
    """Exact number of payload bits for a table/code pair (no padding)."""
    return sum(f * len(codes[sym]) for sym, f in freq.items())
