"""ruffman: Huffman file compressor.

Public entry points: ``compress(bytes) -> bytes`` and ``extract(bytes) -> bytes``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from ruffman.engine.engine import compress, extract  # noqa: E402

__all__ = ["__version__", "compress", "extract"]
