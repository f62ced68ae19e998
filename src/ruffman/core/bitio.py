"""MSB-first bit cursor over a byte buffer."""

from __future__ import annotations

from ruffman.errors import DecodeError


class BitWriter:
    def __init__(self) -> None:
        self._out = bytearray()
        self._acc = 0
        self._nacc = 0  # pending bits in _acc (0..7 between writes)
        self.bit_len = 0

    def write(self, value: int, nbits: int) -> None:
        """Append the low ``nbits`` of ``value``, most significant first."""
        self._acc = (self._acc << nbits) | (value & ((1 << nbits) - 1))
        self._nacc += nbits
        self.bit_len += nbits
        while self._nacc >= 8:
            self._nacc -= 8
            self._out.append((self._acc >> self._nacc) & 0xFF)
        self._acc &= (1 << self._nacc) - 1

    def getvalue(self) -> bytes:
        """Written bits, zero-padded to the next byte boundary."""
        if self._nacc == 0:
            return bytes(self._out)
        return bytes(self._out) + bytes([(self._acc << (8 - self._nacc)) & 0xFF])


class BitReader:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self.pos = 0  # absolute bit position

    @property
    def bit_len(self) -> int:
        return len(self._data) * 8

    @property
    def bits_left(self) -> int:
        return self.bit_len - self.pos

    def read_bit(self) -> int:
        if self.pos >= self.bit_len:
            raise DecodeError(f"bitstream exhausted at bit {self.pos}", field="payload")
        byte = self._data[self.pos >> 3]
        bit = (byte >> (7 - (self.pos & 7))) & 1
        self.pos += 1
        return bit

    def check_padding(self) -> None:
        """Ensure only the zero padding of the current byte is left."""
        if self.bits_left >= 8:
            raise DecodeError(
                f"{self.bits_left // 8} trailing byte(s) after the last code", field="payload"
            )
        if self.bits_left and self._data[-1] & ((1 << self.bits_left) - 1):
            raise DecodeError("non-zero padding bits", field="payload")
