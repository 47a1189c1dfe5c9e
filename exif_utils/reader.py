"""Bounds-checked integer reads over an in-memory buffer."""

import struct

# TIFF field types and their sizes in bytes
TYPE_SIZES = {
    1: 1,  # BYTE
    2: 1,  # ASCII
    3: 2,  # SHORT
    4: 4,  # LONG
    5: 8,  # RATIONAL
    6: 1,  # SBYTE
    7: 1,  # UNDEFINED
    8: 2,  # SSHORT
    9: 4,  # SLONG
    10: 8,  # SRATIONAL
    11: 4,  # FLOAT
    12: 8,  # DOUBLE
}


class ParseAnomaly(Exception):
    """Raised when a read would leave the buffer or the data is not what we expect."""

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.offset = offset


class ByteReader:
    """
    Read integers from a buffer using one fixed byte order.

    Every read checks its end offset against the buffer length before
    touching the data, so a truncated buffer surfaces as ParseAnomaly
    instead of an IndexError or struct.error.
    """

    def __init__(self, data: bytes, little_endian: bool = False):
        self.data = bytes(data)
        self.little_endian = little_endian
        self._prefix = "<" if little_endian else ">"

    def __len__(self) -> int:
        return len(self.data)

    @classmethod
    def big_endian(cls, data: bytes) -> "ByteReader":
        return cls(data, little_endian=False)

    @classmethod
    def from_byte_order_mark(cls, data: bytes) -> "ByteReader":
        """
        Build a reader for a TIFF structure from its leading byte-order mark.

        Args:
            data: TIFF bytes, starting with "II" or "MM"

        Returns:
            ByteReader bound to the declared byte order

        Raises:
            ParseAnomaly: If the mark is missing or unsupported
        """
        mark = cls.big_endian(data).u16(0)
        if mark == 0x4949:
            return cls(data, little_endian=True)
        if mark == 0x4D4D:
            return cls(data, little_endian=False)
        raise ParseAnomaly(f"Unsupported byte order mark 0x{mark:04X}", 0)

    def check(self, offset: int, size: int) -> None:
        """Raise ParseAnomaly unless ``size`` bytes are available at ``offset``."""
        if offset < 0 or size < 0 or offset + size > len(self.data):
            raise ParseAnomaly(
                f"Read of {size} bytes at offset {offset} exceeds buffer of {len(self.data)}",
                offset,
            )

    def bytes_at(self, offset: int, size: int) -> bytes:
        self.check(offset, size)
        return self.data[offset : offset + size]

    def u8(self, offset: int) -> int:
        self.check(offset, 1)
        return self.data[offset]

    def u16(self, offset: int) -> int:
        self.check(offset, 2)
        return struct.unpack_from(self._prefix + "H", self.data, offset)[0]

    def u32(self, offset: int) -> int:
        self.check(offset, 4)
        return struct.unpack_from(self._prefix + "I", self.data, offset)[0]

    def s32(self, offset: int) -> int:
        self.check(offset, 4)
        return struct.unpack_from(self._prefix + "i", self.data, offset)[0]

    def rational(self, offset: int, signed: bool = False) -> tuple[int, int]:
        """Read a (numerator, denominator) pair of 32-bit integers."""
        read = self.s32 if signed else self.u32
        return read(offset), read(offset + 4)
