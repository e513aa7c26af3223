"""
Numeric backing abstraction.

Containers never touch bits with Python operators directly; every bit
operation goes through a ``Nums`` instance so the same algorithm runs over
any supported unsigned width.
"""
from typing import Dict


SUPPORTED_WIDTHS = (8, 16, 32, 64, 128)


class Nums:
    """Minimal operations a backing integer type has to provide."""

    width: int = 0

    def zero(self) -> int:
        raise NotImplementedError

    def one(self) -> int:
        raise NotImplementedError

    def and_(self, a: int, b: int) -> int:
        raise NotImplementedError

    def or_(self, a: int, b: int) -> int:
        raise NotImplementedError

    def xor(self, a: int, b: int) -> int:
        raise NotImplementedError

    def invert(self, a: int) -> int:
        raise NotImplementedError

    def shl(self, a: int, n: int) -> int:
        raise NotImplementedError

    def shr(self, a: int, n: int) -> int:
        raise NotImplementedError

    def eq(self, a: int, b: int) -> bool:
        raise NotImplementedError

    def to_index(self, a: int) -> int:
        raise NotImplementedError

    def from_index(self, i: int) -> int:
        raise NotImplementedError


class FixedNums(Nums):
    """Unsigned integer of a fixed bit width, emulated on Python ints."""

    def __init__(self, width: int):
        if width not in SUPPORTED_WIDTHS:
            raise ValueError(f"Unsupported width {width}, expected one of {SUPPORTED_WIDTHS}")
        self.width = width
        self.mask = (1 << width) - 1

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def and_(self, a: int, b: int) -> int:
        return a & b & self.mask

    def or_(self, a: int, b: int) -> int:
        return (a | b) & self.mask

    def xor(self, a: int, b: int) -> int:
        return (a ^ b) & self.mask

    def invert(self, a: int) -> int:
        return ~a & self.mask

    def shl(self, a: int, n: int) -> int:
        if n >= self.width:
            return 0
        return (a << n) & self.mask

    def shr(self, a: int, n: int) -> int:
        if n >= self.width:
            return 0
        return (a & self.mask) >> n

    def eq(self, a: int, b: int) -> bool:
        return (a & self.mask) == (b & self.mask)

    def to_index(self, a: int) -> int:
        return a & self.mask

    def from_index(self, i: int) -> int:
        if i < 0 or i > self.mask:
            raise ValueError(f"{i} does not fit in an unsigned {self.width}-bit integer")
        return i

    def __repr__(self) -> str:
        return f"FixedNums({self.width})"


U8 = FixedNums(8)
U16 = FixedNums(16)
U32 = FixedNums(32)
U64 = FixedNums(64)
U128 = FixedNums(128)

_BY_WIDTH: Dict[int, FixedNums] = {n.width: n for n in (U8, U16, U32, U64, U128)}


def nums_for_width(width: int) -> FixedNums:
    """Shared ``Nums`` instance for a supported width."""
    try:
        return _BY_WIDTH[width]
    except KeyError:
        raise ValueError(f"Unsupported width {width}, expected one of {SUPPORTED_WIDTHS}") from None
