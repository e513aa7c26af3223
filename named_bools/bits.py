"""
Bitwise ownership capability and the generic bit algorithm.

``ValueOwnership`` backs a container with one immutable integer: every write
produces a new value. ``WordOwnership`` backs it with a ``WordStore``: only
the touched word is duplicated, modified and written back in place.
"""
from typing import Any, Tuple

from .nums import Nums
from .utils import WORD_BITS, WordStore


class BitOwnership:
    """How a store hands out and takes back the unit holding a bit."""

    tag = ""

    def load(self, store: Any, index: int) -> Tuple[int, int]:
        """Return an independent copy of the unit holding ``index`` and the bit offset inside it."""
        raise NotImplementedError

    def commit(self, store: Any, index: int, unit: int) -> Any:
        """Write ``unit`` back and return the resulting store."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tag!r})"


class ValueOwnership(BitOwnership):
    tag = "value"

    def load(self, store: int, index: int) -> Tuple[int, int]:
        return store, index

    def commit(self, store: int, index: int, unit: int) -> int:
        return unit


class WordOwnership(BitOwnership):
    tag = "duplicate"

    def load(self, store: WordStore, index: int) -> Tuple[int, int]:
        word_idx, offset = divmod(index, WORD_BITS)
        return store.read(word_idx), offset

    def commit(self, store: WordStore, index: int, unit: int) -> WordStore:
        store.write(index // WORD_BITS, unit)
        return store


VALUE = ValueOwnership()
DUPLICATE = WordOwnership()


def get_bit(nums: Nums, ownership: BitOwnership, store: Any, index: int) -> bool:
    unit, offset = ownership.load(store, index)
    bit = nums.and_(nums.shr(unit, offset), nums.one())
    return not nums.eq(bit, nums.zero())


def set_bit(nums: Nums, ownership: BitOwnership, store: Any, index: int, value: bool) -> Any:
    """Set bit ``index`` to ``value`` and return the store to keep."""
    unit, offset = ownership.load(store, index)
    mask = nums.shl(nums.one(), offset)
    if value:
        unit = nums.or_(unit, mask)
    else:
        unit = nums.and_(unit, nums.invert(mask))
    return ownership.commit(store, index, unit)


def clear_bit(nums: Nums, ownership: BitOwnership, store: Any, index: int) -> Any:
    return set_bit(nums, ownership, store, index, False)


def flip_bit(nums: Nums, ownership: BitOwnership, store: Any, index: int) -> Any:
    unit, offset = ownership.load(store, index)
    return ownership.commit(store, index, nums.xor(unit, nums.shl(nums.one(), offset)))
