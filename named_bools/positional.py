"""
Positional boolean containers.

``Bools`` / ``B8``..``B128`` address the bits of one fixed-width integer by
position; ``BoolsInf`` addresses a growable word store. Both carry a reader
head for sequential access. Bit arithmetic goes through the same
``get_bit`` / ``set_bit`` helpers as the named containers.
"""
import logging
from typing import Any, Iterator, List, Optional, Sequence, Union

from .base import DEFAULT_CONFIG, BitWidth, resolve_width
from .bits import DUPLICATE, VALUE, BitOwnership, flip_bit, get_bit, set_bit
from .errors import InvalidPosition, InvalidRange
from .nums import U64, Nums, nums_for_width
from .utils import WORD_BITS, WordStore, format_bits, format_words


logger = logging.getLogger(__name__)


class BoolsBase:
    """Bits addressed by position, plus a reader head."""

    nums: Nums
    ownership: BitOwnership

    def __init__(self):
        self._store: Any = None
        self._head = 0

    @property
    def capacity(self) -> int:
        raise NotImplementedError

    def _limit(self) -> Optional[int]:
        """Exclusive upper bound on positions, ``None`` when unbounded."""
        return None

    def _check(self, pos: int) -> int:
        if isinstance(pos, bool) or not isinstance(pos, int) or pos < 0:
            raise InvalidPosition(pos, self._limit())
        limit = self._limit()
        if limit is not None and pos >= limit:
            raise InvalidPosition(pos, limit)
        return pos

    # --- positional access ---

    def get_at_pos(self, pos: int) -> bool:
        return get_bit(self.nums, self.ownership, self._store, self._check(pos))

    def set_at_pos(self, pos: int, value: bool):
        self._store = set_bit(self.nums, self.ownership, self._store, self._check(pos), bool(value))

    def toggle_at_pos(self, pos: int):
        self._store = flip_bit(self.nums, self.ownership, self._store, self._check(pos))

    def range(self, start: int, end: int) -> List[bool]:
        """Values at positions ``start`` up to, not including, ``end``."""
        self._check(start)
        limit = self._limit()
        if limit is not None and end > limit:
            raise InvalidPosition(end, limit)
        if end < start:
            raise InvalidRange(start, end)
        return [get_bit(self.nums, self.ownership, self._store, pos) for pos in range(start, end)]

    # --- reader head ---

    @property
    def head(self) -> int:
        return self._head

    def shp(self, pos: int):
        """Move the reader head to ``pos``."""
        self._head = self._check(pos)

    def ghp(self) -> int:
        return self._head

    def inc(self):
        """Advance the head by one; fails on the last position of a fixed container."""
        self._head = self._check(self._head + 1)

    def get(self) -> bool:
        return self.get_at_pos(self._head)

    def set(self, value: bool):
        self.set_at_pos(self._head, value)

    def next(self) -> bool:
        """Read the bit under the head, then advance."""
        value = self.get()
        self.inc()
        return value

    def next_reset(self) -> bool:
        """Read the bit under the head, clear it, then advance."""
        value = self.get()
        self.set(False)
        self.inc()
        return value

    # --- whole-container operations ---

    def all(self) -> List[bool]:
        return [get_bit(self.nums, self.ownership, self._store, pos) for pos in range(self.capacity)]

    def sorted(self) -> "BoolsBase":
        """Copy with the same values packed ``False`` first."""
        other = self.copy()
        other._fill(sorted(self.all()))
        return other

    def _fill(self, values: Sequence[bool]):
        for pos, value in enumerate(values):
            self._store = set_bit(self.nums, self.ownership, self._store, pos, value)

    def count_true(self) -> int:
        raise NotImplementedError

    def clear(self):
        self._head = 0
        self._reset_store()

    def _reset_store(self):
        raise NotImplementedError

    def get_raw(self) -> Any:
        raise NotImplementedError

    def render_raw(self) -> str:
        raise NotImplementedError

    def copy(self) -> "BoolsBase":
        raise NotImplementedError

    def __len__(self) -> int:
        return self.capacity

    def __iter__(self) -> Iterator[bool]:
        return iter(self.all())

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.get_raw() == other.get_raw()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self.capacity}, head={self._head}, ownership={self.ownership!r})"


class Bools(BoolsBase):
    """Positional bits of one unsigned integer of a fixed width."""

    ownership = VALUE
    WIDTH: Optional[int] = None

    def __init__(self, width: Union[int, BitWidth, None] = None):
        super().__init__()
        self.nums = nums_for_width(resolve_width(width, self.WIDTH, type(self).__name__))
        self._store = self.nums.zero()

    @classmethod
    def from_raw(cls, raw: int, width: Union[int, BitWidth, None] = None) -> "Bools":
        bools = cls(width)
        bools._store = bools.nums.from_index(raw)
        return bools

    @property
    def capacity(self) -> int:
        return self.nums.width

    def _limit(self) -> int:
        return self.nums.width

    def count_true(self) -> int:
        return bin(self._store).count("1")

    def _reset_store(self):
        self._store = self.nums.zero()

    def get_raw(self) -> int:
        return self._store

    def render_raw(self) -> str:
        return format_bits(self._store, self.nums.width)

    def copy(self) -> "Bools":
        other = type(self)(self.nums.width)
        other._store = self._store
        other._head = self._head
        return other


class B8(Bools):
    WIDTH = 8


class B16(Bools):
    WIDTH = 16


class B32(Bools):
    WIDTH = 32


class B64(Bools):
    WIDTH = 64


class B128(Bools):
    WIDTH = 128


class BoolsInf(BoolsBase):
    """Positional bits over a word store that grows on writes past its end.

    Reads past the end return ``False`` without growing the store.
    """

    nums = U64
    ownership = DUPLICATE

    def __init__(self, growth_factor: float = DEFAULT_CONFIG["growth_factor"],
                 min_words: int = DEFAULT_CONFIG["min_words"]):
        super().__init__()
        if growth_factor < 1:
            raise ValueError("growth_factor must be at least 1")
        self._store = WordStore(growth_factor=growth_factor, min_words=min_words)

    @classmethod
    def with_cap(cls, cap: int, **kwargs: Any) -> "BoolsInf":
        """Empty container with room for at least ``cap`` bits already allocated."""
        if cap < 0:
            raise ValueError(f"cap must be non-negative, got {cap}")
        bools = cls(**kwargs)
        if cap:
            bools._store.ensure((cap - 1) // WORD_BITS)
        logger.debug(f"Preallocated {bools._store.word_count} word(s) for {cap} bits")
        return bools

    @classmethod
    def from_raw(cls, raw: Sequence[int], **kwargs: Any) -> "BoolsInf":
        bools = cls(**kwargs)
        bools._store = WordStore((bools.nums.from_index(word) for word in raw),
                                 growth_factor=bools._store.growth_factor,
                                 min_words=bools._store.min_words)
        return bools

    @property
    def capacity(self) -> int:
        return self._store.capacity

    def cap(self) -> int:
        return self._store.capacity

    def count_true(self) -> int:
        return self._store.count()

    def _reset_store(self):
        self._store.zero()

    def get_raw(self) -> List[int]:
        return list(self._store.words)

    def get_raw_int(self) -> int:
        return self._store.to_int()

    def render_raw(self) -> str:
        return format_words(self._store.words)

    def copy(self) -> "BoolsInf":
        other = type(self)(self._store.growth_factor, self._store.min_words)
        other._store = self._store.copy()
        other._head = self._head
        return other
