import heapq
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import Levenshtein

from .base import DEFAULT_CONFIG, BitWidth, FlagEntry, Slot, resolve_width
from .bits import DUPLICATE, VALUE, BitOwnership, clear_bit, flip_bit, get_bit, set_bit
from .errors import CapacityExceeded, NamedBoolsError, NameNotFound
from .nums import U64, Nums, nums_for_width
from .pattern import parse_pattern
from .utils import WordStore, format_bits, format_entries, format_words


logger = logging.getLogger(__name__)


class NamedBoolsBase:
    """Name directory over a bit store; shared by fixed and growable containers.

    Subclasses choose the backing by setting ``nums``, ``ownership`` and
    ``_store``; every operation below only talks to them through
    ``get_bit`` / ``set_bit``.
    """

    nums: Nums
    ownership: BitOwnership

    def __init__(self, **config: Any):
        unknown = set(config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config)

        self._store: Any = None
        self._directory: Dict[str, Slot] = {}
        self._free: List[int] = []  # min-heap of released indices
        self._next_index = 0
        self._seq = 0

    # --- capacity / allocation ---

    @property
    def capacity(self) -> int:
        raise NotImplementedError

    def _has_room(self, index: int) -> bool:
        raise NotImplementedError

    def _free_count(self) -> Optional[int]:
        """Indices still available to new names, ``None`` when unbounded."""
        return None

    def _allocate(self) -> int:
        if self._free:
            index = heapq.heappop(self._free)
            logger.debug(f"Reusing freed index {index}")
            return index
        index = self._next_index
        if not self._has_room(index):
            raise CapacityExceeded(self.capacity)
        self._next_index += 1
        return index

    def _slot(self, name: str) -> Slot:
        slot = self._directory.get(name)
        if slot is None:
            raise NameNotFound(name, self._suggest(name))
        return slot

    def _suggest(self, name: str) -> List[str]:
        threshold = self.config["suggestion_threshold"]
        scored = []
        for known in self._directory:
            sim = Levenshtein.ratio(name, known)
            if sim >= threshold:
                scored.append((sim, known))
        scored.sort(key=lambda x: x[0], reverse=True)
        return [known for _, known in scored[:self.config["max_suggestions"]]]

    def _read(self, index: int) -> bool:
        return get_bit(self.nums, self.ownership, self._store, index)

    def _write(self, index: int, value: bool):
        self._store = set_bit(self.nums, self.ownership, self._store, index, value)

    # --- single-entry operations ---

    def set(self, name: str, value: bool):
        """Assign ``value`` to ``name``, allocating the lowest free bit for a new name."""
        slot = self._directory.get(name)
        if slot is None:
            slot = Slot(index=self._allocate(), seq=self._seq)
            self._seq += 1
            self._directory[name] = slot
        self._write(slot.index, bool(value))

    def get(self, name: str) -> bool:
        return self._read(self._slot(name).index)

    def remove(self, name: str):
        """Drop ``name`` and clear its bit; the index becomes free for reuse."""
        slot = self._slot(name)
        self._store = clear_bit(self.nums, self.ownership, self._store, slot.index)
        del self._directory[name]
        heapq.heappush(self._free, slot.index)

    def toggle(self, name: str):
        slot = self._slot(name)
        self._store = flip_bit(self.nums, self.ownership, self._store, slot.index)

    def exists(self, name: str) -> bool:
        return name in self._directory

    # --- bulk operations ---

    def mass_set(self, count: int, name_pattern: str, value_pattern: str):
        """Apply ``count`` assignments generated from two templates.

        ``name_pattern`` must contain ``{n}``, replaced by the step index.
        ``value_pattern`` is a comma separated list of ``true`` / ``false``;
        ending the last value with ``{r}`` makes the list repeat.

        Pattern errors and a lack of capacity are detected before anything
        is written. Any other failure stops the call with the error's
        ``step`` / ``applied`` attributes set; assignments made before the
        failing step are kept.
        """
        pattern = parse_pattern(name_pattern, value_pattern)
        pattern.check_count(count)

        free = self._free_count()
        if free is not None:
            if count > free + len(self._directory):
                raise CapacityExceeded(self.capacity, needed=count - len(self._directory))
            new_names = {pattern.name_at(step) for step in range(count)} - set(self._directory)
            if len(new_names) > free:
                raise CapacityExceeded(self.capacity, needed=len(new_names))

        applied = 0
        for step, (name, value) in enumerate(pattern.expand(count)):
            try:
                self.set(name, value)
            except NamedBoolsError as e:
                logger.warning(f"mass_set aborted at step {step} after {applied} assignment(s): {e}")
                raise e.at_step(step, applied)
            applied += 1
        logger.debug(f"mass_set applied {applied} assignment(s) from {name_pattern!r}")

    def mass_get(self, names: Iterable[str]) -> List[bool]:
        return [self.get(name) for name in names]

    def mass_toggle(self, names: Sequence[str]):
        """Toggle every name; nothing changes if any name is missing."""
        slots = [self._slot(name) for name in names]
        for slot in slots:
            self._store = flip_bit(self.nums, self.ownership, self._store, slot.index)

    def clear(self):
        self._directory.clear()
        self._free = []
        self._next_index = 0
        self._seq = 0
        self._reset_store()

    def _reset_store(self):
        raise NotImplementedError

    # --- queries ---

    def all(self) -> List[Tuple[str, bool]]:
        """Every ``(name, value)`` pair in directory order."""
        return [(name, self._read(slot.index)) for name, slot in self._directory.items()]

    def entries(self) -> List[FlagEntry]:
        return [FlagEntry(name, slot.index, self._read(slot.index)) for name, slot in self._directory.items()]

    def names(self) -> Dict[str, int]:
        return {name: slot.index for name, slot in self._directory.items()}

    def bools(self) -> List[bool]:
        return [self._read(slot.index) for slot in self._directory.values()]

    def count_true(self) -> int:
        return sum(self.bools())

    def get_raw(self) -> Any:
        raise NotImplementedError

    # --- ordering ---

    def sort_by_name(self):
        """Reorder iteration by name; bit positions do not move."""
        self._reorder(lambda item: (item[0], item[1].seq))

    def sort_by_value(self):
        """Reorder iteration with ``False`` entries first, ties by insertion order."""
        self._reorder(lambda item: (self._read(item[1].index), item[1].seq))

    def _reorder(self, key):
        self._directory = dict(sorted(self._directory.items(), key=key))

    def sorted_by_name(self) -> "NamedBoolsBase":
        other = self.copy()
        other.sort_by_name()
        return other

    def sorted_by_value(self) -> "NamedBoolsBase":
        other = self.copy()
        other.sort_by_value()
        return other

    def copy(self) -> "NamedBoolsBase":
        raise NotImplementedError

    def _copy_directory_into(self, other: "NamedBoolsBase") -> "NamedBoolsBase":
        other._directory = {name: Slot(slot.index, slot.seq) for name, slot in self._directory.items()}
        other._free = list(self._free)
        other._next_index = self._next_index
        other._seq = self._seq
        return other

    # --- display ---

    def render_raw(self) -> str:
        """Backing value in binary, most significant bit first."""
        raise NotImplementedError

    def __len__(self) -> int:
        return len(self._directory)

    def __iter__(self) -> Iterator[Tuple[str, bool]]:
        return iter(self.all())

    def __contains__(self, name: object) -> bool:
        return name in self._directory

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self.get_raw() == other.get_raw()
                and list(self.names().items()) == list(other.names().items()))

    def __str__(self) -> str:
        return format_entries(self.all())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self)}, capacity={self.capacity})"


class NamedBools(NamedBoolsBase):
    """Named flags stored in one unsigned integer of a fixed width."""

    ownership = VALUE
    WIDTH: Optional[int] = None

    def __init__(self, width: Union[int, BitWidth, None] = None, **config: Any):
        super().__init__(**config)
        self.nums = nums_for_width(resolve_width(width, self.WIDTH, type(self).__name__))
        self._store = self.nums.zero()

    @classmethod
    def from_raw(cls, raw: int, width: Union[int, BitWidth, None] = None, **config: Any) -> "NamedBools":
        """Start from an existing backing value with an empty directory."""
        container = cls(width, **config)
        container._store = container.nums.from_index(raw)
        return container

    @property
    def capacity(self) -> int:
        return self.nums.width

    def _has_room(self, index: int) -> bool:
        return index < self.nums.width

    def _free_count(self) -> int:
        return len(self._free) + self.nums.width - self._next_index

    def _reset_store(self):
        self._store = self.nums.zero()

    def get_raw(self) -> int:
        return self._store

    def raw_popcount(self) -> int:
        """Set bits in the backing value, named or not."""
        return bin(self._store).count("1")

    def copy(self) -> "NamedBools":
        other = type(self)(self.nums.width, **self.config)
        other._store = self._store
        return self._copy_directory_into(other)

    def render_raw(self) -> str:
        return format_bits(self._store, self.nums.width)


class BN8(NamedBools):
    WIDTH = 8


class BN16(NamedBools):
    WIDTH = 16


class BN32(NamedBools):
    WIDTH = 32


class BN64(NamedBools):
    WIDTH = 64


class BN128(NamedBools):
    WIDTH = 128


class NamedBoolsInf(NamedBoolsBase):
    """Named flags over a word store that grows as new names arrive."""

    nums = U64
    ownership = DUPLICATE

    def __init__(self, **config: Any):
        super().__init__(**config)
        if self.config["growth_factor"] < 1:
            raise ValueError("growth_factor must be at least 1")
        self._store = WordStore(growth_factor=self.config["growth_factor"],
                                min_words=self.config["min_words"])

    @classmethod
    def from_raw(cls, raw: Sequence[int], **config: Any) -> "NamedBoolsInf":
        """Start from existing words (least significant first) with an empty directory."""
        container = cls(**config)
        container._store = WordStore((container.nums.from_index(word) for word in raw),
                                     growth_factor=container.config["growth_factor"],
                                     min_words=container.config["min_words"])
        return container

    @property
    def capacity(self) -> int:
        return self._store.capacity

    def _has_room(self, index: int) -> bool:
        return True

    def _reset_store(self):
        self._store.zero()

    def get_raw(self) -> List[int]:
        return list(self._store.words)

    def get_raw_int(self) -> int:
        """Backing words joined into one unbounded integer."""
        return self._store.to_int()

    def raw_popcount(self) -> int:
        """Set bits across all words, named or not."""
        return self._store.count()

    @property
    def word_count(self) -> int:
        return self._store.word_count

    def copy(self) -> "NamedBoolsInf":
        other = type(self)(**self.config)
        other._store = self._store.copy()
        return self._copy_directory_into(other)

    def render_raw(self) -> str:
        return format_words(self._store.words)
