import array
import logging
from typing import Iterable, List, Sequence, Tuple


logger = logging.getLogger(__name__)

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


class WordStore:
    """Growable arena of 64-bit words, least significant word first."""

    def __init__(self, words: Iterable[int] = (), growth_factor: float = 2, min_words: int = 1):
        self.words = array.array("Q")  # 64-bit unsigned integers
        self.words.extend(words)
        self.growth_factor = growth_factor
        self.min_words = min_words

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def capacity(self) -> int:
        return len(self.words) * WORD_BITS

    def ensure(self, word_idx: int):
        """Grow so that ``word_idx`` is addressable, over-allocating whole words."""
        if word_idx < len(self.words):
            return
        needed = word_idx + 1
        target = max(needed, int(len(self.words) * self.growth_factor), self.min_words)
        logger.debug(f"Growing word store from {len(self.words)} to {target} words")
        self.words.extend([0] * (target - len(self.words)))

    def read(self, word_idx: int) -> int:
        # unallocated words read as zero
        if word_idx < len(self.words):
            return self.words[word_idx]
        return 0

    def write(self, word_idx: int, word: int):
        self.ensure(word_idx)
        self.words[word_idx] = word & WORD_MASK

    def zero(self):
        for i in range(len(self.words)):
            self.words[i] = 0

    def count(self) -> int:
        """Number of set bits over every allocated word."""
        return sum(bin(word).count("1") for word in self.words)

    def to_int(self) -> int:
        value = 0
        for i, word in enumerate(self.words):
            value |= word << (i * WORD_BITS)
        return value

    def copy(self) -> "WordStore":
        return WordStore(self.words, self.growth_factor, self.min_words)

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordStore):
            return NotImplemented
        return self.words == other.words

    def __len__(self) -> int:
        return len(self.words)

    def __repr__(self) -> str:
        return f"WordStore({list(self.words)})"


def format_bits(value: int, width: int) -> str:
    """Binary rendering, most significant bit first, padded to ``width`` digits."""
    if width <= 0:
        return ""
    return format(value, f"0{width}b")


def format_words(words: Sequence[int]) -> str:
    return format_bits(sum(w << (i * WORD_BITS) for i, w in enumerate(words)), len(words) * WORD_BITS)


def format_entries(entries: List[Tuple[str, bool]]) -> str:
    """One ``name: true|false`` line per entry."""
    return "\n".join(f"{name}: {'true' if value else 'false'}" for name, value in entries)
