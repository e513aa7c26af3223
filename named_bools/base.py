from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class BitWidth(Enum):
    """Backing widths available to fixed containers."""
    U8 = 8
    U16 = 16
    U32 = 32
    U64 = 64
    U128 = 128


DEFAULT_CONFIG: Dict[str, Any] = {
    "suggestion_threshold": 0.7,
    "max_suggestions": 3,
    "growth_factor": 2,
    "min_words": 1,
}


@dataclass
class Slot:
    """Directory record: where a name lives and when it was inserted."""
    index: int
    seq: int


@dataclass(frozen=True)
class FlagEntry:
    """Read-only view of one named flag."""
    name: str
    index: int
    value: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "index": self.index,
            "value": self.value
        }


def resolve_width(width: Union[int, BitWidth, None], fixed: Optional[int], owner: str) -> int:
    """Pick the backing width from the argument or the class-level ``WIDTH``."""
    if isinstance(width, BitWidth):
        width = width.value
    if fixed is not None:
        if width is not None and width != fixed:
            raise ValueError(f"{owner} is fixed at {fixed} bits, got width={width}")
        return fixed
    if width is None:
        raise TypeError(f"{owner} needs a width (8, 16, 32, 64 or 128)")
    return width
