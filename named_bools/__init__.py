from typing import Any, Union

from .base import BitWidth, FlagEntry
from .engine import BN8, BN16, BN32, BN64, BN128, NamedBools, NamedBoolsBase, NamedBoolsInf
from .errors import (
    CapacityExceeded,
    InvalidPattern,
    InvalidPosition,
    InvalidRange,
    NamedBoolsError,
    NameNotFound,
    PatternExhausted,
)
from .pattern import MassPattern, parse_pattern
from .positional import B8, B16, B32, B64, B128, Bools, BoolsBase, BoolsInf


__all__ = [
    "NamedBoolsBase",
    "NamedBools",
    "NamedBoolsInf",
    "BN8",
    "BN16",
    "BN32",
    "BN64",
    "BN128",
    "BoolsBase",
    "Bools",
    "BoolsInf",
    "B8",
    "B16",
    "B32",
    "B64",
    "B128",
    "BitWidth",
    "FlagEntry",
    "MassPattern",
    "parse_pattern",
    "NamedBoolsError",
    "CapacityExceeded",
    "NameNotFound",
    "InvalidPattern",
    "PatternExhausted",
    "InvalidPosition",
    "InvalidRange",
    "new_named_bools"
]

__version__ = "0.7.12"


def new_named_bools(width: Union[int, BitWidth, None] = None, **config: Any) -> NamedBoolsBase:
    """
    Factory function for an empty container.

    Args:
        width: Backing width in bits (8, 16, 32, 64 or 128).
               If not provided, returns a growable container.
        config: Overrides for ``DEFAULT_CONFIG``.
    """
    if width is None:
        return NamedBoolsInf(**config)
    return NamedBools(width, **config)
