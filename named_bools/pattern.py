"""
Pattern expansion for ``mass_set``.

The grammar has two tokens: ``{n}`` in the name template is replaced with the
zero-based step index, and ``{r}`` as the suffix of the last value marks the
value list as repeating.
"""
import itertools
import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import ahocorasick

from .errors import InvalidPattern, PatternExhausted


logger = logging.getLogger(__name__)

PLACEHOLDER = "{n}"
REPEAT_MARKER = "{r}"
VALUE_SEPARATOR = ","

_BOOL_TOKENS = {"true": True, "false": False}


def _build_scanner() -> ahocorasick.Automaton:
    automaton = ahocorasick.Automaton()
    for token in (PLACEHOLDER, REPEAT_MARKER):
        automaton.add_word(token, token)
    automaton.make_automaton()
    return automaton


_SCANNER = _build_scanner()


def scan_tokens(text: str) -> List[Tuple[int, str]]:
    """Return ``(start, token)`` for every template token in ``text``."""
    return [(end - len(token) + 1, token) for end, token in _SCANNER.iter(text)]


@dataclass(frozen=True)
class MassPattern:
    """A parsed name template plus its value list."""
    name_pattern: str
    values: Tuple[bool, ...]
    repeating: bool

    def name_at(self, step: int) -> str:
        return self.name_pattern.replace(PLACEHOLDER, str(step))

    def check_count(self, count: int):
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"count must be an int, got {type(count).__name__}")
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if not self.repeating and len(self.values) < count:
            raise PatternExhausted(len(self.values), count)

    def expand(self, count: int) -> Iterator[Tuple[str, bool]]:
        """Yield ``count`` concrete ``(name, value)`` assignments."""
        self.check_count(count)
        values = itertools.cycle(self.values) if self.repeating else iter(self.values)
        for step, value in zip(range(count), values):
            yield self.name_at(step), value


def parse_values(value_pattern: str) -> Tuple[Tuple[bool, ...], bool]:
    text = value_pattern.strip()
    if not text:
        raise InvalidPattern(value_pattern, "value pattern cannot be empty")

    tokens = scan_tokens(text)
    markers = [start for start, token in tokens if token == REPEAT_MARKER]
    if any(token == PLACEHOLDER for _, token in tokens):
        raise InvalidPattern(value_pattern, f"{PLACEHOLDER} is not allowed in a value pattern")
    repeating = bool(markers)
    if len(markers) > 1 or (repeating and markers[0] != len(text) - len(REPEAT_MARKER)):
        raise InvalidPattern(value_pattern, f"{REPEAT_MARKER} may only end the last value")
    if repeating:
        text = text[:-len(REPEAT_MARKER)]

    values = []
    for token in text.split(VALUE_SEPARATOR):
        key = token.strip().lower()
        if key not in _BOOL_TOKENS:
            raise InvalidPattern(value_pattern, f"invalid boolean value {token.strip()!r}")
        values.append(_BOOL_TOKENS[key])
    return tuple(values), repeating


def parse_pattern(name_pattern: str, value_pattern: str) -> MassPattern:
    """Validate and pre-parse both templates of a ``mass_set`` call."""
    tokens = [token for _, token in scan_tokens(name_pattern)]
    if PLACEHOLDER not in tokens:
        raise InvalidPattern(name_pattern, f"name pattern must contain {PLACEHOLDER}")
    if REPEAT_MARKER in tokens:
        raise InvalidPattern(name_pattern, f"{REPEAT_MARKER} is not allowed in a name pattern")

    values, repeating = parse_values(value_pattern)
    logger.debug(f"Parsed mass pattern {name_pattern!r} with {len(values)} value(s), repeating={repeating}")
    return MassPattern(name_pattern=name_pattern, values=values, repeating=repeating)
