from typing import List, Optional, Sequence


class NamedBoolsError(Exception):
    """Base class for every container error."""

    step: Optional[int] = None
    applied: int = 0

    def at_step(self, step: int, applied: int) -> "NamedBoolsError":
        """Record where a bulk operation stopped."""
        self.step = step
        self.applied = applied
        return self

    def __str__(self) -> str:
        # bypass KeyError quoting
        message = Exception.__str__(self)
        if self.step is None:
            return message
        return f"{message} (failed at step {self.step}, {self.applied} assignment(s) already applied)"


class CapacityExceeded(NamedBoolsError):
    """Raised when a fixed container has no free bit left."""

    def __init__(self, capacity: int, needed: int = 1):
        self.capacity = capacity
        self.needed = needed
        super().__init__(f"Collection capacity of {capacity} bits has been reached")


class NameNotFound(NamedBoolsError, KeyError):
    """Raised when a name is not present in the directory."""

    def __init__(self, name: str, suggestions: Sequence[str] = ()):
        self.name = name
        self.suggestions: List[str] = list(suggestions)
        message = f"Name not found: {name!r}"
        if self.suggestions:
            message += f", did you mean {', '.join(repr(s) for s in self.suggestions)}?"
        super().__init__(message)


class InvalidPattern(NamedBoolsError, ValueError):
    """Raised for malformed mass_set templates."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class PatternExhausted(NamedBoolsError):
    """Raised when a non-repeating value pattern is shorter than the count."""

    def __init__(self, available: int, count: int):
        self.available = available
        self.count = count
        super().__init__(
            f"Value pattern holds {available} value(s) but {count} assignment(s) were requested; "
            f"mark the last value with {{r}} to repeat"
        )


class InvalidPosition(NamedBoolsError, IndexError):
    """Raised when a bit position or the reader head falls outside a container."""

    def __init__(self, position: int, capacity: Optional[int] = None):
        self.position = position
        self.capacity = capacity
        if capacity is None:
            super().__init__(f"Invalid position: {position}")
        else:
            super().__init__(f"Invalid position: {position} (capacity {capacity})")


class InvalidRange(NamedBoolsError, ValueError):
    """Raised when a range ends before it starts."""

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        super().__init__(f"Invalid range: {start}..{end}")
