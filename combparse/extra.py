"""Extra parser configuration: the error kind, the state type and the context type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from combparse.errors import EmptyErr, Error

_UNIT = type(None)


@dataclass(frozen=True)
class Full:
    """The error class, state type and context type a parser runs with.

    ``state`` and ``context`` are callables that build the default value;
    by default both produce ``None``.
    """

    error: type = EmptyErr
    state: Any = _UNIT
    context: Any = _UNIT

    def __post_init__(self) -> None:
        if not (isinstance(self.error, type) and issubclass(self.error, Error)):
            raise TypeError(f"error must be an Error subclass, not {self.error!r}")
        for name in ("state", "context"):
            if not callable(getattr(self, name)):
                raise TypeError(f"{name} must be callable")


def default() -> Full:
    """All default extras."""
    return Full()


def err(error: type) -> Full:
    """The given error class with default state and context."""
    return Full(error=error)


def state(state: Any) -> Full:
    """The given state type with default error and context."""
    return Full(state=state)


def context(context: Any) -> Full:
    """The given context type with default error and state."""
    return Full(context=context)