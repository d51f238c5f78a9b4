"""Parser error types: the ``Error`` protocol and the built-in error kinds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

END_OF_INPUT = "end of input"


def _format_token(token: Any) -> str:
    """Render a found token, where ``None`` stands for the end of input."""
    if token is None:
        return END_OF_INPUT
    return f"'{token}'"


class Error(ABC):
    """Base class for parser errors.

    ``found`` being ``None`` means the end of input was reached unexpectedly;
    an item of ``expected`` being ``None`` means the end of input was expected.
    """

    @classmethod
    @abstractmethod
    def expected_found(cls, expected: Iterable[Any], found: Any, span: Any) -> "Error":
        """Create an error describing what was expected and what was found."""

    def merge(self, other: "Error") -> "Error":
        """Merge two errors at the same input position; keeps ``self`` by default."""
        return self

    def merge_expected_found(self, expected: Iterable[Any], found: Any, span: Any) -> "Error":
        """Merge with a freshly built expected/found error."""
        return self.merge(type(self).expected_found(expected, found, span))

    def replace_expected_found(self, expected: Iterable[Any], found: Any, span: Any) -> "Error":
        """Discard this error in favour of a freshly built expected/found error."""
        return type(self).expected_found(expected, found, span)


@dataclass(frozen=True)
class EmptyErr(Error):
    """An error that records only that parsing failed."""

    @classmethod
    def expected_found(cls, expected: Iterable[Any], found: Any, span: Any) -> "EmptyErr":
        return cls()

    def __str__(self) -> str:
        return "error"


@dataclass(frozen=True)
class Cheap(Error):
    """An error that records only its span."""

    span: Any

    @classmethod
    def expected_found(cls, expected: Iterable[Any], found: Any, span: Any) -> "Cheap":
        return cls(span)

    def __str__(self) -> str:
        return f"at {self.span}"


@dataclass(frozen=True)
class Simple(Error):
    """An error that records its span and the token found there."""

    span: Any
    found: Any = None

    @classmethod
    def expected_found(cls, expected: Iterable[Any], found: Any, span: Any) -> "Simple":
        return cls(span, found)

    def map_token(self, f: Callable[[Any], Any]) -> "Simple":
        """Return a copy with the found token transformed by ``f``."""
        found = None if self.found is None else f(self.found)
        return Simple(self.span, found)

    def __str__(self) -> str:
        return f"found {_format_token(self.found)} at {self.span}"


class PatternKind(Enum):
    """The kinds of pattern a rich error may expect."""

    TOKEN = "token"
    LABEL = "label"
    END_OF_INPUT = "end_of_input"


@dataclass(frozen=True)
class RichPattern:
    """Something a rich error expected: a token, a label or the end of input."""

    kind: PatternKind
    value: Any = None

    @classmethod
    def token(cls, value: Any) -> "RichPattern":
        return cls(PatternKind.TOKEN, value)

    @classmethod
    def label(cls, name: Any) -> "RichPattern":
        return cls(PatternKind.LABEL, name)

    @classmethod
    def end_of_input(cls) -> "RichPattern":
        return cls(PatternKind.END_OF_INPUT)

    @classmethod
    def _from_expected(cls, item: Any) -> "RichPattern":
        return cls.end_of_input() if item is None else cls.token(item)

    def map_token(self, f: Callable[[Any], Any]) -> "RichPattern":
        """Transform the token of a token pattern; other patterns are unchanged."""
        if self.kind is PatternKind.TOKEN:
            return RichPattern.token(f(self.value))
        return self

    def __str__(self) -> str:
        if self.kind is PatternKind.TOKEN:
            return f"'{self.value}'"
        if self.kind is PatternKind.LABEL:
            return str(self.value)
        return END_OF_INPUT


class RichReason(ABC):
    """Why a rich error happened."""

    @abstractmethod
    def found(self) -> Any:
        """The token found, or ``None`` for end of input or when there is none."""

    @abstractmethod
    def map_token(self, f: Callable[[Any], Any]) -> "RichReason":
        """Return a copy with every token transformed by ``f``."""

    @abstractmethod
    def describe(self, span: Any = None) -> str:
        """Human-readable description, mentioning ``span`` when one is given."""

    def _take_found(self) -> Any:
        return None

    def _flat_merge(self, other: "RichReason") -> "RichReason":
        """Combine two reasons for the same position into one."""
        if isinstance(self, ExpectedFound) and isinstance(other, ExpectedFound):
            base, extra = list(self.expected), other.expected
            if len(extra) > len(base):
                base, extra = list(extra), self.expected
            for pattern in extra:
                if pattern not in base:
                    base.append(pattern)
            return ExpectedFound(base, self.found_token)
        if isinstance(self, Many) and isinstance(other, Many):
            return Many([*self.reasons, *other.reasons])
        if isinstance(self, Many):
            return Many([*self.reasons, other])
        if isinstance(other, Many):
            return Many([*other.reasons, self])
        return Many([self, other])

    def __str__(self) -> str:
        return self.describe()


@dataclass
class ExpectedFound(RichReason):
    """Some patterns were expected, but something else was found."""

    expected: list[RichPattern] = field(default_factory=list)
    found_token: Any = None

    def found(self) -> Any:
        return self.found_token

    def _take_found(self) -> Any:
        token, self.found_token = self.found_token, None
        return token

    def map_token(self, f: Callable[[Any], Any]) -> "ExpectedFound":
        found = None if self.found_token is None else f(self.found_token)
        return ExpectedFound([p.map_token(f) for p in self.expected], found)

    def describe(self, span: Any = None) -> str:
        parts = [f"found {_format_token(self.found_token)}"]
        if span is not None:
            parts.append(f" at {span}")
        parts.append(" expected ")
        if not self.expected:
            parts.append("something else")
        elif len(self.expected) == 1:
            parts.append(str(self.expected[0]))
        else:
            parts.extend(f"{p}, " for p in self.expected[:-1])
            parts.append(f"or {self.expected[-1]}")
        return "".join(parts)


@dataclass
class Custom(RichReason):
    """An error with a custom message."""

    message: str

    def found(self) -> Any:
        return None

    def map_token(self, f: Callable[[Any], Any]) -> "Custom":
        return Custom(self.message)

    def describe(self, span: Any = None) -> str:
        if span is None:
            return self.message
        return f"{self.message} at {span}"


@dataclass
class Many(RichReason):
    """Several unrelated reasons merged together."""

    reasons: list[RichReason] = field(default_factory=list)

    def found(self) -> Optional[Any]:
        return next((tok for tok in (r.found() for r in self.reasons) if tok is not None), None)

    def _take_found(self) -> Any:
        for reason in self.reasons:
            token = reason._take_found()
            if token is not None:
                return token
        return None

    def map_token(self, f: Callable[[Any], Any]) -> "Many":
        return Many([r.map_token(f) for r in self.reasons])

    def describe(self, span: Any = None) -> str:
        if span is None:
            return "multiple errors"
        return f"multiple errors found at {span}"