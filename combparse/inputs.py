"""Token inputs: the things a parser reads from, with their offsets, spans and slices."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Span:
    """A half-open range ``start..end`` of an input, with optional extra context."""

    start: int
    end: int
    context: Any = None

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


def _check_range(start: int, end: int, length: int) -> None:
    if start < 0 or end < start or end > length:
        raise IndexError(f"range {start}..{end} out of bounds for input of length {length}")


class Input(ABC):
    """A stream of tokens that can be read from any earlier offset.

    Offsets are opaque integers produced by :meth:`start` and :meth:`next_maybe`.
    A token of ``None`` returned by :meth:`next_maybe` marks the end of input.
    """

    @abstractmethod
    def start(self) -> int:
        """The offset of the start of the input."""

    @abstractmethod
    def next_maybe(self, offset: int) -> tuple[int, Any]:
        """Return the offset after ``offset`` and the token there, or ``(offset, None)`` at the end."""

    @abstractmethod
    def span(self, start: int, end: int) -> Any:
        """A span covering the offsets from ``start`` to ``end``."""

    @abstractmethod
    def span_from(self, start: int) -> Any:
        """A span from ``start`` to the end of the input."""

    def prev(self, offset: int) -> int:
        """The offset before ``offset``, saturating at zero."""
        return max(offset - 1, 0)

    @abstractmethod
    def slice(self, start: int, end: int) -> Any:
        """The part of the input between the two offsets."""

    @abstractmethod
    def slice_from(self, start: int) -> Any:
        """The part of the input from ``start`` to the end."""

    def spanned(self, eoi: Any) -> "SpannedInput":
        """Split ``(token, span)`` pairs into tokens and spans; ``eoi`` is the end-of-input span."""
        return SpannedInput(self, eoi)

    def with_context(self, context: Any) -> "WithContext":
        """Attach ``context`` to every span this input produces."""
        return WithContext(self, context)

    def map_span(self, map_fn: Callable[[Any], Any]) -> "MappedSpan":
        """Transform every span this input produces with ``map_fn``."""
        return MappedSpan(self, map_fn)


@dataclass(frozen=True)
class StrInput(Input):
    """Input over a string; tokens are characters and offsets are character indices."""

    text: str

    def start(self) -> int:
        return 0

    def next_maybe(self, offset: int) -> tuple[int, Any]:
        if 0 <= offset < len(self.text):
            return offset + 1, self.text[offset]
        return offset, None

    def span(self, start: int, end: int) -> Span:
        return Span(start, end)

    def span_from(self, start: int) -> Span:
        return Span(start, len(self.text))

    def slice(self, start: int, end: int) -> str:
        _check_range(start, end, len(self.text))
        return self.text[start:end]

    def slice_from(self, start: int) -> str:
        _check_range(start, len(self.text), len(self.text))
        return self.text[start:]


@dataclass(frozen=True)
class SliceInput(Input):
    """Input over any sequence (list, tuple, bytes); offsets are indices."""

    items: Sequence[Any]

    def start(self) -> int:
        return 0

    def next_maybe(self, offset: int) -> tuple[int, Any]:
        if 0 <= offset < len(self.items):
            return offset + 1, self.items[offset]
        return offset, None

    def span(self, start: int, end: int) -> Span:
        return Span(start, end)

    def span_from(self, start: int) -> Span:
        return Span(start, len(self.items))

    def slice(self, start: int, end: int) -> Sequence[Any]:
        _check_range(start, end, len(self.items))
        return self.items[start:end]

    def slice_from(self, start: int) -> Sequence[Any]:
        _check_range(start, len(self.items), len(self.items))
        return self.items[start:]


@dataclass(frozen=True)
class SpannedInput(Input):
    """An input of ``(token, span)`` pairs seen as tokens whose spans come from the pairs.

    Slices are those of the wrapped input, so they still hold the pairs.
    """

    input: Input
    eoi: Any

    def _make_span(self, start: Any, end: Any) -> Any:
        return type(self.eoi)(start, end, self.eoi.context)

    def _token_span(self, offset: int) -> Any:
        _, pair = self.input.next_maybe(offset)
        return None if pair is None else pair[1]

    def start(self) -> int:
        return self.input.start()

    def next_maybe(self, offset: int) -> tuple[int, Any]:
        new_offset, pair = self.input.next_maybe(offset)
        return new_offset, None if pair is None else pair[0]

    def span(self, start: int, end: int) -> Any:
        first = self._token_span(start)
        last = self._token_span(self.input.prev(end))
        span_start = self.eoi.start if first is None else first.start
        span_end = self.eoi.start if last is None else last.end
        return self._make_span(span_start, span_end)

    def span_from(self, start: int) -> Any:
        first = self._token_span(start)
        span_start = self.eoi.start if first is None else first.start
        return self._make_span(span_start, self.eoi.start)

    def prev(self, offset: int) -> int:
        return self.input.prev(offset)

    def slice(self, start: int, end: int) -> Any:
        return self.input.slice(start, end)

    def slice_from(self, start: int) -> Any:
        return self.input.slice_from(start)


@dataclass(frozen=True)
class WithContext(Input):
    """An input whose spans carry a fixed context value."""

    input: Input
    context: Any

    def _attach(self, inner: Any) -> Span:
        return Span(inner.start, inner.end, self.context)

    def start(self) -> int:
        return self.input.start()

    def next_maybe(self, offset: int) -> tuple[int, Any]:
        return self.input.next_maybe(offset)

    def span(self, start: int, end: int) -> Span:
        return self._attach(self.input.span(start, end))

    def span_from(self, start: int) -> Span:
        return self._attach(self.input.span_from(start))

    def prev(self, offset: int) -> int:
        return self.input.prev(offset)

    def slice(self, start: int, end: int) -> Any:
        return self.input.slice(start, end)

    def slice_from(self, start: int) -> Any:
        return self.input.slice_from(start)


@dataclass(frozen=True)
class MappedSpan(Input):
    """An input whose spans are transformed by a function."""

    input: Input
    map_fn: Callable[[Any], Any]

    def start(self) -> int:
        return self.input.start()

    def next_maybe(self, offset: int) -> tuple[int, Any]:
        return self.input.next_maybe(offset)

    def span(self, start: int, end: int) -> Any:
        return self.map_fn(self.input.span(start, end))

    def span_from(self, start: int) -> Any:
        return self.map_fn(self.input.span_from(start))

    def prev(self, offset: int) -> int:
        return self.input.prev(offset)

    def slice(self, start: int, end: int) -> Any:
        return self.input.slice(start, end)

    def slice_from(self, start: int) -> Any:
        return self.input.slice_from(start)