"""The state of a parse in progress: the input position, the errors so far, state and context."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from combparse.errors import Error
from combparse.extra import Full
from combparse.inputs import Input

_MISSING = object()


class Mode(Enum):
    """Whether a parser should produce its output or only check that the input matches."""

    EMIT = "emit"
    CHECK = "check"

    def choose(
        self,
        inp: "InputRef",
        parse: Callable[["InputRef"], Any],
        check: Callable[["InputRef"], Any],
    ) -> Any:
        """Run ``parse`` when emitting, or ``check`` (discarding its result) when checking."""
        if self is Mode.EMIT:
            return parse(inp)
        check(inp)
        return None


class ParseFailure(Exception):
    """Raised when a parser fails; ``error`` holds the error once one has been chosen."""

    def __init__(self, error: Optional[Error] = None) -> None:
        super().__init__(error)
        self.error = error


@dataclass(frozen=True)
class Marker:
    """A saved position of a parse that can be rewound to."""

    offset: int
    err_count: int


@dataclass(frozen=True)
class Offset:
    """A location in the input."""

    offset: int


@dataclass
class _Located:
    """An error together with the input offset it happened at."""

    pos: int
    err: Error


@dataclass
class _Errors:
    """The best alternative error so far, and the non-fatal errors emitted."""

    alt: Optional[_Located] = None
    secondary: list[_Located] = field(default_factory=list)

    def secondary_errors_since(self, err_count: int) -> list[_Located]:
        """The secondary errors emitted after ``err_count`` of them existed."""
        return self.secondary[err_count:]


class InputRef:
    """An input being parsed, with its position, error record, state and context."""

    def __init__(
        self,
        input: Input,
        errors: _Errors,
        state: Any,
        ctx: Any,
        extra: Full,
        offset: int,
    ) -> None:
        self.input = input
        self.errors = errors
        self.state = state
        self.ctx = ctx
        self.extra = extra
        self._pos = offset

    def offset(self) -> Offset:
        """The current position in the input."""
        return Offset(self._pos)

    def save(self) -> Marker:
        """Save the current position and error count."""
        return Marker(self._pos, len(self.errors.secondary))

    def rewind(self, marker: Marker) -> None:
        """Go back to a saved marker, dropping errors emitted since it was saved."""
        del self.errors.secondary[marker.err_count:]
        self._pos = marker.offset

    def _sub(self, input: Input, state: Any, ctx: Any, offset: int) -> "InputRef":
        return InputRef(input, self.errors, state, ctx, self.extra, offset)

    def with_ctx(self, ctx: Any, f: Callable[["InputRef"], Any]) -> Any:
        """Run ``f`` with a different context, keeping the position it reaches."""
        sub = self._sub(self.input, self.state, ctx, self._pos)
        result = f(sub)
        self._pos = sub._pos
        self.state = sub.state
        return result

    def with_state(self, state: Any, f: Callable[["InputRef"], Any]) -> Any:
        """Run ``f`` with a different state, keeping the position it reaches."""
        sub = self._sub(self.input, state, self.ctx, self._pos)
        result = f(sub)
        self._pos = sub._pos
        return result

    def with_input(self, new_input: Input, f: Callable[["InputRef"], Any]) -> Any:
        """Run ``f`` over another input from its start; this input's position is unchanged."""
        sub = self._sub(new_input, self.state, self.ctx, new_input.start())
        result = f(sub)
        self.state = sub.state
        return result

    def _take_alt_error(self) -> Error:
        alt = self.errors.alt
        if alt is None:
            raise RuntimeError("parser failed without recording an error")
        self.errors.alt = None
        return alt.err

    def parse(self, parser: Any) -> Any:
        """Run ``parser`` here and return its output.

        On failure, raises :class:`ParseFailure` carrying the error. The position
        is then unspecified; only rewinding to an earlier marker is meaningful.
        """
        try:
            return parser.go(self, Mode.EMIT)
        except ParseFailure:
            error = self._take_alt_error()
        raise ParseFailure(error)

    def check(self, parser: Any) -> None:
        """Like :meth:`parse`, but without producing an output."""
        try:
            parser.go(self, Mode.CHECK)
            return None
        except ParseFailure:
            error = self._take_alt_error()
        raise ParseFailure(error)

    def next_maybe(self) -> Any:
        """Consume and return the next token, or ``None`` at the end of input."""
        self._pos, token = self.input.next_maybe(self._pos)
        return token

    def next(self) -> Any:
        """Consume and return the next token, or ``None`` at the end of input."""
        return self.next_maybe()

    def peek(self) -> Any:
        """Return the next token without consuming it, or ``None`` at the end of input."""
        return self.input.next_maybe(self._pos)[1]

    def skip(self) -> None:
        """Consume the next token."""
        self.next_maybe()

    def skip_while(self, predicate: Callable[[Any], bool]) -> None:
        """Consume tokens for as long as ``predicate`` holds."""
        while True:
            new_pos, token = self.input.next_maybe(self._pos)
            if token is None or not predicate(token):
                return
            self._pos = new_pos

    def slice(self, start: Offset, end: Offset) -> Any:
        """The part of the input between two offsets."""
        return self.input.slice(start.offset, end.offset)

    def slice_from(self, start: Offset) -> Any:
        """The part of the input from ``start`` to the end."""
        return self.input.slice_from(start.offset)

    def span(self, start: Offset, end: Offset) -> Any:
        """A span between two offsets."""
        return self.input.span(start.offset, end.offset)

    def span_from(self, start: Offset) -> Any:
        """A span from ``start`` to the end of the input."""
        return self.input.span_from(start.offset)

    def span_since(self, before: Offset) -> Any:
        """A span from ``before`` to the current position."""
        return self.input.span(before.offset, self._pos)

    def emit(self, pos: int, error: Error) -> None:
        """Record a non-fatal error at ``pos``."""
        self.errors.secondary.append(_Located(pos, error))

    def add_alt(self, at: int, expected: Iterable[Any], found: Any, span: Any) -> None:
        """Record an expected/found error at ``at``, keeping the furthest error seen."""
        alt = self.errors.alt
        if alt is None:
            self.errors.alt = _Located(at, self.extra.error.expected_found(expected, found, span))
        elif alt.pos == at:
            self.errors.alt = _Located(alt.pos, alt.err.merge_expected_found(expected, found, span))
        elif alt.pos < at:
            self.errors.alt = _Located(at, alt.err.replace_expected_found(expected, found, span))

    def add_alt_err(self, at: int, err: Error) -> None:
        """Record ``err`` at ``at``, keeping the furthest error seen."""
        alt = self.errors.alt
        if alt is None or alt.pos < at:
            self.errors.alt = _Located(at, err)
        elif alt.pos == at:
            self.errors.alt = _Located(alt.pos, alt.err.merge(err))


class InputOwn:
    """The owned parts of a top-level parse: the input, its errors, state and context."""

    def __init__(self, input: Input, extra: Optional[Full] = None, state: Any = _MISSING) -> None:
        self.input = input
        self.extra = Full() if extra is None else extra
        self.errors = _Errors()
        self.state = self.extra.state() if state is _MISSING else state
        self.ctx = self.extra.context()

    def as_ref_start(self) -> InputRef:
        """A parse reference positioned at the start of the input."""
        return self.as_ref_at(self.input.start())

    def as_ref_at(self, offset: int) -> InputRef:
        """A parse reference positioned at ``offset``."""
        return InputRef(self.input, self.errors, self.state, self.ctx, self.extra, offset)

    def into_errs(self) -> list[Error]:
        """The non-fatal errors emitted during the parse."""
        return [located.err for located in self.errors.secondary]


@dataclass
class Emitter:
    """Collects non-fatal errors emitted by validation code."""

    emitted: list[Any] = field(default_factory=list)

    def emit(self, err: Any) -> None:
        """Emit a non-fatal error."""
        self.emitted.append(err)