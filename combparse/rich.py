"""The rich error type: spans, expected patterns, found tokens and label contexts."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from combparse.errors import (
    Custom,
    Error,
    ExpectedFound,
    Many,
    RichPattern,
    RichReason,
)


def _patterns(expected: Iterable[Any]) -> list[RichPattern]:
    """Turn expected tokens into patterns; ``None`` stands for end of input."""
    return [RichPattern.end_of_input() if item is None else RichPattern.token(item) for item in expected]


@dataclass(repr=False)
class Rich(Error):
    """An error that tracks its span, what was expected, what was found and its contexts.

    ``str()`` gives the description without the span; ``repr()`` includes it.
    """

    span: Any
    reason: RichReason
    context: list[tuple[Any, Any]] = field(default_factory=list)

    @classmethod
    def custom(cls, span: Any, msg: Any) -> "Rich":
        """Create an error with a custom message."""
        return cls(span, Custom(str(msg)))

    @classmethod
    def expected_found(cls, expected: Iterable[Any], found: Any, span: Any) -> "Rich":
        return cls(span, ExpectedFound(_patterns(expected), found))

    def found(self) -> Any:
        """The token found; ``None`` means the end of input or no token at all."""
        return self.reason.found()

    def contexts(self) -> Iterator[tuple[Any, Any]]:
        """Iterate over ``(label, span)`` contexts, from least general to most."""
        return iter(list(self.context))

    def expected(self) -> list[RichPattern]:
        """Every expected pattern, gathered through merged reasons."""
        collected: list[RichPattern] = []
        pending: list[RichReason] = [self.reason]
        while pending:
            reason = pending.pop(0)
            if isinstance(reason, ExpectedFound):
                collected.extend(reason.expected)
            elif isinstance(reason, Many):
                pending[0:0] = reason.reasons
        return collected

    def map_token(self, f: Callable[[Any], Any]) -> "Rich":
        """Return a copy with every token transformed by ``f``."""
        return Rich(self.span, self.reason.map_token(f), list(self.context))

    def merge(self, other: "Error") -> "Rich":
        if not isinstance(other, Rich):
            raise TypeError(f"cannot merge Rich with {type(other).__name__}")
        return Rich(self.span, self.reason._flat_merge(other.reason), list(self.context))

    def merge_expected_found(self, expected: Iterable[Any], found: Any, span: Any) -> "Rich":
        new_patterns = _patterns(expected)
        reason = self.reason
        if isinstance(reason, ExpectedFound):
            merged = list(reason.expected)
            for pattern in new_patterns:
                if pattern not in merged:
                    merged.append(pattern)
            new_reason: RichReason = ExpectedFound(merged, reason.found_token)
        elif isinstance(reason, Many):
            new_reason = Many([*reason.reasons, ExpectedFound(new_patterns, found)])
        else:
            new_reason = Many([reason, ExpectedFound(new_patterns, found)])
        return Rich(self.span, new_reason, list(self.context))

    def replace_expected_found(self, expected: Iterable[Any], found: Any, span: Any) -> "Rich":
        return Rich(span, ExpectedFound(_patterns(expected), found), [])

    def label_with(self, label: Any) -> None:
        """Replace the expected patterns with a single label."""
        if isinstance(self.reason, ExpectedFound):
            self.reason = ExpectedFound([RichPattern.label(label)], self.reason.found_token)
        else:
            self.reason = ExpectedFound([RichPattern.label(label)], self.reason._take_found())

    def in_context(self, label: Any, span: Any) -> None:
        """Record that the error happened inside the labelled context, once per label."""
        if all(existing != label for existing, _ in self.context):
            self.context.append((label, span))

    def __str__(self) -> str:
        return self.reason.describe()

    def __repr__(self) -> str:
        return self.reason.describe(self.span)