"""Parser labelling: naming what a parser expects and where errors happened."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any

from combparse.parse_state import InputRef, Mode, ParseFailure
from combparse.rich import Rich


class LabelError(ABC):
    """An error that can be annotated by labelled parsers."""

    @abstractmethod
    def label_with(self, label: Any) -> None:
        """Replace the expected patterns with a single label for the whole pattern."""

    @abstractmethod
    def in_context(self, label: Any, span: Any) -> None:
        """Record that the error happened inside the context named by ``label``."""


LabelError.register(Rich)


@dataclass(frozen=True)
class Labelled:
    """A parser whose errors are described by a label."""

    parser: Any
    label: Any
    is_context: bool = False

    def as_context(self) -> "Labelled":
        """Also use the label as context for errors that happen inside the parser."""
        return replace(self, is_context=True)

    def go(self, inp: InputRef, mode: Mode) -> Any:
        """Run the inner parser and annotate the errors it produced."""
        if not issubclass(inp.extra.error, LabelError):
            raise TypeError(f"{inp.extra.error.__name__} does not support labels")

        old_alt = inp.errors.alt
        inp.errors.alt = None
        before = inp.save()

        failure = None
        result = None
        try:
            result = self.parser.go(inp, mode)
        except ParseFailure as exc:
            failure = exc

        new_alt = inp.errors.alt
        inp.errors.alt = old_alt

        if new_alt is not None:
            before_next = before.offset + 1
            if new_alt.pos == before_next:
                new_alt.err.label_with(self.label)
            elif self.is_context and new_alt.pos > before_next:
                span = inp.input.span(before.offset, new_alt.pos)
                new_alt.err.in_context(self.label, span)
            inp.add_alt_err(new_alt.pos, new_alt.err)

        if self.is_context:
            for located in inp.errors.secondary_errors_since(before.err_count):
                span = inp.input.span(before.offset, located.pos)
                located.err.in_context(self.label, span)

        if failure is not None:
            raise failure
        return result