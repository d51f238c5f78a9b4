"""A stable interface for writing parsers outside the core: ``ExtParser`` and ``Ext``."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from combparse.parse_state import InputRef, Mode, ParseFailure


class ExtParser(ABC):
    """A parser written against the extension interface.

    :meth:`parse` returns the output, or raises :class:`ParseFailure` carrying
    the error that describes why parsing failed. Wrap an instance in :class:`Ext`
    to use it wherever a parser is expected.
    """

    @abstractmethod
    def parse(self, inp: InputRef) -> Any:
        """Parse from ``inp`` and return the output."""

    def check(self, inp: InputRef) -> None:
        """Parse from ``inp`` without producing an output.

        Must behave exactly like :meth:`parse`; by default it runs :meth:`parse`
        and drops the result.
        """
        self.parse(inp)


@dataclass(frozen=True)
class Ext:
    """Wraps an :class:`ExtParser` so that it works as a parser."""

    inner: ExtParser

    def go(self, inp: InputRef, mode: Mode) -> Any:
        """Run the wrapped parser, recording its error as an alternative on failure."""
        before = inp.offset()
        try:
            return mode.choose(inp, self.inner.parse, self.inner.check)
        except ParseFailure as failure:
            if failure.error is None:
                raise RuntimeError("extension parser failed without an error") from failure
            inp.add_alt_err(before.offset, failure.error)
        raise ParseFailure()