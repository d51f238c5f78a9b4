# combparse

Building blocks for writing parser combinators in Python.

`combparse` supplies the pieces a combinator parser rests on:

- **Error types** (`combparse.errors`, `combparse.rich`). `EmptyErr` records only that parsing
  failed. `Cheap` records a span. `Simple` records a span and the token found. `Rich` records
  what was expected, what was found, custom messages and labelled contexts. Every error class
  provides `expected_found`, `merge`, `merge_expected_found` and `replace_expected_found`.
  `Rich` reasons come in three kinds: `ExpectedFound`, `Custom` and `Many`. Expected items are
  `RichPattern`s: a token, a label, or end of input.
- **Extra types** (`combparse.extra`). `Full` bundles three things for a parse: the error class,
  a callable that builds the default state, and a callable that builds the default context. Both
  callables produce `None` by default. The shorthands are `default()`, `err(cls)`, `state(fn)`
  and `context(fn)`.
- **Inputs** (`combparse.inputs`). `StrInput` reads a string one character at a time.
  `SliceInput` reads any sequence, including `bytes`. `SpannedInput` (from `Input.spanned(eoi)`)
  reads a stream of `(token, span)` pairs and takes each span from its pair. `WithContext` (from
  `Input.with_context`) and `MappedSpan` (from `Input.map_span`) change the spans an input
  reports. Spans are `Span(start, end, context)`.
- **Parse state** (`combparse.parse_state`). `InputOwn` holds the owned parts of a parse.
  `InputRef` is the running position: `next`, `peek`, `skip`, `skip_while`, `save`/`rewind`
  with `Marker`, spans, slices, `emit` for non-fatal errors, and `add_alt`/`add_alt_err`. The
  last two keep the furthest error, and merge errors that happen at the same position. A failing
  parser raises `ParseFailure`. `Mode` selects between emitting an output and only checking the
  input. `Emitter` collects errors.
- **Extensions and labels** (`combparse.extension`, `combparse.label`). To make a new primitive
  parser, subclass `ExtParser` and wrap it in `Ext`. `Labelled` replaces the expected patterns of
  errors raised right at its start with a single label. After `as_context()` it also records
  itself as a context on errors that happen further in. Labelling needs an error class that
  supports labels, such as `Rich`; other error classes raise `TypeError`.

A parser here is any object with a `go(inp, mode)` method. `go` returns the output, or raises
`ParseFailure` after recording its error on `inp`.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example: a parser that expects a null byte

```python
from combparse.extension import Ext, ExtParser
from combparse.extra import err
from combparse.inputs import SliceInput
from combparse.parse_state import InputOwn, ParseFailure
from combparse.rich import Rich


class Null(ExtParser):
    def parse(self, inp):
        before = inp.offset()
        found = inp.next_maybe()
        if found == 0:
            return None
        raise ParseFailure(Rich.expected_found([0], found, inp.span_since(before)))


inp = InputOwn(SliceInput(b"\0"), err(Rich)).as_ref_start()
inp.parse(Ext(Null()))          # returns None

inp = InputOwn(SliceInput(b"!"), err(Rich)).as_ref_start()
try:
    inp.parse(Ext(Null()))
except ParseFailure as failure:
    print(failure.error)        # found '33' expected '0'
```

## Rich error messages

```python
from combparse.inputs import Span
from combparse.rich import Rich

e = Rich.expected_found(["a", "b", None], "x", Span(0, 1))
str(e)   # "found 'x' expected 'a', 'b', or end of input"
repr(e)  # "found 'x' at 0..1 expected 'a', 'b', or end of input"
```

If nothing was expected, the message says "expected something else". Merging reasons of different
kinds gives "multiple errors".

## What the package does not do

The package does not include a combinator library. It has no `or`, `then`, repetition or mapping
combinators, and no top-level `parse` function that returns a result with its errors. It provides
the error, input and parse-state types those would be built from, plus `Ext` and `Labelled` as
the parsers it does define.