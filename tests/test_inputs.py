import pytest

from combparse.inputs import (
    Input,
    MappedSpan,
    SliceInput,
    Span,
    SpannedInput,
    StrInput,
    WithContext,
)


def _drain(inp):
    tokens = []
    offset = inp.start()
    while True:
        offset, tok = inp.next_maybe(offset)
        if tok is None:
            return tokens, offset
        tokens.append(tok)


def _pairs():
    return [("a", Span(0, 1)), ("b", Span(2, 4))]


def _as_tuple(span):
    return (span.start, span.end)


def _identity(span):
    return span


def test_str_input_reads_every_character():
    text = "hello"
    tokens, end = _drain(StrInput(text))
    assert "".join(tokens) == text
    assert end == len(text)


def test_str_input_end_keeps_offset():
    inp = StrInput("ab")
    assert inp.next_maybe(2) == (2, None)


def test_str_input_span_and_slice():
    text = "abcdef"
    inp = StrInput(text)
    assert inp.span(1, 3) == Span(1, 3)
    assert inp.span_from(2) == Span(2, len(text))
    assert inp.slice(1, 3) == text[1:3]
    assert inp.slice_from(4) == text[4:]


def test_slice_out_of_bounds_raises():
    inp = StrInput("abc")
    with pytest.raises(IndexError):
        inp.slice(2, 10)
    with pytest.raises(IndexError):
        inp.slice(2, 1)


def test_prev_saturates_at_zero():
    inp = StrInput("abc")
    assert inp.prev(0) == 0
    assert inp.prev(2) == 1


def test_span_str_format():
    assert str(Span(0, 3)) == "0..3"


def test_slice_input_over_bytes_yields_ints():
    data = b"\x00\x01\x02"
    tokens, end = _drain(SliceInput(data))
    assert tokens == list(data)
    assert end == len(data)


def test_slice_input_slicing_returns_sequence_part():
    items = [10, 20, 30, 40]
    inp = SliceInput(items)
    assert inp.slice(1, 3) == items[1:3]
    assert inp.slice_from(2) == items[2:]
    assert inp.span_from(0) == Span(0, len(items))


def test_input_is_abstract():
    with pytest.raises(TypeError):
        Input()


def test_spanned_input_yields_tokens_only():
    inp = SliceInput(_pairs()).spanned(Span(4, 4))
    assert isinstance(inp, SpannedInput)
    tokens, _ = _drain(inp)
    assert tokens == [tok for tok, _ in _pairs()]


def test_spanned_input_spans_come_from_tokens():
    pairs = _pairs()
    inp = SliceInput(pairs).spanned(Span(4, 4))
    assert inp.span(0, 2) == Span(pairs[0][1].start, pairs[1][1].end)
    assert inp.span(1, 2) == pairs[1][1]


def test_spanned_input_span_at_end_uses_eoi():
    eoi = Span(4, 4)
    inp = SliceInput(_pairs()).spanned(eoi)
    assert inp.span_from(2) == Span(eoi.start, eoi.start)
    assert inp.span_from(1) == Span(_pairs()[1][1].start, eoi.start)


def test_spanned_input_keeps_eoi_context():
    eoi = Span(4, 4, "file.txt")
    inp = SliceInput(_pairs()).spanned(eoi)
    assert inp.span(0, 1).context == "file.txt"


def test_spanned_input_slices_hold_pairs():
    pairs = _pairs()
    inp = SliceInput(pairs).spanned(Span(4, 4))
    assert inp.slice(0, 1) == pairs[0:1]
    assert inp.slice_from(1) == pairs[1:]


def test_with_context_attaches_context():
    inp = StrInput("abc").with_context("main.src")
    assert isinstance(inp, WithContext)
    assert inp.span(0, 2) == Span(0, 2, "main.src")
    assert inp.span_from(1) == Span(1, len("abc"), "main.src")
    assert inp.slice(0, 2) == "ab"


def test_with_context_reads_same_tokens():
    text = "xyz"
    tokens, _ = _drain(StrInput(text).with_context(7))
    assert "".join(tokens) == text


def test_map_span_applies_function():
    inp = StrInput("abcd").map_span(_as_tuple)
    assert isinstance(inp, MappedSpan)
    assert inp.span(1, 3) == (1, 3)
    assert inp.span_from(2) == (2, len("abcd"))
    assert inp.slice_from(2) == "cd"


def test_wrappers_delegate_prev():
    inner = StrInput("abc")
    assert inner.with_context(None).prev(0) == 0
    mapped = inner.map_span(_identity)
    assert mapped.prev(3) == inner.prev(3)