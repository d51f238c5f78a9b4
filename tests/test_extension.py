import pytest

from combparse.errors import RichPattern
from combparse.extension import Ext, ExtParser
from combparse.extra import err
from combparse.inputs import SliceInput, Span, StrInput
from combparse.parse_state import InputOwn, Mode, Offset, ParseFailure
from combparse.rich import Rich


class Null(ExtParser):
    """Expects a single null byte."""

    def parse(self, inp):
        before = inp.offset()
        token = inp.next_maybe()
        if token == 0:
            return "null"
        raise ParseFailure(inp.extra.error.expected_found([0], token, inp.span_since(before)))


class Digit(ExtParser):
    def parse(self, inp):
        before = inp.offset()
        token = inp.next_maybe()
        if token is not None and token.isdigit():
            return int(token)
        raise ParseFailure(inp.extra.error.expected_found(["0"], token, inp.span_since(before)))


class CountingDigit(Digit):
    def __init__(self):
        self.checks = 0

    def check(self, inp):
        self.checks += 1
        super().check(inp)


def _ref(data, extra=None):
    source = StrInput(data) if isinstance(data, str) else SliceInput(data)
    return InputOwn(source, extra=extra).as_ref_start()


def test_null_byte_accepted():
    inp = _ref(b"\0")
    assert inp.parse(Ext(Null())) == "null"
    assert inp.offset() == Offset(1)


@pytest.mark.parametrize("data", [b"!", b""])
def test_null_byte_rejected(data):
    inp = _ref(data)
    with pytest.raises(ParseFailure) as info:
        inp.parse(Ext(Null()))
    assert info.value.error is not None
    assert inp.errors.alt is None


@pytest.mark.parametrize("text, value", [("3", 3), ("7", 7)])
def test_digit_parses(text, value):
    assert _ref(text).parse(Ext(Digit())) == value


def test_rich_error_reports_found_and_span():
    inp = _ref("f", extra=err(Rich))
    with pytest.raises(ParseFailure) as info:
        inp.parse(Ext(Digit()))
    error = info.value.error
    assert error.found() == "f"
    assert error.span == Span(0, 1)
    assert error.expected() == [RichPattern.token("0")]


def test_go_records_alt_at_start_offset():
    inp = _ref("xy", extra=err(Rich))
    inp.skip()
    with pytest.raises(ParseFailure):
        Ext(Digit()).go(inp, Mode.EMIT)
    assert inp.errors.alt.pos == 1
    assert inp.errors.alt.err.found() == "y"


def test_failures_at_same_offset_merge():
    class Letter(ExtParser):
        def parse(self, inp):
            before = inp.offset()
            token = inp.next_maybe()
            raise ParseFailure(inp.extra.error.expected_found(["a"], token, inp.span_since(before)))

    inp = _ref("!", extra=err(Rich))
    marker = inp.save()
    for parser in (Ext(Digit()), Ext(Letter())):
        inp.rewind(marker)
        with pytest.raises(ParseFailure):
            parser.go(inp, Mode.EMIT)
    assert inp.errors.alt.err.expected() == [RichPattern.token("0"), RichPattern.token("a")]


def test_check_mode_uses_check_and_discards_output():
    parser = CountingDigit()
    inp = _ref("5")
    assert inp.check(Ext(parser)) is None
    assert parser.checks == 1
    assert inp.offset() == Offset(1)


def test_emit_mode_does_not_call_check():
    parser = CountingDigit()
    assert _ref("5").parse(Ext(parser)) == 5
    assert parser.checks == 0


def test_failure_without_error_is_a_bug():
    class Broken(ExtParser):
        def parse(self, inp):
            raise ParseFailure()

    with pytest.raises(RuntimeError):
        Ext(Broken()).go(_ref("a"), Mode.EMIT)


def test_ext_parser_requires_parse():
    with pytest.raises(TypeError):
        ExtParser()