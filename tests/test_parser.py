import logging

import pytest

from cookielayer import Cookie, CookieJar, ParseMode, parse_cookie_header
from cookielayer.exceptions import MalformedHeader
from cookielayer.scribe import write_response_cookie


@pytest.mark.parametrize("mode", [ParseMode.LENIENT, ParseMode.STRICT])
@pytest.mark.parametrize(
    "value,expected_pairs",
    [
        ["session=abc123; theme=dark", [("session", "abc123"), ("theme", "dark")]],
        ["session=abc123;theme=dark", [("session", "abc123"), ("theme", "dark")]],
        ["  a=1 ;  b=2 ", [("a", "1"), ("b", "2")]],
        ["a=1;", [("a", "1")]],
        ["a=", [("a", "")]],
        ['a="quoted"', [("a", "quoted")]],
        ['a=""', [("a", "")]],
        ["a=x%20y", [("a", "x y")]],
        ["a=caf%C3%A9", [("a", "café")]],
        ["a=b=c", [("a", "b=c")]],
        ["a=1; a=2", [("a", "1"), ("a", "2")]],
        [b"a=1; b=2", [("a", "1"), ("b", "2")]],
        ["", []],
        [None, []],
    ],
)
def test_parse_valid_headers(mode, value, expected_pairs):
    result = parse_cookie_header(value, mode)

    assert result.ok is True
    assert result.error is None
    assert result.pairs == expected_pairs
    assert result.skipped == 0


@pytest.mark.parametrize(
    "value",
    [
        "bad name=x",
        "a",
        "a=1; b",
        "=x",
        "a =1",
        "a= 1",
        "a=b c",
        "a=b,c",
        'a="x',
        'a="',
        'a=x"y',
        "a=%FF",
        "a=%zz",
        "a=100%",
        "a=%4",
        "a=\x01",
        "(a)=1",
        "a=" + "x" * 4097,
    ],
)
def test_strict_parse_fails_for_the_whole_header(value):
    result = parse_cookie_header("first=1; " + value + "; last=2", ParseMode.STRICT)

    assert result.ok is False
    assert result.pairs == []
    assert isinstance(result.error, MalformedHeader)
    assert result.error.reason

    with pytest.raises(MalformedHeader):
        result.raise_for_error()


@pytest.mark.parametrize(
    "value",
    [
        "bad name=x",
        "a",
        "=x",
        'a="x',
        "a=\x01",
        "(a)=1",
        "a=" + "x" * 4097,
    ],
)
def test_lenient_parse_skips_invalid_pairs(value):
    result = parse_cookie_header("first=1; " + value + "; last=2")

    assert result.ok is True
    assert result.pairs == [("first", "1"), ("last", "2")]
    assert result.skipped == 1


@pytest.mark.parametrize(
    "value,expected_pairs",
    [
        ["a = 1 ; b= 2", [("a", "1"), ("b", "2")]],
        ["a=hello world", [("a", "hello world")]],
        ["a=x,y", [("a", "x,y")]],
        ["a=%FF", [("a", "%FF")]],
        ["a=100%", [("a", "100%")]],
    ],
)
def test_lenient_parse_best_effort(value, expected_pairs):
    result = parse_cookie_header(value, ParseMode.LENIENT)

    assert result.pairs == expected_pairs
    assert result.skipped == 0


def test_bad_name_example():
    strict_result = parse_cookie_header("bad name=x", ParseMode.STRICT)

    assert isinstance(strict_result.error, MalformedHeader)

    with pytest.raises(MalformedHeader):
        CookieJar.parse_strict("bad name=x")

    jar = CookieJar.parse("bad name=x", ParseMode.LENIENT)
    assert len(jar) == 0


def test_mode_can_be_given_as_string():
    assert parse_cookie_header("bad name=x", "strict").ok is False
    assert parse_cookie_header("bad name=x", "lenient").ok is True

    with pytest.raises(ValueError):
        parse_cookie_header("a=1", "relaxed")


def test_lenient_parse_logs_skipped_pairs(caplog):
    caplog.set_level(logging.DEBUG, logger="cookielayer")

    parse_cookie_header("a; b=2")

    assert any("Skipped" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize(
    "header",
    [
        "a=1; b=2; c=3",
        "a=1; b=2; a=3",
        "x=1; x=2; x=3",
        "token=abc.DEF-123_~!#$&'*+^`|",
    ],
)
def test_strict_parse_reproduces_pairs_with_last_occurrence(header):
    result = parse_cookie_header(header, ParseMode.STRICT)
    jar = CookieJar.from_pairs(result.pairs)

    expected = {}
    for segment in header.split("; "):
        name, value = segment.split("=", 1)
        expected[name] = value

    assert {cookie.name: cookie.value for cookie in jar.cookies()} == expected


@pytest.mark.parametrize(
    "value",
    [
        "abc123",
        "",
        "Hello World;",
        "100%",
        "x%20y",
        "café",
        'say "hi"',
        "a,b",
        "a\\b",
        "tab\tand\nnewline",
        "base64+/==",
    ],
)
def test_serialized_cookie_round_trip(value):
    header = write_response_cookie(Cookie("name", value, path="/", max_age=10))
    name_value = header.split("; ")[0]

    result = parse_cookie_header(name_value, ParseMode.STRICT)

    assert result.ok is True
    assert result.pairs == [("name", value)]
