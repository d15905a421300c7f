"""
This module implements the parsing of `Cookie` request headers, in two modes:

- strict: the header must follow the cookie grammar of RFC 6265, the first invalid
  pair causes the whole header to be rejected;
- lenient: invalid pairs are skipped and the rest of the header is kept.

See https://tools.ietf.org/html/rfc6265#section-4.2.1
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import AnyStr, List, Optional, Tuple, Union
from urllib.parse import unquote

from cookielayer.cookies import (
    exceeds_maximum_length,
    has_control_characters,
    is_cookie_octets,
    is_token,
    split_value,
)
from cookielayer.exceptions import MalformedHeader
from cookielayer.logs import get_logger
from cookielayer.utils import ensure_str

logger = get_logger()

CookiePair = Tuple[str, str]

_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class ParseMode(Enum):
    LENIENT = "lenient"
    STRICT = "strict"


@dataclass
class ParseResult:
    """
    The outcome of parsing a `Cookie` header: the name/value pairs in header order,
    the number of pairs skipped in lenient mode, and the error that caused a strict
    parse to fail.
    """

    pairs: List[CookiePair] = field(default_factory=list)
    skipped: int = 0
    error: Optional[MalformedHeader] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def _unquote_value(name: str, value: str) -> Tuple[Optional[str], str]:
    if not value.startswith('"'):
        return value, ""
    if len(value) < 2 or not value.endswith('"'):
        return None, f"unterminated quoted value for {name!r}"
    return value[1:-1], ""


def _parse_strict_pair(segment: str) -> Tuple[Optional[CookiePair], str]:
    if "=" not in segment:
        return None, f"missing '=' in {segment!r}"

    name, value = split_value(segment, "=")

    if not name:
        return None, "empty cookie name"
    if not is_token(name):
        return None, f"invalid cookie name {name!r}"

    value, reason = _unquote_value(name, value)
    if value is None:
        return None, reason

    if not is_cookie_octets(value):
        return None, f"invalid character in the value of {name!r}"

    if _INVALID_ESCAPE.search(value):
        return None, f"invalid percent-encoding in the value of {name!r}"

    try:
        value = unquote(value, errors="strict")
    except UnicodeDecodeError:
        return None, f"invalid percent-encoding in the value of {name!r}"

    if exceeds_maximum_length(value):
        return None, f"the value of {name!r} exceeds the maximum length"
    return (name, value), ""


def _parse_lenient_pair(segment: str) -> Tuple[Optional[CookiePair], str]:
    if "=" not in segment:
        return None, f"missing '=' in {segment!r}"

    name, value = split_value(segment, "=")
    name = name.strip()

    if not is_token(name):
        return None, f"invalid cookie name {name!r}"

    value, reason = _unquote_value(name, value.strip())
    if value is None:
        return None, reason

    if has_control_characters(value):
        return None, f"control character in the value of {name!r}"

    try:
        value = unquote(value, errors="strict")
    except UnicodeDecodeError:
        # the raw value is kept
        pass

    if exceeds_maximum_length(value):
        return None, f"the value of {name!r} exceeds the maximum length"
    return (name, value), ""


def parse_cookie_header(
    value: Optional[AnyStr],
    mode: Union[ParseMode, str] = ParseMode.LENIENT,
) -> ParseResult:
    """
    Parses the value of a `Cookie` request header into name/value pairs.

    Pairs are returned in header order, including repeated names: consumers that
    build a mapping from them obtain "last one wins" semantics. Percent-encoded
    values are decoded.

    In strict mode the first invalid pair makes the parse fail: the returned result
    has no pairs and an error describing the problem. In lenient mode invalid pairs
    are skipped and counted.
    """
    mode = ParseMode(mode)
    text = ensure_str(value) if value else ""
    result = ParseResult()

    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue

        if mode is ParseMode.STRICT:
            pair, reason = _parse_strict_pair(segment)
            if pair is None:
                return ParseResult(error=MalformedHeader(text, reason))
        else:
            pair, reason = _parse_lenient_pair(segment)
            if pair is None:
                result.skipped += 1
                logger.debug(f"Skipped an invalid cookie pair: {reason}")
                continue

        result.pairs.append(pair)
    return result
