import dataclasses
from dataclasses import dataclass
from datetime import datetime
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import AnyStr, Optional
from urllib.parse import unquote

from cookielayer.exceptions import (
    CookieError,
    CookieValueExceedsMaximumLength,
    InvalidAttributeCombination,
    InvalidCookieAttribute,
    InvalidCookieName,
    InvalidCookieValue,
    MalformedHeader,
)
from cookielayer.utils import ensure_str
from cookielayer.utils.time import as_naive_utc

# https://tools.ietf.org/html/rfc6265#section-6.1
MAX_VALUE_LENGTH = 4096

SEPARATORS = frozenset('()<>@,;:\\"/[]?={} \t')

TOKEN_CHARS = frozenset(
    chr(i) for i in range(0x21, 0x7F) if chr(i) not in SEPARATORS
)

# cookie-octet, https://tools.ietf.org/html/rfc6265#section-4.1.1
COOKIE_OCTETS = frozenset(
    chr(i)
    for i in range(0x21, 0x7F)
    if i not in (0x22, 0x2C, 0x3B, 0x5C)
)


class CookieSameSiteMode(Enum):
    UNDEFINED = 0
    STRICT = 1
    LAX = 2
    NONE = 3


def is_token(value: str) -> bool:
    return bool(value) and all(char in TOKEN_CHARS for char in value)


def is_cookie_octets(value: str) -> bool:
    return all(char in COOKIE_OCTETS for char in value)


def has_control_characters(value: str) -> bool:
    return any(ord(char) < 0x20 or ord(char) == 0x7F for char in value)


def exceeds_maximum_length(value: str) -> bool:
    return len(value.encode("utf8")) > MAX_VALUE_LENGTH


def datetime_to_cookie_format(value: datetime) -> str:
    return as_naive_utc(value).strftime("%a, %d %b %Y %H:%M:%S GMT")


def datetime_from_cookie_format(value: AnyStr) -> datetime:
    return as_naive_utc(parsedate_to_datetime(ensure_str(value)))


def _check_attribute(name: str, value: Optional[str]) -> None:
    if value is None:
        return
    if ";" in value or has_control_characters(value):
        raise InvalidCookieAttribute(name, value)


@dataclass(frozen=True, repr=False)
class Cookie:
    """
    An HTTP cookie. Instances are immutable: use `clone` to obtain a modified copy.

    Cookies read from a request `Cookie` header only have a name and a value; the
    other attributes are meaningful only for `Set-Cookie` response headers.
    A `max_age` of zero or less requests the immediate expiration of the cookie.
    """

    name: str
    value: str
    expires: Optional[datetime] = None
    domain: Optional[str] = None
    path: Optional[str] = None
    http_only: bool = False
    secure: bool = False
    max_age: Optional[int] = None
    same_site: CookieSameSiteMode = CookieSameSiteMode.UNDEFINED

    def __post_init__(self):
        if not isinstance(self.name, str) or not is_token(self.name):
            raise InvalidCookieName(self.name)

        if not isinstance(self.value, str):
            raise InvalidCookieValue(
                f"Cookie values must be strings, got {type(self.value).__name__}"
            )
        if exceeds_maximum_length(self.value):
            raise CookieValueExceedsMaximumLength()

        if self.max_age is not None and (
            isinstance(self.max_age, bool) or not isinstance(self.max_age, int)
        ):
            raise TypeError("max_age must be an integer or None")

        _check_attribute("Domain", self.domain)
        _check_attribute("Path", self.path)

        if self.same_site == CookieSameSiteMode.NONE and not self.secure:
            raise InvalidAttributeCombination(
                "SameSite=None requires the Secure attribute: browsers reject "
                "cookies with SameSite=None that are not marked as Secure."
            )

    def clone(self, **changes) -> "Cookie":
        return dataclasses.replace(self, **changes)

    def __repr__(self):
        return f"<Cookie {self.name}: {self.value}>"


def split_value(raw_value: str, separator: str):
    try:
        index = raw_value.index(separator)
    except ValueError:
        # this is the situation of flags, e.g. httponly and secure
        return "", raw_value
    return raw_value[:index], raw_value[index + 1 :]


def same_site_mode_from_str(raw_value: Optional[str]) -> CookieSameSiteMode:
    if not raw_value:
        return CookieSameSiteMode.UNDEFINED
    raw_value_lower = raw_value.lower()
    if raw_value_lower == "strict":
        return CookieSameSiteMode.STRICT
    if raw_value_lower == "lax":
        return CookieSameSiteMode.LAX
    if raw_value_lower == "none":
        return CookieSameSiteMode.NONE
    return CookieSameSiteMode.UNDEFINED


def parse_cookie(raw_value: AnyStr) -> Cookie:
    """
    Parses the value of a single `Set-Cookie` header into a Cookie, including its
    attributes. Raises MalformedHeader if the value cannot be read.
    """
    text = ensure_str(raw_value)
    parts = [part.strip() for part in text.split(";")]

    if "=" not in parts[0]:
        raise MalformedHeader(text, f"invalid name=value fragment: {parts[0]!r}")

    name, value = split_value(parts[0], "=")
    name = name.strip()
    value = value.strip()
    if len(value) > 1 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]

    expires = None
    domain = None
    path = None
    http_only = False
    secure = False
    max_age = None
    same_site = None

    for part in parts[1:]:
        if "=" in part:
            k, v = split_value(part, "=")
            lower_k = k.strip().lower()
            v = v.strip()
            if lower_k == "expires":
                expires = v
            elif lower_k == "domain":
                domain = v
            elif lower_k == "path":
                path = v
            elif lower_k == "max-age":
                try:
                    max_age = int(v)
                except ValueError:
                    raise MalformedHeader(text, f"invalid Max-Age: {v!r}")
            elif lower_k == "samesite":
                same_site = v
        else:
            lower_part = part.lower()
            if lower_part == "httponly":
                http_only = True
            if lower_part == "secure":
                secure = True

    if expires:
        try:
            expires_value = datetime_from_cookie_format(expires)
        except (TypeError, ValueError):
            raise MalformedHeader(text, f"invalid Expires: {expires!r}")
    else:
        expires_value = None

    try:
        return Cookie(
            name,
            unquote(value),
            expires_value,
            domain or None,
            path or None,
            http_only,
            secure,
            max_age,
            same_site_mode_from_str(same_site),
        )
    except CookieError as error:
        raise MalformedHeader(text, str(error))
