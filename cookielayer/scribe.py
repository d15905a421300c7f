from typing import Iterable, List
from urllib.parse import quote

from cookielayer.cookies import (
    COOKIE_OCTETS,
    Cookie,
    CookieSameSiteMode,
    datetime_to_cookie_format,
)
from cookielayer.exceptions import InvalidAttributeCombination

# "%" is escaped too, so that percent-decoding restores the original value
_SAFE_VALUE_CHARS = "".join(sorted(COOKIE_OCTETS - {"%"}))

_SAME_SITE_VALUES = {
    CookieSameSiteMode.STRICT: "Strict",
    CookieSameSiteMode.LAX: "Lax",
    CookieSameSiteMode.NONE: "None",
}


def write_cookie_value(value: str) -> str:
    return quote(value, safe=_SAFE_VALUE_CHARS)


def write_response_cookie(cookie: Cookie) -> str:
    """
    Returns the value of a `Set-Cookie` header for the given cookie. Attributes are
    written in a fixed order: Domain, Path, Expires, Max-Age, Secure, HttpOnly,
    SameSite.
    """
    if cookie.same_site == CookieSameSiteMode.NONE and not cookie.secure:
        raise InvalidAttributeCombination(
            f"Cannot write cookie {cookie.name!r}: SameSite=None requires Secure."
        )

    parts = [cookie.name + "=" + write_cookie_value(cookie.value)]
    if cookie.domain:
        parts.append("Domain=" + cookie.domain)
    if cookie.path:
        parts.append("Path=" + cookie.path)
    if cookie.expires:
        parts.append("Expires=" + datetime_to_cookie_format(cookie.expires))
    if cookie.max_age is not None:
        parts.append("Max-Age=" + str(max(cookie.max_age, 0)))
    if cookie.secure:
        parts.append("Secure")
    if cookie.http_only:
        parts.append("HttpOnly")
    if cookie.same_site in _SAME_SITE_VALUES:
        parts.append("SameSite=" + _SAME_SITE_VALUES[cookie.same_site])
    return "; ".join(parts)


def write_response_cookies(cookies: Iterable[Cookie]) -> List[str]:
    return [write_response_cookie(cookie) for cookie in cookies]
