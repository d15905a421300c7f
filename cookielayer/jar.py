from enum import Enum
from typing import AnyStr, Dict, Iterable, Iterator, Optional, Tuple, Union

from cookielayer.cookies import Cookie, is_token
from cookielayer.parser import ParseMode, parse_cookie_header


class CookieState(Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"


class JarEntry:
    __slots__ = ("cookie", "state")

    def __init__(self, cookie: Cookie, state: CookieState):
        self.cookie = cookie
        self.state = state

    @property
    def removed(self) -> bool:
        return self.state is CookieState.REMOVED


class CookieJar:
    """
    Collection of the cookies of a single request, keyed by name.

    Cookies read from the request are kept as unchanged; adding or removing cookies
    marks them, so that `export_changes` returns only the cookies that must be sent
    back to the client with `Set-Cookie` headers. Removed cookies are kept as
    tombstones, and exported as expired cookies so that clients delete them.

    This class is not thread-safe: see CookieManager.
    """

    def __init__(self, cookies: Iterable[Cookie] = ()):
        self._entries: Dict[str, JarEntry] = {}
        # names in order of last change
        self._changes: Dict[str, None] = {}
        for cookie in cookies:
            self._entries[cookie.name] = JarEntry(cookie, CookieState.UNCHANGED)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "CookieJar":
        return cls(Cookie(name, value) for name, value in pairs)

    @classmethod
    def parse(
        cls,
        header: Optional[AnyStr],
        mode: Union[ParseMode, str] = ParseMode.LENIENT,
    ) -> "CookieJar":
        """
        Creates a jar from the value of a `Cookie` request header.
        Raises MalformedHeader if the header is rejected in strict mode.
        """
        result = parse_cookie_header(header, mode)
        result.raise_for_error()
        return cls.from_pairs(result.pairs)

    @classmethod
    def parse_strict(cls, header: Optional[AnyStr]) -> "CookieJar":
        return cls.parse(header, ParseMode.STRICT)

    def _touch(self, name: str) -> None:
        self._changes.pop(name, None)
        self._changes[name] = None

    def add(self, cookie: Cookie) -> None:
        if not isinstance(cookie, Cookie):
            raise TypeError("Expected an instance of Cookie")

        existing = self._entries.get(cookie.name)
        if existing is None or existing.state is CookieState.ADDED:
            state = CookieState.ADDED
        else:
            state = CookieState.MODIFIED

        self._entries[cookie.name] = JarEntry(cookie, state)
        self._touch(cookie.name)

    def remove(self, name: str) -> None:
        entry = self._entries.get(name)

        if entry is None:
            if not isinstance(name, str) or not is_token(name):
                # clients cannot hold a cookie with this name
                return
            # the client might still hold a cookie with this name
            self._entries[name] = JarEntry(Cookie(name, ""), CookieState.REMOVED)
            self._touch(name)
            return

        if entry.removed:
            return

        entry.state = CookieState.REMOVED
        self._touch(name)

    def get(self, name: str) -> Optional[Cookie]:
        entry = self._entries.get(name)
        if entry is None or entry.removed:
            return None
        return entry.cookie

    def state_of(self, name: str) -> Optional[CookieState]:
        entry = self._entries.get(name)
        return entry.state if entry is not None else None

    def cookies(self) -> Tuple[Cookie, ...]:
        """
        Returns a snapshot of the cookies currently in the jar, excluding removed
        ones. The snapshot is not affected by following changes to the jar.
        """
        return tuple(
            entry.cookie for entry in self._entries.values() if not entry.removed
        )

    @property
    def changed(self) -> bool:
        return bool(self._changes)

    def export_changes(self) -> Tuple[Cookie, ...]:
        """
        Returns the cookies that must be sent to the client with `Set-Cookie`
        headers, in order of last change: added and modified cookies as they are,
        and removed cookies as expired cookies with empty value.
        Unchanged cookies are not included, since clients already have them.
        """
        exported = []
        for name in self._changes:
            entry = self._entries[name]
            if entry.removed:
                exported.append(
                    entry.cookie.clone(value="", max_age=0, expires=None)
                )
            else:
                exported.append(entry.cookie)
        return tuple(exported)

    def __contains__(self, name: object) -> bool:
        entry = self._entries.get(name)  # type: ignore
        return entry is not None and not entry.removed

    def __len__(self) -> int:
        return sum(1 for entry in self._entries.values() if not entry.removed)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(self.cookies())

    def __repr__(self):
        return f"<CookieJar {len(self)} cookies, {len(self._changes)} changes>"
