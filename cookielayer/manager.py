import threading
from typing import List, Optional, Tuple

from cookielayer.cookies import Cookie
from cookielayer.jar import CookieJar
from cookielayer.scribe import write_response_cookies


class CookieManager:
    """
    Gives access to the cookies of a single request.

    The manager wraps a CookieJar and synchronizes every operation with a lock, so
    that tasks and threads that handle the same request can share it. It must not
    be shared across requests.

    Args:
        jar (CookieJar, optional): The jar holding the cookies of the request.
            Defaults to an empty jar.
    """

    __slots__ = ("_jar", "_lock")

    def __init__(self, jar: Optional[CookieJar] = None) -> None:
        self._jar = jar if jar is not None else CookieJar()
        self._lock = threading.Lock()

    def add(self, cookie: Cookie) -> None:
        with self._lock:
            self._jar.add(cookie)

    def set(self, cookie: Cookie) -> None:
        """Alias for `add`."""
        self.add(cookie)

    def remove(self, name: str) -> None:
        with self._lock:
            self._jar.remove(name)

    def get(self, name: str) -> Optional[Cookie]:
        with self._lock:
            return self._jar.get(name)

    def cookies(self) -> Tuple[Cookie, ...]:
        with self._lock:
            return self._jar.cookies()

    def into_set_cookie_headers(self) -> List[str]:
        """
        Returns the values of the `Set-Cookie` headers describing the changes made
        to the cookies during the request.
        """
        with self._lock:
            changes = self._jar.export_changes()
        return write_response_cookies(changes)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._jar

    def __repr__(self):
        return f"<CookieManager {self._jar!r}>"
