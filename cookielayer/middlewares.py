"""
This module contains the ASGI middleware that binds a CookieManager to each HTTP
request, and writes the resulting `Set-Cookie` headers to the response.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, List, Optional, Tuple, Union

from cookielayer.exceptions import CookieManagerNotInitialized
from cookielayer.jar import CookieJar
from cookielayer.logs import get_logger
from cookielayer.manager import CookieManager
from cookielayer.parser import ParseMode, parse_cookie_header
from cookielayer.settings.cookies import cookie_settings

logger = get_logger()

_current_manager: ContextVar[Optional[CookieManager]] = ContextVar(
    "cookielayer_manager", default=None
)


def get_cookie_manager() -> CookieManager:
    """
    Returns the CookieManager of the request being handled in the current context.
    Raises CookieManagerNotInitialized if there is none.
    """
    manager = _current_manager.get()
    if manager is None:
        raise CookieManagerNotInitialized()
    return manager


@contextmanager
def cookie_manager_context(manager: CookieManager) -> Iterator[CookieManager]:
    """
    Binds the given manager to the current context for the duration of the `with`
    block. Tasks created inside the block share the same manager.
    """
    token = _current_manager.set(manager)
    try:
        yield manager
    finally:
        _current_manager.reset(token)


def get_cookie_header(scope) -> bytes:
    """
    Returns the value of the `Cookie` headers of an ASGI scope, joining multiple
    headers with "; ".
    """
    values = [
        value for key, value in scope.get("headers", []) if key.lower() == b"cookie"
    ]
    return b"; ".join(values)


def get_set_cookie_headers(manager: CookieManager) -> List[Tuple[bytes, bytes]]:
    return [
        (b"set-cookie", value.encode())
        for value in manager.into_set_cookie_headers()
    ]


async def _send_bad_request(send, message: str) -> None:
    body = message.encode()
    await send(
        {
            "type": "http.response.start",
            "status": 400,
            "headers": [
                (b"content-type", b"text/plain; charset=utf-8"),
                (b"content-length", str(len(body)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body})


class CookieMiddleware:
    """
    ASGI middleware that parses the `Cookie` header of HTTP requests into a
    CookieManager, makes it available to the application for the duration of the
    request, and adds a `Set-Cookie` header for each cookie changed by the
    application to the response.

    The manager is available through `get_cookie_manager()` and in
    `scope["state"]["cookies"]`.

    Args:
        app: The ASGI application to wrap.
        mode (ParseMode | str, optional): The parsing mode for `Cookie` headers.
            Defaults to the configured `cookie_settings.mode` (lenient).
        reject_malformed (bool, optional): Whether requests whose `Cookie` header
            is rejected by the strict parser are answered with `400 Bad Request`.
            When false, those requests are handled as if they had no cookies.
            Defaults to the configured `cookie_settings.reject_malformed`.
    """

    def __init__(
        self,
        app,
        mode: Optional[Union[ParseMode, str]] = None,
        reject_malformed: Optional[bool] = None,
    ) -> None:
        self.app = app
        self.mode = ParseMode(mode) if mode is not None else cookie_settings.mode
        self.reject_malformed = (
            reject_malformed
            if reject_malformed is not None
            else cookie_settings.reject_malformed
        )

    def create_manager(self, scope) -> Tuple[CookieManager, Optional[str]]:
        result = parse_cookie_header(get_cookie_header(scope), self.mode)

        if result.error is not None:
            logger.warning(
                f"Rejected the Cookie header of a request to "
                f"{scope.get('path', '')}: {result.error.reason}"
            )
            return CookieManager(), result.error.reason

        return CookieManager(CookieJar.from_pairs(result.pairs)), None

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        manager, error = self.create_manager(scope)

        if error is not None and self.reject_malformed:
            await _send_bad_request(send, f"Bad Request: {error}")
            return

        if "state" not in scope:
            scope["state"] = {}
        scope["state"]["cookies"] = manager

        async def send_with_cookies(message):
            if message["type"] == "http.response.start":
                set_cookie_headers = get_set_cookie_headers(manager)
                if set_cookie_headers:
                    logger.debug(
                        f"Writing {len(set_cookie_headers)} Set-Cookie header(s)"
                    )
                    headers = list(message.get("headers", []))
                    headers.extend(set_cookie_headers)
                    message = {**message, "headers": headers}
            await send(message)

        with cookie_manager_context(manager):
            await self.app(scope, receive, send_with_cookies)


def use_cookies(app, **kwargs) -> CookieMiddleware:
    """
    Wraps an ASGI application with the CookieMiddleware.

    Usage:
        app = use_cookies(app)
        # or
        app = use_cookies(app, mode="strict", reject_malformed=True)
    """
    return CookieMiddleware(app, **kwargs)
