from typing import Dict, List, Optional, Sequence, Tuple, Union

HeadersType = Union[None, Sequence[Tuple[bytes, bytes]], Dict[str, str]]
CookiesType = Union[None, str, bytes, Dict[str, str]]


def get_example_scope(
    method: str,
    path: str,
    extra_headers: HeadersType = None,
    *,
    scheme: str = "http",
    server: Optional[Tuple[str, int]] = None,
    cookies: CookiesType = None,
):
    """
    Returns a mocked ASGI scope for an HTTP request.

    Cookies can be given as the raw value of the `Cookie` header, or as a
    dictionary; dictionary values are written as they are, without escaping, so
    that tests can send invalid cookies.
    """
    if "?" in path:
        raise ValueError(
            "The path in ASGI messages does not contain query string"
        )

    if server is None:
        server = ("127.0.0.1", 8000)

    if isinstance(extra_headers, dict):
        extra_headers = [
            (key.encode(), value.encode()) for key, value in extra_headers.items()
        ]

    cookies_headers: List[Tuple[bytes, bytes]] = []

    if isinstance(cookies, dict):
        cookies = "; ".join(f"{key}={value}" for key, value in cookies.items())
    if isinstance(cookies, str):
        cookies = cookies.encode()
    if cookies:
        cookies_headers.append((b"cookie", cookies))

    headers = (
        [(b"host", f"{server[0]}:{server[1]}".encode())]
        + ([tuple(header) for header in extra_headers] if extra_headers else [])
        + cookies_headers
    )

    return {
        "type": "http",
        "http_version": "1.1",
        "server": tuple(server),
        "client": ("127.0.0.1", 51492),
        "scheme": scheme,
        "method": method,
        "root_path": "",
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": headers,
    }
