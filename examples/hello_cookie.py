"""
Sets a `counter` cookie on the first request, and increments it on following
requests.

Run with:

    uvicorn examples.hello_cookie:app --port 3000
"""

from cookielayer import Cookie, get_cookie_manager, use_cookies


async def counter(scope, receive, send):
    cookies = get_cookie_manager()

    cookie = cookies.get("counter")
    try:
        value = int(cookie.value) if cookie else 0
    except ValueError:
        value = 0
    value += 1

    cookies.add(Cookie("counter", str(value), path="/", http_only=True))

    body = f"Hello from cookielayer! Counter: {value}".encode()
    await send(
        {
            "type": "http.response.start",
            "status": 200,
            "headers": [
                (b"content-type", b"text/plain; charset=utf-8"),
                (b"content-length", str(len(body)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body})


app = use_cookies(counter)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=3000)
