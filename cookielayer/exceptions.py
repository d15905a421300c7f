class CookieError(Exception):
    def __init__(self, message: str):
        super().__init__(message)


class MalformedHeader(CookieError):
    def __init__(self, header: str, reason: str):
        super().__init__(f"Malformed cookie header: {reason}")
        self.header = header
        self.reason = reason


class InvalidCookieName(CookieError, ValueError):
    def __init__(self, name):
        super().__init__(f"Invalid cookie name: {name!r}")
        self.name = name


class InvalidCookieValue(CookieError, ValueError):
    def __init__(self, message: str):
        super().__init__(message)


class CookieValueExceedsMaximumLength(InvalidCookieValue):
    def __init__(self):
        super().__init__(
            "The length of the cookie value exceeds the maximum "
            "length of 4096 bytes, and it would be ignored or truncated "
            "by clients. See: https://tools.ietf.org/html/rfc6265#section-6.1"
        )


class InvalidAttributeCombination(CookieError, ValueError):
    def __init__(self, message: str):
        super().__init__(message)


class CookieManagerNotInitialized(CookieError, RuntimeError):
    def __init__(self):
        super().__init__(
            "No cookie manager is bound to the current context. "
            "Is the CookieMiddleware configured for this application?"
        )


class InvalidCookieAttribute(CookieError, ValueError):
    def __init__(self, name: str, value):
        super().__init__(f"Invalid {name} attribute: {value!r}")
        self.attribute = name
        self.value = value
