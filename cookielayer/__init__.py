"""
Root module of the library. This module re-exports the most commonly used types to
reduce the verbosity of the imports statements.
"""

__version__ = "0.1.0"

from .cookies import Cookie as Cookie
from .cookies import CookieSameSiteMode as CookieSameSiteMode
from .cookies import datetime_from_cookie_format as datetime_from_cookie_format
from .cookies import datetime_to_cookie_format as datetime_to_cookie_format
from .cookies import parse_cookie as parse_cookie
from .exceptions import CookieError as CookieError
from .exceptions import CookieManagerNotInitialized as CookieManagerNotInitialized
from .exceptions import (
    CookieValueExceedsMaximumLength as CookieValueExceedsMaximumLength,
)
from .exceptions import InvalidAttributeCombination as InvalidAttributeCombination
from .exceptions import InvalidCookieAttribute as InvalidCookieAttribute
from .exceptions import InvalidCookieName as InvalidCookieName
from .exceptions import InvalidCookieValue as InvalidCookieValue
from .exceptions import MalformedHeader as MalformedHeader
from .jar import CookieJar as CookieJar
from .jar import CookieState as CookieState
from .manager import CookieManager as CookieManager
from .middlewares import CookieMiddleware as CookieMiddleware
from .middlewares import cookie_manager_context as cookie_manager_context
from .middlewares import get_cookie_manager as get_cookie_manager
from .middlewares import use_cookies as use_cookies
from .parser import ParseMode as ParseMode
from .parser import ParseResult as ParseResult
from .parser import parse_cookie_header as parse_cookie_header
from .scribe import write_response_cookie as write_response_cookie
from .scribe import write_response_cookies as write_response_cookies
