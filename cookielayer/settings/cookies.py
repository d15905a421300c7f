import os
from typing import Optional, Union

from cookielayer.parser import ParseMode
from cookielayer.utils import truthy


def get_parse_mode() -> ParseMode:
    """
    Returns the parsing mode for `Cookie` headers, read from the `APP_COOKIES_MODE`
    environment variable: "lenient" (default) or "strict".
    """
    value = os.environ.get("APP_COOKIES_MODE", "lenient").strip().lower()
    try:
        return ParseMode(value)
    except ValueError:
        raise ValueError(
            f"Invalid APP_COOKIES_MODE: '{value}'. Must be 'lenient' or 'strict'."
        )


class CookieSettings:
    def __init__(self):
        self._mode = get_parse_mode()
        self._reject_malformed = truthy(
            os.environ.get("APP_COOKIES_REJECT_MALFORMED", "")
        )

    def use(
        self,
        mode: Optional[Union[ParseMode, str]] = None,
        reject_malformed: Optional[bool] = None,
    ):
        if mode is not None:
            self._mode = ParseMode(mode)
        if reject_malformed is not None:
            self._reject_malformed = reject_malformed

    @property
    def mode(self) -> ParseMode:
        return self._mode

    @property
    def reject_malformed(self) -> bool:
        return self._reject_malformed


cookie_settings = CookieSettings()
