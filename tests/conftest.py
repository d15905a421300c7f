import pytest

from cookielayer.settings.cookies import cookie_settings


@pytest.fixture()
def restore_settings():
    """
    Restores the global cookie settings after a test that modifies them.
    """
    mode = cookie_settings.mode
    reject_malformed = cookie_settings.reject_malformed
    yield cookie_settings
    cookie_settings.use(mode=mode, reject_malformed=reject_malformed)
