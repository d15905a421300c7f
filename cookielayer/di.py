from rodi import Container

from cookielayer.manager import CookieManager
from cookielayer.middlewares import get_cookie_manager


def cookie_manager_factory() -> CookieManager:
    # The manager is bound to the request context by the CookieMiddleware, since it
    # is runtime data rather than composition data.
    return get_cookie_manager()


def register_cookie_manager(container: Container) -> None:
    """
    Makes the CookieManager of the current request resolvable through dependency
    injection, as a scoped service.
    This method requires using `rodi`, since other implementations might not
    support scoped services created by factories.
    """
    container.add_scoped_by_factory(cookie_manager_factory)
