from .helpers import get_example_scope
from .messages import MockReceive, MockSend

__all__ = ["get_example_scope", "MockReceive", "MockSend"]
