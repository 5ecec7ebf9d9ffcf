"""Command handlers: one module per protocol command family."""

from .exchange import exchange
from .hello import hello
from .naming import lookup
from .session import SessionType, create

__all__ = ["exchange", "hello", "lookup", "create", "SessionType"]
