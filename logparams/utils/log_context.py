"""Context variable helpers for request correlation IDs."""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token


_request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def get_request_id() -> str:
    """Return the active request identifier."""
    return _request_id_var.get()


def set_request_id(request_id: str) -> Token[str]:
    return _request_id_var.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id_var.reset(token)


@contextmanager
def bound_request_id(request_id: str) -> Iterator[str]:
    """Bind a request identifier for the duration of the block."""
    token = set_request_id(request_id)
    try:
        yield request_id
    finally:
        reset_request_id(token)
