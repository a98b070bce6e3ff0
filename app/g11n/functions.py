"""Shorthand translation functions bound to a request-local registry.

Usage:
    from g11n.functions import msg, use_g11n

    with use_g11n(request_g11n):
        title = msg("default.title")
        welcome = __("welcome", params={"name": "Ada"})
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator, Optional

from g11n.configuration import settings
from g11n.formatting import Params
from g11n.registry import G11n

_active_g11n: ContextVar[Optional[G11n]] = ContextVar("g11n", default=None)


@contextmanager
def use_g11n(g11n: G11n) -> Generator[G11n, None, None]:
    """Bind a registry to the current context for the duration of the block."""
    token = _active_g11n.set(g11n)
    try:
        yield g11n
    finally:
        _active_g11n.reset(token)


def current_g11n() -> G11n:
    """The registry bound to the current context.

    Raises:
        RuntimeError: If no registry is bound.
    """
    g11n = _active_g11n.get()
    if g11n is None:
        raise RuntimeError("No G11n registry is bound to the current context")
    return g11n


def msg(key: str, params: Params = None) -> str:
    """Translate a full message key."""
    return current_g11n().translate(key, params)


def __(
    id: str,
    catalog: str = "default",
    domain: Optional[str] = None,
    params: Params = None,
) -> str:
    """Translate a message given its id, catalog and domain separately."""
    g11n = current_g11n()
    if domain is None:
        translator = g11n.get_translator()
        domain = (
            translator.default_domain if translator else settings.g11n.DEFAULT_DOMAIN
        )
    return g11n.translate(f"{domain}.{catalog}.{id}", params)
