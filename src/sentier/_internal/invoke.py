"""Invoke helpers: call hooks with the threaded payload uniformly.

Middleware, pre-handlers and route handlers can take no arguments, one
argument, or several. The payload passed between them decides which:
``None`` means no arguments, a ``tuple`` is spread positionally, and
anything else is passed as the single argument. This module keeps that
rule in exactly one place.

Usage::

    from sentier._internal.invoke import invoke, thread

    result = invoke(handler, payload)
    payload = thread(route.pre_handlers, payload)
"""

from collections.abc import Iterable
from typing import Any

from sentier._internal.types import Handler


def invoke(handler: Handler, payload: Any = None) -> Any:
    """Call *handler* with *payload* spread into its arguments.

    ::

        invoke(lambda: 1)                   # payload None -> handler()
        invoke(lambda a, b: a + b, (1, 2))  # tuple -> handler(1, 2)
        invoke(lambda item: item, [1, 2])   # anything else -> handler([1, 2])
    """
    if payload is None:
        return handler()
    if isinstance(payload, tuple):
        return handler(*payload)
    return handler(payload)


def thread(handlers: Iterable[Handler], payload: Any = None) -> Any:
    """Run *handlers* in order, each receiving the payload left by the last.

    A handler returning ``None`` leaves the payload unchanged, so hooks that
    only observe do not erase what earlier hooks produced.
    """
    for handler in handlers:
        result = invoke(handler, payload)
        if result is not None:
            payload = result
    return payload
