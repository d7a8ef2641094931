"""Guarded hook execution for the error and teardown paths.

Once a request has failed, or once it is tearing down, every remaining
hook must still get its turn. ``call_guarded`` runs each hook, logs any
failure with its traceback, and keeps going.
"""

import logging
from collections.abc import Iterable
from typing import Any

from sentier._internal.types import Hook


def hook_name(hook: Hook) -> str:
    """A readable name for log lines: ``qualname`` when available."""
    return getattr(hook, "__qualname__", None) or getattr(hook, "__name__", None) or repr(hook)


def call_guarded(
    hooks: Iterable[Hook],
    *args: Any,
    logger: logging.Logger,
    label: str,
) -> list[Exception]:
    """Call every hook with *args*; return the exceptions raised, in order."""
    failures: list[Exception] = []
    for hook in hooks:
        try:
            hook(*args)
        except Exception as exc:
            logger.exception("%s hook %s failed", label, hook_name(hook))
            failures.append(exc)
    return failures
