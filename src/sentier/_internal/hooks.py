"""HandlerList: an ordered, append-only sequence of hooks.

Backs every global hook list on the Pipeline and the pre/post lists of
each Route. Insertion order is execution order; entries are never
reordered, deduplicated, or removed.
"""

from collections.abc import Iterator
from typing import Any

from sentier._internal.types import Hook
from sentier.errors import ConfigurationError


class HandlerList:
    """Ordered hooks, invoked in registration order.

    Usage::

        hooks = HandlerList("destructors")
        hooks.append(close_db)
        hooks.append(flush_log)
        hooks.call_all()
    """

    __slots__ = ("_handlers", "name")

    def __init__(self, name: str = "handlers") -> None:
        self.name = name
        self._handlers: list[Hook] = []

    def append(self, handler: Hook) -> None:
        """Add *handler* to the end of the list."""
        if not callable(handler):
            msg = f"{self.name} entries must be callable, got {type(handler).__name__}"
            raise ConfigurationError(msg)
        self._handlers.append(handler)

    def call_all(self, *args: Any) -> None:
        """Call every handler with *args*, discarding results.

        The first exception propagates and the remaining handlers are skipped.
        """
        for handler in self._handlers:
            handler(*args)

    def snapshot(self) -> tuple[Hook, ...]:
        """Return the current handlers as an immutable tuple."""
        return tuple(self._handlers)

    def __iter__(self) -> Iterator[Hook]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return bool(self._handlers)

    def __repr__(self) -> str:
        names = ", ".join(getattr(h, "__name__", repr(h)) for h in self._handlers)
        return f"<HandlerList {self.name} [{names}]>"
