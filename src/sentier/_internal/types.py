"""Shared type aliases used across sentier modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: user-defined function with variable signature
Handler: TypeAlias = Callable[..., Any]

# Global hook: initializer, middleware, dispatcher, error handler, destructor
Hook: TypeAlias = Callable[..., Any]
