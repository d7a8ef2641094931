"""Services: Protocol-based, no inheritance required.

A service is any object implementing some subset of:
    middleware()            -- runs in the middleware phase
    dispatch(result)        -- receives the handler's result
    handle_error(exc)       -- receives a caught exception
    error_dispatch(exc)     -- responds to a failed request
    destruct()              -- teardown, after every request
"""

from sentier.services.protocol import (
    Capability,
    Destructor,
    Dispatch,
    ErrorDispatch,
    ErrorHandler,
    Middleware,
    capabilities,
)
from sentier.services.registry import ServiceRegistry

__all__ = [
    "Capability",
    "Destructor",
    "Dispatch",
    "ErrorDispatch",
    "ErrorHandler",
    "Middleware",
    "ServiceRegistry",
    "capabilities",
]
