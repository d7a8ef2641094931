"""Sentier: a small request router and middleware pipeline.

Register handlers against exact paths and methods, wrap them in ordered
pre/post hooks, and run initialization, middleware, dispatch, error
handling and teardown around every request.

Basic usage::

    from sentier import Pipeline

    pipeline = Pipeline()
    pipeline.initialize(open_db)
    pipeline.get("/items", list_items).post(send_json)
    pipeline.error_handler(send_error)
    pipeline.destructor(close_db)

    pipeline.route(environ["REQUEST_METHOD"], environ["PATH_INFO"])

Script mode, for single-endpoint use::

    pipeline.request_handler("POST", handle_form)
    pipeline.dispatch("POST")
"""

__version__ = "0.1.0"
__all__ = [
    "Capability",
    "ConfigurationError",
    "Controller",
    "Destructor",
    "Dispatch",
    "ErrorDispatch",
    "ErrorHandler",
    "HTTPError",
    "MethodMismatch",
    "Middleware",
    "Outcome",
    "Phase",
    "Pipeline",
    "PipelineConfig",
    "Route",
    "RouteNotFound",
    "SentierError",
    "ServiceRegistry",
]

# Public name -> defining module, resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "Capability": "sentier.services.protocol",
    "ConfigurationError": "sentier.errors",
    "Controller": "sentier.controller",
    "Destructor": "sentier.services.protocol",
    "Dispatch": "sentier.services.protocol",
    "ErrorDispatch": "sentier.services.protocol",
    "ErrorHandler": "sentier.services.protocol",
    "HTTPError": "sentier.errors",
    "MethodMismatch": "sentier.errors",
    "Middleware": "sentier.services.protocol",
    "Outcome": "sentier.outcome",
    "Phase": "sentier.outcome",
    "Pipeline": "sentier.pipeline",
    "PipelineConfig": "sentier.config",
    "Route": "sentier.routing.route",
    "RouteNotFound": "sentier.errors",
    "SentierError": "sentier.errors",
    "ServiceRegistry": "sentier.services.registry",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sentier`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
