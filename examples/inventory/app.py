"""Inventory: a WSGI app built on a sentier Pipeline.

Demonstrates:
- Route registration with pre/post hooks
- Middleware threading a request context into handlers
- Services for JSON responses, timing, and error reporting
- Teardown that runs after every request

Run:
    cd examples/inventory && python app.py
"""

import json
import logging
import time
from typing import Any
from wsgiref.simple_server import make_server

from sentier import HTTPError, Pipeline

logger = logging.getLogger("inventory")

ITEMS: dict[str, dict[str, Any]] = {
    "lamp": {"name": "lamp", "stock": 3},
    "desk": {"name": "desk", "stock": 0},
}


class Exchange:
    """The in-flight request and the response being built for it."""

    def __init__(self, environ: dict[str, Any]) -> None:
        self.environ = environ
        self.status = "200 OK"
        self.body = b""

    @property
    def query(self) -> str:
        return self.environ.get("QUERY_STRING", "")


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


class JsonResponder:
    """Serializes the handler result, or the error, onto the exchange."""

    def __init__(self) -> None:
        self.exchange: Exchange | None = None

    def dispatch(self, result: Any) -> None:
        assert self.exchange is not None
        self.exchange.body = json.dumps(result).encode()

    def error_dispatch(self, exc: Exception) -> None:
        assert self.exchange is not None
        status = exc.status if isinstance(exc, HTTPError) else 500
        self.exchange.status = f"{status} Error"
        self.exchange.body = json.dumps({"error": str(exc)}).encode()


class Timing:
    def __init__(self) -> None:
        self.started = time.monotonic()

    def middleware(self) -> None:
        self.started = time.monotonic()

    def destruct(self) -> None:
        logger.info("request took %.3fs", time.monotonic() - self.started)


class ErrorLog:
    def handle_error(self, exc: Exception) -> None:
        logger.warning("request failed: %s", exc)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

responder = JsonResponder()
pipeline = Pipeline(services=[Timing(), ErrorLog(), responder])


def current_exchange() -> Exchange:
    assert responder.exchange is not None
    return responder.exchange


pipeline.middleware(current_exchange)


def list_items(exchange: Exchange) -> list[dict[str, Any]]:
    if exchange.query == "in_stock":
        return [item for item in ITEMS.values() if item["stock"]]
    return list(ITEMS.values())


def reserve(exchange: Exchange) -> dict[str, Any]:
    item = ITEMS["lamp"]
    if not item["stock"]:
        raise HTTPError(409, "out of stock")
    item["stock"] -= 1
    return item


pipeline.get("/items", list_items)
pipeline.post("/reserve", reserve).post(lambda item: logger.info("reserved %s", item["name"]))


# ---------------------------------------------------------------------------
# WSGI entry
# ---------------------------------------------------------------------------


def application(environ: dict[str, Any], start_response: Any) -> list[bytes]:
    exchange = Exchange(environ)
    responder.exchange = exchange
    pipeline.route(environ["REQUEST_METHOD"], environ.get("PATH_INFO", "/"))
    start_response(exchange.status, [("Content-Type", "application/json")])
    return [exchange.body]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    with make_server("127.0.0.1", 8000, application) as server:
        server.serve_forever()
