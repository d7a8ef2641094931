"""Tests for the inventory example."""

import importlib.util
import json
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest


@pytest.fixture
def example_app() -> ModuleType:
    spec = importlib.util.spec_from_file_location(
        "inventory_app", Path(__file__).parent / "app.py"
    )
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _call(app: ModuleType, method: str, path: str, query: str = "") -> tuple[str, Any]:
    captured: dict[str, str] = {}

    def start_response(status: str, headers: list[tuple[str, str]]) -> None:
        captured["status"] = status

    environ = {"REQUEST_METHOD": method, "PATH_INFO": path, "QUERY_STRING": query}
    (body,) = app.application(environ, start_response)
    return captured["status"], json.loads(body)


class TestInventory:
    def test_list_items(self, example_app: ModuleType) -> None:
        status, body = _call(example_app, "GET", "/items")
        assert status == "200 OK"
        assert [item["name"] for item in body] == ["lamp", "desk"]

    def test_query_reaches_handler(self, example_app: ModuleType) -> None:
        _, body = _call(example_app, "GET", "/items", query="in_stock")
        assert [item["name"] for item in body] == ["lamp"]

    def test_missing_route(self, example_app: ModuleType) -> None:
        status, body = _call(example_app, "GET", "/nope")
        assert status.startswith("404")
        assert "does not exist" in body["error"]

    def test_wrong_method(self, example_app: ModuleType) -> None:
        status, _ = _call(example_app, "GET", "/reserve")
        assert status.startswith("405")

    def test_reserve_until_out_of_stock(self, example_app: ModuleType) -> None:
        for _ in range(3):
            status, _ = _call(example_app, "POST", "/reserve")
            assert status == "200 OK"

        status, body = _call(example_app, "POST", "/reserve")
        assert status.startswith("409")
        assert body == {"error": "409: out of stock"}
