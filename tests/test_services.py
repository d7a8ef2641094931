"""Tests for sentier.services: capability protocols and ServiceRegistry."""

from dataclasses import dataclass
from typing import Any

import pytest

from sentier.services import (
    Capability,
    Destructor,
    Dispatch,
    ErrorDispatch,
    ErrorHandler,
    Middleware,
    ServiceRegistry,
    capabilities,
)

# ---------------------------------------------------------------------------
# Test services
# ---------------------------------------------------------------------------


class Recorder:
    """Shared log for services to write into."""

    def __init__(self) -> None:
        self.log: list[str] = []


class Timing:
    def __init__(self, rec: Recorder, name: str = "timing") -> None:
        self.rec = rec
        self.name = name

    def middleware(self) -> None:
        self.rec.log.append(f"{self.name}:mw")

    def dispatch(self, result: Any) -> None:
        self.rec.log.append(f"{self.name}:dispatch:{result}")


class Responder:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec

    def dispatch(self, result: Any) -> None:
        self.rec.log.append(f"responder:{result}")

    def error_dispatch(self, exc: Exception) -> None:
        self.rec.log.append(f"responder:error:{exc}")


class Reporter:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec

    def handle_error(self, exc: Exception) -> None:
        self.rec.log.append(f"reporter:{exc}")


class Closer:
    def __init__(self, rec: Recorder) -> None:
        self.rec = rec

    def destruct(self) -> None:
        self.rec.log.append("closer")


class Everything(Timing, Responder, Reporter, Closer):
    def __init__(self, rec: Recorder) -> None:
        Timing.__init__(self, rec, "all")


class Inert:
    pass


@dataclass
class Settings:
    """Plain data whose field names collide with phase methods."""

    middleware: bool = True
    destruct: str = "never"


@pytest.fixture
def rec() -> Recorder:
    return Recorder()


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class TestProtocols:
    def test_single_capability(self, rec: Recorder) -> None:
        assert isinstance(Closer(rec), Destructor)
        assert not isinstance(Closer(rec), Middleware)

    def test_multiple_capabilities(self, rec: Recorder) -> None:
        svc = Timing(rec)
        assert isinstance(svc, Middleware)
        assert isinstance(svc, Dispatch)
        assert not isinstance(svc, ErrorHandler)
        assert not isinstance(svc, ErrorDispatch)

    def test_capabilities(self, rec: Recorder) -> None:
        assert capabilities(Responder(rec)) == frozenset(
            {Capability.DISPATCH, Capability.ERROR_DISPATCH}
        )

    def test_all_capabilities(self, rec: Recorder) -> None:
        assert capabilities(Everything(rec)) == frozenset(Capability)

    def test_no_capabilities(self) -> None:
        assert capabilities(Inert()) == frozenset()

    def test_non_callable_attribute_is_not_a_capability(self) -> None:
        assert not Capability.MIDDLEWARE.satisfied_by(Settings())
        assert capabilities(Settings()) == frozenset()

    def test_capability_protocol(self) -> None:
        assert Capability.ERROR_HANDLER.protocol is ErrorHandler
        assert Capability.ERROR_HANDLER.value == "handle_error"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_registration_order(self, rec: Recorder) -> None:
        first, second = Timing(rec, "a"), Timing(rec, "b")
        registry = ServiceRegistry([first, second])
        assert list(registry) == [first, second]
        assert len(registry) == 2

    def test_inert_service_accepted(self) -> None:
        registry = ServiceRegistry()
        registry.add(Inert())
        registry.middleware()
        registry.destruct()
        assert len(registry) == 1

    def test_non_callable_attribute_skipped(self, rec: Recorder) -> None:
        registry = ServiceRegistry([Settings(), Timing(rec)])
        registry.middleware()
        registry.destruct()
        assert rec.log == ["timing:mw"]
        assert registry.bound(Capability.DESTRUCTOR) == []

    def test_middleware_phase(self, rec: Recorder) -> None:
        registry = ServiceRegistry(
            [Timing(rec, "a"), Closer(rec), Timing(rec, "b")]
        )
        registry.middleware()
        assert rec.log == ["a:mw", "b:mw"]

    def test_dispatch_phase(self, rec: Recorder) -> None:
        registry = ServiceRegistry([Responder(rec), Reporter(rec), Timing(rec)])
        registry.dispatch(42)
        assert rec.log == ["responder:42", "timing:dispatch:42"]

    def test_error_phases(self, rec: Recorder) -> None:
        registry = ServiceRegistry([Responder(rec), Reporter(rec)])
        exc = ValueError("bad")
        registry.handle_error(exc)
        registry.error_dispatch(exc)
        assert rec.log == ["reporter:bad", "responder:error:bad"]

    def test_destruct_phase(self, rec: Recorder) -> None:
        registry = ServiceRegistry([Closer(rec), Timing(rec), Closer(rec)])
        registry.destruct()
        assert rec.log == ["closer", "closer"]

    def test_multi_capability_invoked_once_per_phase(self, rec: Recorder) -> None:
        registry = ServiceRegistry([Everything(rec)])
        registry.middleware()
        registry.dispatch("r")
        assert rec.log == ["all:mw", "all:dispatch:r"]

    def test_implementing(self, rec: Recorder) -> None:
        closer = Closer(rec)
        everything = Everything(rec)
        registry = ServiceRegistry([Timing(rec), closer, everything])
        assert registry.implementing(Capability.DESTRUCTOR) == [closer, everything]

    def test_bound(self, rec: Recorder) -> None:
        closer = Closer(rec)
        registry = ServiceRegistry([closer])
        (method,) = registry.bound(Capability.DESTRUCTOR)
        method()
        assert rec.log == ["closer"]

    def test_phase_failure_propagates(self, rec: Recorder) -> None:
        class Broken:
            def middleware(self) -> None:
                raise RuntimeError("broken")

        registry = ServiceRegistry([Broken(), Timing(rec)])
        with pytest.raises(RuntimeError, match="broken"):
            registry.middleware()
        assert rec.log == []
