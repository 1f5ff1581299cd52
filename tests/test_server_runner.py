from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

import pytest

from herald.server.runner import ServerRunner


class _FakeServer:
    def __init__(self) -> None:
        self.should_exit = False
        self.served = False

    async def serve(self) -> None:
        self.served = True


class _FakeLoop:
    def __init__(self) -> None:
        self.handlers: list = []

    def add_signal_handler(self, _sig, handler) -> None:
        self.handlers.append(handler)


@pytest.fixture
def fakes(monkeypatch):
    server = _FakeServer()
    loop = _FakeLoop()
    exits: list[int] = []

    monkeypatch.setattr("herald.server.runner.uvicorn.Config", lambda *a, **kw: object())
    monkeypatch.setattr("herald.server.runner.uvicorn.Server", lambda _cfg: server)
    monkeypatch.setattr("herald.server.runner.asyncio.get_running_loop", lambda: loop)
    monkeypatch.setattr("herald.server.runner.os._exit", exits.append)
    return SimpleNamespace(server=server, loop=loop, exits=exits)


async def test_server_runner_serves_with_signal_handlers(fakes) -> None:
    app = cast(Any, SimpleNamespace(state=SimpleNamespace()))
    runner = ServerRunner(app, host="127.0.0.1", port=8080)

    await runner.run()

    assert len(fakes.loop.handlers) == 2
    assert fakes.server.served


async def test_first_signal_requests_graceful_exit(fakes) -> None:
    runner = ServerRunner(cast(Any, object()), host="127.0.0.1", port=8080)
    await runner.run()

    fakes.loop.handlers[0]()

    assert fakes.server.should_exit
    assert fakes.exits == []


async def test_second_signal_forces_exit(fakes) -> None:
    runner = ServerRunner(cast(Any, object()), host="127.0.0.1", port=8080)
    await runner.run()

    fakes.loop.handlers[0]()
    fakes.loop.handlers[1]()

    assert fakes.exits == [1]
