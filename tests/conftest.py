from __future__ import annotations

from typing import Callable

import httpx
import pytest

from adapters.http_client import HttpDispatcher
from core.services.client import TonApiClient


class Recorder:
    """Captura cada request y responde con `handler` (por defecto 200 + JSON)."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, json={"ok": True, "result": {}}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def client(recorder: Recorder) -> TonApiClient:
    return TonApiClient(HttpDispatcher(transport=recorder.transport))


@pytest.fixture()
def make_client() -> Callable[..., tuple[TonApiClient, Recorder]]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> tuple[TonApiClient, Recorder]:
        rec = Recorder(handler)
        return TonApiClient(HttpDispatcher(transport=rec.transport)), rec

    return _make
