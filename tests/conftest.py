"""Shared fixtures: a recording stand-in for the n8n client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from core.dispatcher import Dispatcher
from core.n8n_client import N8nResponse


@dataclass
class RecordedCall:
    method: str
    path: str
    params: dict[str, Any] | None
    json: Any


class RecordingClient:
    """Records every request and replays canned responses (or raises)."""

    def __init__(self) -> None:
        self.calls: list[RecordedCall] = []
        self.responses: list[N8nResponse] = []
        self.error: Exception | None = None

    def reply(self, data: Any, status_code: int = 200) -> None:
        self.responses.append(N8nResponse(status_code=status_code, data=data))

    async def request(self, method, path, *, params=None, json=None) -> N8nResponse:
        self.calls.append(RecordedCall(method, path, params, json))
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return N8nResponse(status_code=200, data={})


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def dispatcher(client: RecordingClient) -> Dispatcher:
    return Dispatcher(client)
