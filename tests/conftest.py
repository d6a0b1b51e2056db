import json
from pathlib import Path
from typing import Any, Callable

import pytest

from callsy.core.transport import Transport
from callsy.schemas.request import OutboundRequest
from callsy.schemas.response import InboundResponse


class FakeTransport(Transport):
    """Transport that records what it is asked to send and answers with a canned response."""

    def __init__(self, response: InboundResponse | None = None, error: Exception | None = None):
        self.response = response or InboundResponse(status_code=200)
        self.error = error
        self.sent: list[OutboundRequest] = []

    def send(self, request: OutboundRequest) -> InboundResponse:
        self.sent.append(request)
        if self.error is not None:
            raise self.error
        return self.response


class ScriptedAnswers:
    """Line source replaying fixed answers to the overwrite prompt."""

    def __init__(self, *answers: str | BaseException):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def write_request(tmp_path: Path) -> Callable[..., Path]:
    def _write(document: dict[str, Any] | str, name: str = "request.json") -> Path:
        path = tmp_path / name
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_transport() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture
def answers() -> type[ScriptedAnswers]:
    return ScriptedAnswers
