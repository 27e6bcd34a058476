"""Pytest configuration and fixtures for petbot tests."""

import copy

import pytest

from petbot import logging_utils, pets
from petbot.llm import AssistantTurn, ToolCall


@pytest.fixture(autouse=True)
def empty_pet_store():
    """Every test starts with no saved pets."""
    pets.clear()
    yield
    pets.clear()


@pytest.fixture(autouse=True)
def llm_log_dir(tmp_path, monkeypatch):
    """Keep per-run audit files out of the working directory."""
    log_dir = tmp_path / "llm-logs"
    monkeypatch.setattr(logging_utils, "LOG_DIR", log_dir)
    return log_dir


class FakeBoundModel:
    """Replays scripted turns and records every message list it was sent."""

    model = "fake-model"

    def __init__(self, tools, turns):
        self.tools = list(tools)
        self._turns = list(turns)
        self.calls = []

    def invoke(self, messages):
        self.calls.append(copy.deepcopy(messages))
        if not self._turns:
            return AssistantTurn(content="done")
        return self._turns.pop(0)


class FakeChatModel:
    """Chat model double with bind_tools, like OpenAIChatModel."""

    def __init__(self, turns=()):
        self.turns = list(turns)
        self.bound = None

    def bind_tools(self, tools):
        self.bound = FakeBoundModel(tools, self.turns)
        return self.bound


def tool_turn(*calls):
    """AssistantTurn requesting the given (name, arguments) tool calls."""
    return AssistantTurn(
        content="",
        tool_calls=[ToolCall(id=f"call_{i}", name=name, arguments=args) for i, (name, args) in enumerate(calls)],
    )
