"""OpenAI chat model with LangChain-style tool binding: bind_tools() returns a model that offers those tools."""
import json
from dataclasses import dataclass, field
from typing import Any

from openai import OpenAI

from petbot.config import OPENAI_API_KEY, OPENAI_MODEL
from petbot.logging_utils import get_logger
from petbot.tools.base import Tool

logger = get_logger(__name__)

Message = dict[str, Any]


@dataclass
class ToolCall:
    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class Usage:
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


@dataclass
class AssistantTurn:
    """One model reply: text content and/or tool calls."""

    content: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)

    def to_message(self) -> Message:
        """Assistant message to append to the conversation before the tool results."""
        msg: Message = {"role": "assistant", "content": self.content or None}
        if self.tool_calls:
            msg["tool_calls"] = [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {"name": tc.name, "arguments": json.dumps(tc.arguments)},
                }
                for tc in self.tool_calls
            ]
        return msg


def _as_messages(messages: str | list[Message]) -> list[Message]:
    if isinstance(messages, str):
        return [{"role": "user", "content": messages}]
    return list(messages)


def _parse_arguments(tool_name: str, raw: Any) -> dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    try:
        args = json.loads(raw) if raw else {}
    except json.JSONDecodeError:
        logger.warning("tool_call_arguments_invalid", tool_name=tool_name)
        return {}
    return args if isinstance(args, dict) else {}


class OpenAIChatModel:
    """Chat completions client. Call bind_tools() to get a model that can call tools."""

    def __init__(
        self,
        model: str = OPENAI_MODEL,
        *,
        api_key: str | None = OPENAI_API_KEY,
        client: OpenAI | None = None,
    ):
        self.model = model
        self.client = client or OpenAI(api_key=api_key)

    def bind_tools(self, tools: list[Tool]) -> "BoundChatModel":
        return BoundChatModel(self, tools)

    def invoke(self, messages: str | list[Message]) -> AssistantTurn:
        return self._complete(_as_messages(messages), tools=None)

    def _complete(self, messages: list[Message], tools: list[dict[str, Any]] | None) -> AssistantTurn:
        kwargs: dict[str, Any] = {"model": self.model, "messages": messages}
        if tools:
            kwargs["tools"] = tools
            kwargs["tool_choice"] = "auto"
        response = self.client.chat.completions.create(**kwargs)
        msg = response.choices[0].message
        usage = getattr(response, "usage", None)
        return AssistantTurn(
            content=(msg.content or "").strip(),
            tool_calls=[
                ToolCall(
                    id=tc.id,
                    name=tc.function.name,
                    arguments=_parse_arguments(tc.function.name, tc.function.arguments),
                )
                for tc in (msg.tool_calls or [])
            ],
            usage=Usage(
                prompt_tokens=getattr(usage, "prompt_tokens", None),
                completion_tokens=getattr(usage, "completion_tokens", None),
                total_tokens=getattr(usage, "total_tokens", None),
            ),
        )


class BoundChatModel:
    """An OpenAIChatModel plus the tools offered on every call. The wrapped model is left unbound."""

    def __init__(self, base: OpenAIChatModel, tools: list[Tool]):
        self.base = base
        self.tools = list(tools)

    @property
    def model(self) -> str:
        return self.base.model

    def invoke(self, messages: str | list[Message]) -> AssistantTurn:
        return self.base._complete(_as_messages(messages), tools=[t.definition for t in self.tools])
