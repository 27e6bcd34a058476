"""Per-request registry: holds this run's tools and runtime values, executes by name."""
import json
from collections.abc import Mapping
from typing import Any

from petbot.logging_utils import get_logger
from petbot.tools.base import Tool, ToolDefinition

logger = get_logger(__name__)


class ToolRegistry:
    """Tools bound for a single request.

    runtime holds values known only to the caller (e.g. {"user_id": ...}).
    They are handed to tools that declare them as injected and are never
    taken from the model's arguments.
    """

    def __init__(self, tools: list[Tool], *, runtime: Mapping[str, Any] | None = None):
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool
        self._runtime = dict(runtime or {})

    def names(self) -> list[str]:
        return list(self._tools)

    def tools(self) -> list[Tool]:
        return list(self._tools.values())

    def get_openai_tools(self) -> list[ToolDefinition]:
        """Return tool definitions in registration order."""
        return [tool.definition for tool in self._tools.values()]

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """Execute a tool by name with the given arguments. Returns a string result for the LLM."""
        tool = self._tools.get(tool_name)
        if tool is None:
            return f"Unknown tool: {tool_name}"
        kwargs = {k: v for k, v in (arguments or {}).items() if k not in tool.injected}
        overridden = sorted(set(arguments or {}).intersection(tool.injected))
        if overridden:
            logger.warning("tool_injected_args_ignored", tool_name=tool_name, arguments=overridden)
        for name in tool.injected:
            if name not in self._runtime:
                return f"Error: missing runtime value '{name}'"
            kwargs[name] = self._runtime[name]
        try:
            result = tool.fn(**kwargs)
        except Exception as e:
            logger.warning("tool_execution_error", tool_name=tool_name, error=str(e))
            return f"Error: {e!s}"
        return result if isinstance(result, str) else json.dumps(result)
