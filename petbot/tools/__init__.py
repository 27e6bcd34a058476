"""Tools available to the agent. Each tool has a name, schema, and callable; user binding happens per request."""
from petbot.tools.base import Tool, make_tool
from petbot.tools.pets import INJECTED_PET_TOOLS, generate_tools_for_user
from petbot.tools.registry import ToolRegistry

__all__ = ["INJECTED_PET_TOOLS", "Tool", "ToolRegistry", "generate_tools_for_user", "make_tool"]
