"""Tool protocol: name, description, JSON schema for parameters, and callable."""
import copy
from dataclasses import dataclass, field
from typing import Any, Callable

# OpenAI tool definition shape: we use "function" type with name, description, parameters (JSON Schema)
ToolDefinition = dict[str, Any]  # {"type": "function", "function": {"name", "description", "parameters"}}


@dataclass(frozen=True)
class Tool:
    """A callable the model may invoke.

    parameters is the JSON Schema the model sees. injected lists parameters the
    callable also takes but which are filled from runtime values at execution
    time; they never appear in parameters, so the model cannot see or set them.
    """

    name: str
    description: str
    parameters: dict[str, Any]
    fn: Callable[..., Any]
    injected: tuple[str, ...] = field(default=())

    @property
    def definition(self) -> ToolDefinition:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": copy.deepcopy(self.parameters),
            },
        }


def make_tool(
    name: str,
    description: str,
    parameters: dict[str, Any],
    callable_fn: Callable[..., Any],
    *,
    injected: tuple[str, ...] = (),
) -> Tool:
    """Build a Tool.
    parameters: JSON Schema for the function (e.g. {"type": "object", "properties": {...}, "required": [...]}).
    callable_fn: receives kwargs matching the schema plus any injected values.
    """
    visible = set(parameters.get("properties", {}))
    leaked = visible.intersection(injected)
    if leaked:
        raise ValueError(f"Injected parameters must not be in the model-visible schema: {sorted(leaked)}")
    return Tool(
        name=name,
        description=description,
        parameters=copy.deepcopy(parameters),
        fn=callable_fn,
        injected=tuple(injected),
    )
