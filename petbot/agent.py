"""ReAct-style agent loop over per-user tools, with structured logging."""
import uuid
from typing import Any

from petbot.config import AGENT_MAX_STEPS, TOOL_BINDING, TOOL_BINDING_MODES
from petbot.llm import Message, ToolCall
from petbot.logging_utils import RunTrace, get_logger
from petbot.tools import INJECTED_PET_TOOLS, ToolRegistry, generate_tools_for_user

SYSTEM_PROMPT = """You are a friendly assistant that remembers the user's favorite pets. Use your tools to save, list, or forget them when the user asks.

The tools already know who the user is; never ask the user for an id. After calling a tool, summarize the result for the user in a short, friendly message."""

logger = get_logger(__name__)


def build_registry(user_id: str, binding: str) -> ToolRegistry:
    """Tools for this request, bound to user_id either by closure or by injection."""
    if binding == "closure":
        return ToolRegistry(generate_tools_for_user(user_id))
    if binding == "injected":
        return ToolRegistry(INJECTED_PET_TOOLS, runtime={"user_id": user_id})
    raise ValueError(f"Unknown tool binding {binding!r}; expected one of {', '.join(TOOL_BINDING_MODES)}")


def invoke_tools(
    tool_calls: list[ToolCall],
    registry: ToolRegistry,
    *,
    step: int = 0,
    trace: RunTrace | None = None,
) -> list[Message]:
    """Run each tool call through the registry; return the role=tool messages in call order."""
    results: list[Message] = []
    for tc in tool_calls:
        if trace:
            trace.tool_call_start(step, tc)
        result = registry.execute(tc.name, tc.arguments)
        if trace:
            trace.tool_call_end(step, tc, result)
        results.append({"role": "tool", "tool_call_id": tc.id, "content": result})
    return results


def run_with_tools(
    user_id: str,
    query: str,
    llm: Any,
    *,
    trigger: str = "unknown",
    binding: str | None = None,
) -> str:
    """Answer query on behalf of user_id. Returns the final text reply.
    llm: any chat model with bind_tools(tools) returning an object with invoke(messages).
    The user id reaches the tools only through binding; it is never put in a message to the model.
    trigger: 'cli' | 'telegram' | 'unknown' for logging.
    """
    if not callable(getattr(llm, "bind_tools", None)):
        raise ValueError("LLM must support tool binding (bind_tools)")
    binding = binding or TOOL_BINDING
    registry = build_registry(user_id, binding)
    bound = llm.bind_tools(registry.tools())
    trace = RunTrace(
        logger,
        trace_id=str(uuid.uuid4()),
        user_id=user_id,
        trigger=trigger,
        binding=binding,
        model=getattr(bound, "model", None) or getattr(llm, "model", "unknown"),
    )

    with trace:
        trace.start(query)
        messages: list[Message] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": query},
        ]
        step = 0
        final_content = ""

        while step < AGENT_MAX_STEPS:
            step += 1
            trace.llm_request(step, messages)
            turn = bound.invoke(messages)
            trace.llm_response(step, turn)

            if not turn.tool_calls:
                final_content = turn.content or "I don't have a response for that."
                break

            messages.append(turn.to_message())
            messages.extend(invoke_tools(turn.tool_calls, registry, step=step, trace=trace))
        else:
            final_content = "I hit the step limit. Please try a simpler request."

        trace.end(step, final_content)
        return final_content
