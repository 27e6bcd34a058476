"""Structured logging for agent runs: structlog events plus a per-run JSONL audit file.

Every run gets a trace id. The user the run acts for is bound into structlog's
context so server logs show it; it is never written to the audit file or sent
to the model.
"""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from petbot.config import LLM_LOG_DIR

if TYPE_CHECKING:
    from petbot.llm import AssistantTurn, ToolCall

# One audit file per trace_id
LOG_DIR: Path = LLM_LOG_DIR

# Tool results with these prefixes are failures reported back to the model
TOOL_FAILURE_PREFIXES = ("Error:", "Unknown tool:")

trace_id_ctx: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    return trace_id_ctx.get()


def set_trace_id(trace_id: str) -> None:
    trace_id_ctx.set(trace_id)


def add_trace_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add trace_id to every event."""
    tid = get_trace_id()
    if tid:
        event_dict["trace_id"] = tid
    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog and stdlib logging. Call once at startup."""
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_id,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=True)
            if log_level == "DEBUG"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def _preview(text: str, limit: int = 200) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def append_audit_event(trace_id: str, event: str, payload: dict[str, Any]) -> None:
    """Append one JSON line to {LOG_DIR}/{trace_id}.log. OSError is ignored; auditing never fails a run."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "event": event,
            **payload,
        }
        with open(LOG_DIR / f"{trace_id}.log", "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")
    except OSError:
        pass


class RunTrace:
    """Logs one agent run: each model turn and tool call goes to structlog and to the audit file."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        *,
        trace_id: str,
        user_id: str,
        trigger: str,
        binding: str,
        model: str,
    ):
        self.logger = logger
        self.trace_id = trace_id
        self.user_id = user_id
        self.trigger = trigger
        self.binding = binding
        self.model = model

    def __enter__(self) -> "RunTrace":
        set_trace_id(self.trace_id)
        structlog.contextvars.bind_contextvars(user_id=self.user_id, trigger=self.trigger)
        return self

    def __exit__(self, *exc_info) -> None:
        structlog.contextvars.unbind_contextvars("user_id", "trigger")

    def start(self, query: str) -> None:
        self.logger.info("agent_run_start", user_message=_preview(query), binding=self.binding, model=self.model)
        append_audit_event(
            self.trace_id, "run_start", {"trigger": self.trigger, "binding": self.binding, "model": self.model}
        )

    def llm_request(self, step: int, messages: list[dict[str, Any]]) -> None:
        self.logger.info("llm_request", step=step, message_count=len(messages))
        append_audit_event(
            self.trace_id, "llm_request", {"step": step, "model": self.model, "message_count": len(messages)}
        )

    def llm_response(self, step: int, turn: "AssistantTurn") -> None:
        names = [tc.name for tc in turn.tool_calls]
        self.logger.info(
            "llm_response",
            step=step,
            has_tool_calls=bool(names),
            tool_call_names=names,
            content_length=len(turn.content),
        )
        append_audit_event(
            self.trace_id,
            "llm_response",
            {
                "step": step,
                "model": self.model,
                "prompt_tokens": turn.usage.prompt_tokens,
                "completion_tokens": turn.usage.completion_tokens,
                "total_tokens": turn.usage.total_tokens,
                "content_length": len(turn.content),
                "tool_calls": names,
            },
        )

    def tool_call_start(self, step: int, call: "ToolCall") -> None:
        self.logger.info("tool_call_start", step=step, tool_name=call.name, arguments=call.arguments)

    def tool_call_end(self, step: int, call: "ToolCall", result: str) -> bool:
        """Log the outcome of a tool call; returns whether it succeeded."""
        success = not result.startswith(TOOL_FAILURE_PREFIXES)
        self.logger.info(
            "tool_call_end",
            step=step,
            tool_name=call.name,
            success=success,
            result_summary=_preview(result) if success else None,
            error=None if success else result,
        )
        append_audit_event(
            self.trace_id,
            "tool_call",
            {
                "step": step,
                "tool_name": call.name,
                "tool_call_id": call.id,
                "binding": self.binding,
                "success": success,
                "result_length": len(result),
            },
        )
        return success

    def end(self, steps: int, reply: str) -> None:
        self.logger.info("agent_run_end", steps=steps, final_response_length=len(reply))
        append_audit_event(self.trace_id, "run_end", {"steps": steps, "final_response_length": len(reply)})
