"""CLI trigger: read message from arg or stdin, run gateway, print reply."""
import sys

from petbot.config import CLI_USER_ID
from petbot.gateway import handle_message
from petbot.logging_utils import get_logger, get_trace_id

logger = get_logger(__name__)

USAGE = 'Usage: python main.py chat [--user ID] "your message" or echo "message" | python main.py chat [--user ID]'


def parse_args(argv: list[str]) -> tuple[str, str]:
    """Split the arguments after 'chat' into (user_id, message). --user ID may appear anywhere."""
    user_id = CLI_USER_ID
    words: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--user":
            user_id = next(args, "") or user_id
        elif arg.startswith("--user="):
            user_id = arg.split("=", 1)[1] or user_id
        else:
            words.append(arg)
    return user_id, " ".join(words)


def run_cli() -> None:
    """Entry for CLI: message from argv (after 'chat') or stdin, then run the agent and print the result."""
    # When invoked as "python main.py chat <message>", argv is [main.py, chat, ...message]
    user_id, message = parse_args(sys.argv[2:])
    if not message:
        print("Enter your message:")
        message = (sys.stdin.readline() or "").strip()
    if not message:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    try:
        reply = handle_message(message, user_id=user_id, trigger="cli")
    except Exception as e:
        logger.exception("cli_handler_error")
        print(f"Error: {e!s}", file=sys.stderr)
        sys.exit(1)
    print(reply)
    trace_id = get_trace_id()
    if trace_id:
        print(f"[trace_id={trace_id}]", file=sys.stderr)
