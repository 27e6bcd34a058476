"""Gateway: all messages go through here; build the chat model and run the agent for the calling user."""
from petbot.agent import run_with_tools
from petbot.config import OPENAI_MODEL
from petbot.llm import OpenAIChatModel
from petbot.logging_utils import get_logger

logger = get_logger(__name__)


def handle_message(message: str, *, user_id: str, trigger: str = "unknown") -> str:
    """Handle an incoming message from user_id. Returns the reply text."""
    llm = OpenAIChatModel(OPENAI_MODEL)
    return run_with_tools(user_id, message, llm, trigger=trigger)
