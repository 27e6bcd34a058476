"""Tests for the CLI and Telegram triggers; the gateway is patched out."""

import asyncio
import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from telegram.error import NetworkError

from petbot.triggers import cli, telegram


def test_parse_args_default_user(monkeypatch):
    monkeypatch.setattr(cli, "CLI_USER_ID", "me")
    assert cli.parse_args(["list", "my", "pets"]) == ("me", "list my pets")


@pytest.mark.parametrize("argv", [["--user", "brace", "hi", "there"], ["hi", "--user=brace", "there"]])
def test_parse_args_user_flag(argv):
    assert cli.parse_args(argv) == ("brace", "hi there")


def test_run_cli_prints_reply(monkeypatch, capsys):
    seen = {}

    def fake_handle(message, *, user_id, trigger):
        seen.update(message=message, user_id=user_id, trigger=trigger)
        return "You like cats."

    monkeypatch.setattr(cli, "handle_message", fake_handle)
    monkeypatch.setattr(sys, "argv", ["main.py", "chat", "--user", "brace", "what", "pets?"])
    cli.run_cli()

    assert capsys.readouterr().out.strip() == "You like cats."
    assert seen == {"message": "what pets?", "user_id": "brace", "trigger": "cli"}


def test_run_cli_empty_message_exits(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["main.py", "chat"])
    monkeypatch.setattr(sys, "stdin", SimpleNamespace(readline=lambda: ""))
    with pytest.raises(SystemExit) as exc:
        cli.run_cli()
    assert exc.value.code == 1


def test_run_cli_reports_agent_errors(monkeypatch, capsys):
    def failing(message, *, user_id, trigger):
        raise RuntimeError("model unavailable")

    monkeypatch.setattr(cli, "handle_message", failing)
    monkeypatch.setattr(sys, "argv", ["main.py", "chat", "hello"])
    with pytest.raises(SystemExit) as exc:
        cli.run_cli()

    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert "Error: model unavailable" in captured.err


def _update(user_id, text="hi"):
    message = SimpleNamespace(text=text, reply_text=AsyncMock())
    return SimpleNamespace(message=message, effective_user=SimpleNamespace(id=user_id))


def test_telegram_uses_sender_id(monkeypatch):
    seen = {}

    def fake_handle(message, *, user_id, trigger):
        seen.update(message=message, user_id=user_id, trigger=trigger)
        return "Saved."

    monkeypatch.setattr(telegram, "handle_message", fake_handle)
    monkeypatch.setattr(telegram, "TELEGRAM_ALLOWED_USER_IDS", frozenset())
    update = _update(1234, " I like cats ")

    asyncio.run(telegram.handle_telegram_message(update, None))

    assert seen == {"message": "I like cats", "user_id": "1234", "trigger": "telegram"}
    update.message.reply_text.assert_awaited_once_with("Saved.")


def test_telegram_rejects_unlisted_user(monkeypatch):
    monkeypatch.setattr(telegram, "TELEGRAM_ALLOWED_USER_IDS", frozenset({"1"}))
    monkeypatch.setattr(telegram, "handle_message", lambda *a, **k: pytest.fail("agent should not run"))
    update = _update(2)

    asyncio.run(telegram.handle_telegram_message(update, None))

    update.message.reply_text.assert_awaited_once_with("Unauthorized.")


def test_telegram_reports_errors(monkeypatch):
    def failing(*args, **kwargs):
        raise RuntimeError("model unavailable")

    monkeypatch.setattr(telegram, "handle_message", failing)
    monkeypatch.setattr(telegram, "TELEGRAM_ALLOWED_USER_IDS", frozenset())
    update = _update(1)

    asyncio.run(telegram.handle_telegram_message(update, None))

    update.message.reply_text.assert_awaited_once_with("Something went wrong: model unavailable")


def test_check_connection_gives_up(monkeypatch):
    monkeypatch.setattr(telegram, "STARTUP_RETRY_DELAY_S", 0)
    app = SimpleNamespace(bot=SimpleNamespace(get_me=AsyncMock(side_effect=NetworkError("down"))))
    with pytest.raises(RuntimeError, match="Cannot reach Telegram"):
        asyncio.run(telegram.check_connection(app))
    assert app.bot.get_me.await_count == telegram.MAX_STARTUP_RETRIES
