from __future__ import annotations

import subprocess
from types import SimpleNamespace

import pytest

from homectl.config import AssistantConfig
from homectl.core import assistant
from homectl.errors import ExternalToolError, ValidationError


def test_clean_reply_strips_banner_and_farewell():
    stdout = "🦞 Interactive mode (Ctrl+C to exit)\n🦞 Turned on the living room light.\nGoodbye!\n"

    assert assistant.clean_reply(stdout) == "Turned on the living room light."


def test_clean_reply_keeps_plain_text():
    assert assistant.clean_reply("\n\nHello there\n") == "Hello there"


def test_ask_passes_message_on_stdin(monkeypatch: pytest.MonkeyPatch):
    calls: list[dict[str, object]] = []

    def _fake_run(command, **kwargs):
        calls.append({"command": command, **kwargs})
        return SimpleNamespace(stdout="🦞 Sure.\nGoodbye!", returncode=0)

    monkeypatch.setattr(assistant.subprocess, "run", _fake_run)
    config = AssistantConfig(command=["bot", "agent"], timeout=5)

    reply = assistant.ask("turn on the tv", config)

    assert reply == "Sure."
    assert calls[0]["command"] == ["bot", "agent"]
    assert calls[0]["input"] == "turn on the tv\n"
    assert calls[0]["timeout"] == 5


def test_ask_requires_message():
    with pytest.raises(ValidationError):
        assistant.ask("", AssistantConfig())


def test_nonzero_exit_carries_stderr(monkeypatch: pytest.MonkeyPatch):
    def _fake_run(command, **kwargs):
        raise subprocess.CalledProcessError(2, command, output="", stderr="model offline\n")

    monkeypatch.setattr(assistant.subprocess, "run", _fake_run)

    with pytest.raises(ExternalToolError) as info:
        assistant.ask("hi", AssistantConfig())

    assert info.value.detail == "model offline"
    assert info.value.status_code == 500


def test_timeout_is_an_external_tool_error(monkeypatch: pytest.MonkeyPatch):
    def _fake_run(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr(assistant.subprocess, "run", _fake_run)

    with pytest.raises(ExternalToolError) as info:
        assistant.ask("hi", AssistantConfig(timeout=1.5))

    assert "1.5s" in info.value.detail


def test_missing_executable(home, monkeypatch: pytest.MonkeyPatch):
    def _fake_run(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr(assistant.subprocess, "run", _fake_run)

    with pytest.raises(ExternalToolError):
        home.chat("hello")
