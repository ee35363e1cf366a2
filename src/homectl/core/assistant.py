"""Bridge to the external conversational assistant command."""

from __future__ import annotations

import logging
import re
import subprocess

from homectl.config import AssistantConfig
from homectl.errors import ExternalToolError, ValidationError

logger = logging.getLogger(__name__)

_BANNER = re.compile(r"^🦞\s*Interactive mode.*(?:\n|$)", re.MULTILINE)
_FAREWELL = re.compile(r"\n?Goodbye!\s*$")
_PROMPT = re.compile(r"^🦞\s*", re.MULTILINE)


def clean_reply(stdout: str) -> str:
    """Strip the interactive banner, prompt glyphs and farewell line."""
    text = stdout.strip()
    text = _BANNER.sub("", text)
    text = _FAREWELL.sub("", text)
    text = _PROMPT.sub("", text)
    return text.strip("\n").strip()


def ask(message: str | None, config: AssistantConfig) -> str:
    if not message:
        raise ValidationError("message is required")

    logger.debug("Running assistant: %s", " ".join(config.command))
    try:
        completed = subprocess.run(
            config.command,
            input=f"{message}\n",
            capture_output=True,
            encoding="utf-8",
            timeout=config.timeout,
            check=True,
        )
    except subprocess.TimeoutExpired as exc:
        logger.warning("Assistant timed out after %.0fs", config.timeout)
        raise ExternalToolError(
            "assistant failed", detail=f"no reply within {config.timeout:g}s"
        ) from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or str(exc)
        logger.warning("Assistant exited with %d: %s", exc.returncode, detail)
        raise ExternalToolError("assistant failed", detail=detail) from exc
    except OSError as exc:
        logger.warning("Could not start assistant: %s", exc)
        raise ExternalToolError("assistant failed", detail=str(exc)) from exc

    return clean_reply(completed.stdout)
