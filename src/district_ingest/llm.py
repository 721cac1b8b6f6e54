"""Helpers shared by the Claude-backed capabilities."""

import os
from typing import Any

import anthropic

from district_ingest.data import APICallUsage, Usage

DEFAULT_MODEL = "claude-haiku-4-5-20251001"


def create_client(api_key: str | None = None) -> anthropic.AsyncAnthropic:
    """Build an Anthropic client; the key defaults to the CLAUDE_API_KEY env var."""
    resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
    return anthropic.AsyncAnthropic(api_key=resolved_key)


def response_text(response: Any) -> str:
    """Concatenate the text blocks of a Messages API response."""
    text = ""
    for block in response.content:
        if hasattr(block, "text"):
            text += block.text
    return text


def response_usage(model: str, response: Any) -> Usage:
    """Token usage of a single Messages API response."""
    return Usage(
        api_calls=[
            APICallUsage(
                model=model,
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
                cache_creation_input_tokens=getattr(
                    response.usage, "cache_creation_input_tokens", 0
                )
                or 0,
                cache_read_input_tokens=getattr(response.usage, "cache_read_input_tokens", 0)
                or 0,
            ),
        ],
    )


def strip_fences(text: str) -> str:
    """Remove markdown code fences around a model answer."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned.strip()
