"""Claude-based headline generator."""

import json
import logging
import re

from district_ingest.data import DEFAULT_HEADLINE, Headline, Usage
from district_ingest.llm import (
    DEFAULT_MODEL,
    create_client,
    response_text,
    response_usage,
    strip_fences,
)
from district_ingest.text import strip_html

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = 2000

SYSTEM_PROMPT = """\
You are a news editor. Write a headline and a subheadline for the article.

Rules:
- Headline: 2-3 words.
- Subheadline: 2-3 words.
- Letters only: no punctuation, no emojis.

Respond ONLY with JSON (no markdown fences, no commentary):
{"headline": "...", "subheadline": "..."}\
"""

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _parse_headline(text: str) -> Headline:
    """Parse the JSON answer; missing parts fall back to the default pair."""
    match = _JSON_OBJECT.search(strip_fences(text))
    if not match:
        logger.warning("Headline response has no JSON object, using defaults")
        return DEFAULT_HEADLINE
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning("Failed to parse headline JSON, using defaults")
        return DEFAULT_HEADLINE
    if not isinstance(parsed, dict):
        return DEFAULT_HEADLINE
    return Headline(
        headline=str(parsed.get("headline") or ""),
        subheadline=str(parsed.get("subheadline") or ""),
    )


class ClaudeHeadlineGenerator:
    """Generate a short headline pair with Claude.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
    """

    def __init__(self, model: str = DEFAULT_MODEL, api_key: str | None = None) -> None:
        self._client = create_client(api_key)
        self._model = model

    async def generate(self, title: str, summary: str) -> tuple[Headline, Usage]:
        article = strip_html(f"{title}\n\n{summary}")[:MAX_INPUT_CHARS]
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=80,
            temperature=0.2,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": f"Create headline + subheadline:\n{article}"}],
        )
        return (_parse_headline(response_text(response)), response_usage(self._model, response))
