"""Claude-based topic classifier."""

from district_ingest.data import Topic, Usage
from district_ingest.llm import (
    DEFAULT_MODEL,
    create_client,
    response_text,
    response_usage,
    strip_fences,
)

SYSTEM_PROMPT = (
    "Classify the news article into exactly one of these categories: "
    + ", ".join(t.value for t in Topic)
    + ".\nRespond with the category name only."
)


class ClaudeClassifier:
    """Label an article with a topic using Claude.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
    """

    def __init__(self, model: str = DEFAULT_MODEL, api_key: str | None = None) -> None:
        self._client = create_client(api_key)
        self._model = model

    async def classify(self, text: str) -> tuple[str, Usage]:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=20,
            temperature=0.0,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": f"NEWS:\n{text}"}],
        )
        return (strip_fences(response_text(response)), response_usage(self._model, response))
