"""Claude-based article summarizer."""

from district_ingest.data import Usage
from district_ingest.llm import DEFAULT_MODEL, create_client, response_text, response_usage
from district_ingest.text import normalize_whitespace

MAX_INPUT_CHARS = 8000

SYSTEM_PROMPT = """\
You are an expert news summarizer. Rewrite the article into a concise \
factual summary.

Rules:
- Write fresh journalistic language; never copy sentences from the article.
- No more than {max_words} words, one paragraph.
- No ellipses, emojis or filler.
- Include only the key facts.

Respond with the summary text only.\
"""


class ClaudeSummarizer:
    """Summarize articles with Claude.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        temperature: Sampling temperature.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        temperature: float = 0.35,
    ) -> None:
        self._client = create_client(api_key)
        self._model = model
        self._temperature = temperature

    async def summarize(self, text: str, *, max_words: int) -> tuple[str, Usage]:
        article = normalize_whitespace(text)[:MAX_INPUT_CHARS]
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=max(160, max_words * 3),
            temperature=self._temperature,
            system=SYSTEM_PROMPT.format(max_words=max_words),
            messages=[
                {
                    "role": "user",
                    "content": (
                        f"Summarize this news article in at most {max_words} words. "
                        f"Do not copy sentences from it.\n\nARTICLE:\n{article}"
                    ),
                }
            ],
        )
        summary = normalize_whitespace(response_text(response))
        return (summary, response_usage(self._model, response))
