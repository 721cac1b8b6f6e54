"""Shared fakes and page builders for tests."""

from html import escape

from district_ingest.data import DEFAULT_HEADLINE, ArticleRecord, InsertOutcome, Topic


class FakeFetcher:
    """Serve canned bodies by URL; unknown URLs fail like a 404."""

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        self.pages = dict(pages or {})
        self.calls: list[str] = []

    async def fetch(self, url: str, *, timeout: float) -> str | None:
        self.calls.append(url)
        return self.pages.get(url)


class UnavailableStore:
    """A store whose reads raise and whose inserts report an error."""

    def __init__(self) -> None:
        self.insert_calls = 0

    async def insert(self, record: ArticleRecord) -> InsertOutcome:
        self.insert_calls += 1
        return InsertOutcome.ERROR

    async def query(self, *, source_url: str | None = None, limit: int = 50) -> list[ArticleRecord]:
        raise ConnectionError("database unreachable")


DEFAULT_PARAGRAPHS = (
    "The government announced a new programme on Monday to support local farmers.",
    "Officials said the scheme would cover irrigation equipment and seed subsidies.",
    "Farmers' associations welcomed the move but asked for faster disbursement of funds.",
)


def article_html(
    title: str,
    paragraphs: tuple[str, ...] | list[str] = DEFAULT_PARAGRAPHS,
    *,
    image: str | None = None,
    published: str | None = None,
    description: str | None = None,
) -> str:
    """A minimal article page with Open Graph metadata."""
    head = [f'<meta property="og:title" content="{escape(title)}">']
    if description:
        head.append(f'<meta name="description" content="{escape(description)}">')
    if image:
        head.append(f'<meta property="og:image" content="{escape(image)}">')
    if published:
        head.append(f'<meta property="article:published_time" content="{published}">')
    body = "".join(f"<p>{escape(p)}</p>" for p in paragraphs)
    return (
        f"<html><head><title>{escape(title)} | Site</title>{''.join(head)}</head>"
        f"<body><nav><a href='/'>Home</a></nav><article><h1>{escape(title)}</h1>{body}"
        f"</article><footer>Copyright 2025</footer></body></html>"
    )


def homepage_html(links: list[str]) -> str:
    anchors = "".join(f'<li><a href="{href}">Story</a></li>' for href in links)
    return f"<html><body><ul>{anchors}</ul></body></html>"


def rss_feed(items: list[dict[str, str]]) -> str:
    """An RSS 2.0 document; each item dict may hold title, link, description, image, pubDate."""
    parts = []
    for item in items:
        fields = [f"<title>{escape(item.get('title', ''))}</title>"]
        if "link" in item:
            fields.append(f"<link>{escape(item['link'])}</link>")
        if "guid" in item:
            fields.append(f"<guid>{escape(item['guid'])}</guid>")
        if "description" in item:
            fields.append(f"<description>{escape(item['description'])}</description>")
        if "image" in item:
            fields.append(
                f'<enclosure url="{escape(item["image"])}" type="image/jpeg" length="0"/>'
            )
        if "pubDate" in item:
            fields.append(f"<pubDate>{item['pubDate']}</pubDate>")
        parts.append(f"<item>{''.join(fields)}</item>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>Feed</title><link>https://news.example</link>'
        f"{''.join(parts)}</channel></rss>"
    )


def stored_record(url: str, title: str = "Stored article") -> ArticleRecord:
    return ArticleRecord(
        title=title,
        summary="Already stored.",
        source_url=url,
        source_name="Example",
        topic=Topic.MISCELLANEOUS,
        categories=("Top Stories",),
        headline=DEFAULT_HEADLINE,
    )
