"""Topic vocabulary mapping and category tags."""

import re

from district_ingest.data import Topic

# Checked in order against a lowercased classifier answer.
TOPIC_SYNONYMS: tuple[tuple[re.Pattern[str], Topic], ...] = (
    (re.compile(r"polit|government|election"), Topic.POLITICS),
    (re.compile(r"sport|football|cricket"), Topic.SPORTS),
    (re.compile(r"tech|digital|\bai\b"), Topic.TECHNOLOGY),
    (re.compile(r"start"), Topic.STARTUPS),
    (re.compile(r"enter|celebr|movie|film|music"), Topic.ENTERTAINMENT),
    (re.compile(r"inter|world|global|foreign"), Topic.INTERNATIONAL),
    (re.compile(r"auto|\bcars?\b|motor"), Topic.AUTOMOBILE),
    (re.compile(r"sci|research|space"), Topic.SCIENCE),
    (re.compile(r"travel|touris"), Topic.TRAVEL),
    (re.compile(r"fashion|style"), Topic.FASHION),
    (re.compile(r"educat|school|universit"), Topic.EDUCATION),
    (re.compile(r"health|fitness|medic"), Topic.HEALTH_AND_FITNESS),
    (re.compile(r"business|econom|financ|market"), Topic.BUSINESS),
)

TOP_STORIES = "Top Stories"
FINANCE = "Finance"
GOOD_NEWS = "Good News"

FINANCE_KEYWORDS = re.compile(
    r"\b(finance|financial|bank|banking|stock|stocks|shares|investment|investor|"
    r"budget|inflation|interest rate|economy|economic|gdp|rupee|revenue|profit)\b",
    re.IGNORECASE,
)

GOOD_NEWS_KEYWORDS = re.compile(
    r"\b(win|wins|won|award|awarded|success|successful|growth|improved|"
    r"celebrates|record high)\b",
    re.IGNORECASE,
)


def map_to_category(raw: str | None) -> Topic:
    """Map a free-text classifier answer onto the closed topic vocabulary.

    Tries an exact case-insensitive match, then a vocabulary label contained
    in the answer, then ``TOPIC_SYNONYMS``. Anything else is Miscellaneous.
    """
    if not raw:
        return Topic.MISCELLANEOUS
    answer = raw.strip().lower()
    for topic in Topic:
        if topic.value.lower() == answer:
            return topic
    for topic in Topic:
        if topic.value.lower() in answer:
            return topic
    for pattern, topic in TOPIC_SYNONYMS:
        if pattern.search(answer):
            return topic
    return Topic.MISCELLANEOUS


def category_tags(body_text: str, topic: Topic) -> tuple[str, ...]:
    """Deterministic display tags for an article.

    Always "Top Stories"; "Finance" for business topics or finance vocabulary;
    "Good News" when the body reads as positive news.
    """
    tags = [TOP_STORIES]
    if topic in (Topic.BUSINESS, Topic.STARTUPS) or FINANCE_KEYWORDS.search(body_text):
        tags.append(FINANCE)
    if GOOD_NEWS_KEYWORDS.search(body_text):
        tags.append(GOOD_NEWS)
    return tuple(tags)
