"""Deterministic keyword-based topic classifier."""

import re

from district_ingest.data import Topic, Usage

TOPIC_KEYWORDS: dict[Topic, re.Pattern[str]] = {
    topic: re.compile(rf"\b({words})\b", re.IGNORECASE)
    for topic, words in {
        Topic.BUSINESS: r"business|company|companies|market|economy|economic|trade|"
        r"investment|bank|profit|revenue|export|industry",
        Topic.POLITICS: r"minister|government|parliament|election|party|opposition|"
        r"prime minister|president|policy|mp|cabinet|vote",
        Topic.SPORTS: r"football|match|tournament|championship|athlete|cricket|"
        r"league|goal|team|olympic|coach",
        Topic.TECHNOLOGY: r"technology|software|digital|internet|cyber|smartphone|"
        r"artificial intelligence|ai|app|data",
        Topic.STARTUPS: r"startup|start-up|founder|funding round|venture capital|incubator",
        Topic.ENTERTAINMENT: r"film|movie|music|concert|festival|celebrity|singer|actor|album",
        Topic.INTERNATIONAL: r"united nations|foreign|international|abroad|embassy|"
        r"diplomatic|summit|india|china|france|africa",
        Topic.AUTOMOBILE: r"car|cars|vehicle|vehicles|motor|automobile|electric vehicle|driver",
        Topic.SCIENCE: r"science|scientist|research|study|space|climate|species|laboratory",
        Topic.TRAVEL: r"tourism|tourist|travel|hotel|airline|flight|visitors|resort",
        Topic.FASHION: r"fashion|designer|clothing|runway|style|collection",
        Topic.EDUCATION: r"school|student|students|education|university|teacher|exam|college",
        Topic.HEALTH_AND_FITNESS: r"health|hospital|doctor|disease|patients|medical|"
        r"vaccine|fitness|wellness",
    }.items()
}


class KeywordClassifier:
    """Pick the topic whose keywords occur most often in the text.

    Ties go to the topic listed first in the vocabulary; text with no
    keyword hits is Miscellaneous. Makes no network calls.
    """

    async def classify(self, text: str) -> tuple[str, Usage]:
        best = Topic.MISCELLANEOUS
        best_score = 0
        for topic, pattern in TOPIC_KEYWORDS.items():
            score = len(pattern.findall(text))
            if score > best_score:
                best, best_score = topic, score
        return (best.value, Usage())
