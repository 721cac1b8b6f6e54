"""Tests for feed parsing, probing and image matching."""

from helpers import rss_feed

from district_ingest.data import FeedEntry
from district_ingest.feeds import (
    FEED_PROBE_PATHS,
    feed_image_for,
    feed_probe_urls,
    looks_like_feed,
    parse_feed,
)

BASE = "https://news.example/feed"

ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Feed</title>
  <entry>
    <title>Atom story</title>
    <link rel="alternate" href="https://news.example/2025/03/atom-story"/>
    <id>urn:uuid:1</id>
    <updated>2025-03-01T10:00:00+04:00</updated>
    <summary type="html">&lt;p&gt;Short &lt;b&gt;summary&lt;/b&gt;&lt;/p&gt;</summary>
  </entry>
</feed>
"""

MEDIA_RSS = """<?xml version="1.0"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
<channel><title>Media</title>
<item>
  <title>With media content</title>
  <link>https://news.example/a-1001</link>
  <media:content url="https://cdn.example/a.jpg" medium="image"/>
</item>
<item>
  <title>With thumbnail</title>
  <link>https://news.example/b-1002</link>
  <media:thumbnail url="https://cdn.example/b.jpg"/>
</item>
</channel></rss>
"""


class TestParseFeed:
    """Tests for parse_feed."""

    def test_rss_items_in_feed_order(self) -> None:
        xml = rss_feed(
            [
                {"title": "First", "link": "https://news.example/first-101"},
                {"title": "Second", "link": "https://news.example/second-102"},
                {"title": "First again", "link": "https://news.example/first-101"},
            ]
        )
        entries = parse_feed(xml, BASE)
        assert [e.title for e in entries] == ["First", "Second", "First again"]
        assert entries[0].link == "https://news.example/first-101"

    def test_description_is_stripped_of_html(self) -> None:
        xml = rss_feed(
            [
                {
                    "title": "Story",
                    "link": "https://news.example/story-100",
                    "description": "<p>Budget <b>approved</b> today</p>",
                }
            ]
        )
        assert parse_feed(xml, BASE)[0].description == "Budget approved today"

    def test_enclosure_image_and_date(self) -> None:
        xml = rss_feed(
            [
                {
                    "title": "Story",
                    "link": "https://news.example/story-100",
                    "image": "https://cdn.example/story.jpg",
                    "pubDate": "Tue, 04 Mar 2025 08:30:00 GMT",
                }
            ]
        )
        entry = parse_feed(xml, BASE)[0]
        assert entry.image_url == "https://cdn.example/story.jpg"
        assert entry.published_at == "2025-03-04T08:30:00+00:00"

    def test_timezone_abbreviation_converted_to_utc(self) -> None:
        xml = rss_feed(
            [
                {
                    "title": "Story",
                    "link": "https://news.example/story-100",
                    "pubDate": "Tue, 04 Mar 2025 08:30:00 EST",
                }
            ]
        )
        assert parse_feed(xml, BASE)[0].published_at == "2025-03-04T13:30:00+00:00"

    def test_unparseable_date_is_none(self) -> None:
        xml = rss_feed(
            [{"title": "Story", "link": "https://news.example/s-100", "pubDate": "sometime soon"}]
        )
        assert parse_feed(xml, BASE)[0].published_at is None

    def test_relative_link_resolved_against_base(self) -> None:
        xml = rss_feed([{"title": "Relative", "link": "/2025/03/04/relative-story"}])
        entries = parse_feed(xml, "https://news.example/rss.xml")
        assert entries[0].link == "https://news.example/2025/03/04/relative-story"

    def test_guid_used_when_link_missing(self) -> None:
        xml = rss_feed([{"title": "Guid only", "guid": "https://news.example/guid-story-55"}])
        assert parse_feed(xml, BASE)[0].link == "https://news.example/guid-story-55"

    def test_entries_without_link_are_skipped(self) -> None:
        xml = rss_feed(
            [
                {"title": "No link", "guid": "not-a-url-123"},
                {"title": "Has link", "link": "https://news.example/has-link-1"},
            ]
        )
        assert [e.title for e in parse_feed(xml, BASE)] == ["Has link"]

    def test_atom_entries(self) -> None:
        entries = parse_feed(ATOM, BASE)
        assert len(entries) == 1
        assert entries[0].link == "https://news.example/2025/03/atom-story"
        assert entries[0].description == "Short summary"
        assert entries[0].published_at == "2025-03-01T06:00:00+00:00"

    def test_media_content_and_thumbnail_images(self) -> None:
        entries = parse_feed(MEDIA_RSS, BASE)
        assert entries[0].image_url == "https://cdn.example/a.jpg"
        assert entries[1].image_url == "https://cdn.example/b.jpg"

    def test_malformed_or_empty_input(self) -> None:
        assert parse_feed("", BASE) == []
        assert parse_feed(None, BASE) == []
        assert parse_feed("<html><body>Not a feed</body></html>", BASE) == []


def test_feed_probe_urls_use_well_known_paths() -> None:
    urls = feed_probe_urls("https://news.example/")
    assert len(urls) == len(FEED_PROBE_PATHS)
    assert urls[0] == "https://news.example/rss"
    assert "https://news.example/feed" in urls
    assert "https://news.example/atom.xml" in urls


def test_looks_like_feed() -> None:
    assert looks_like_feed(rss_feed([]))
    assert looks_like_feed(ATOM)
    assert not looks_like_feed("<!doctype html><html><body>Home</body></html>")
    assert not looks_like_feed(None)


class TestFeedImageFor:
    """Tests for feed_image_for."""

    entries = [
        FeedEntry(title="No image", link="https://news.example/plain-1"),
        FeedEntry(
            title="Budget",
            link="https://www.news.example/economie/budget-2025-101/",
            image_url="https://cdn.example/budget.jpg",
        ),
    ]

    def test_matches_canonical_url(self) -> None:
        assert (
            feed_image_for("https://www.news.example/economie/budget-2025-101?utm=x", self.entries)
            == "https://cdn.example/budget.jpg"
        )

    def test_matches_slug_across_sections(self) -> None:
        assert (
            feed_image_for("https://news.example/actualites/budget-2025-101", self.entries)
            == "https://cdn.example/budget.jpg"
        )

    def test_no_match(self) -> None:
        assert feed_image_for("https://news.example/other-story-5", self.entries) is None
        assert feed_image_for("https://news.example/plain-1", self.entries) is None
