"""Tests for the news client."""

import logging
from collections.abc import Callable

import httpx
import pytest

from conftest import make_entry
from vestcli.client import NewsClient
from vestcli.engine.blocks import Lead, Paragraph, Title
from vestcli.exceptions import FetchError
from vestcli.sites import Insajder, N1

RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>N1</title>
<item><title>N1 nova</title><link>https://n1info.rs/a/</link><pubDate>Mon, 06 Jan 2025 12:00:00 +0000</pubDate></item>
<item><title>N1 stara</title><link>https://n1info.rs/b/</link><pubDate>Mon, 06 Jan 2025 11:50:00 +0000</pubDate></item>
</channel></rss>
"""

INSAJDER = {
    "data": {
        "items": [
            {"title": "Δ nova", "published_at": "2025-01-06T12:05:00+00:00", "body": "<p>x</p>", "lead": ""},
            {"title": "Δ stara", "published_at": "2025-01-06T11:55:00+00:00", "body": "<p>y</p>", "lead": ""},
        ]
    }
}

ARTICLE = '<h1 class="entry-title">Naslov  članka</h1><div class="entry-content"><p>Tekst članka</p></div>'


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> NewsClient:
    return NewsClient(sites=[N1(), Insajder()], clean_urls=False, transport=httpx.MockTransport(handler=handler))


def news_handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "n1info.rs":
        return httpx.Response(status_code=200, text=RSS)
    if request.method == "POST":
        return httpx.Response(status_code=200, json=INSAJDER)
    return httpx.Response(status_code=200, text=ARTICLE)


class TestFetchEntries:
    """Test for NewsClient.fetch_entries and fetch_batches."""

    def test_sites_are_merged(self) -> None:
        """Test that entries of all sites are merged down to the common time span."""
        client = make_client(handler=news_handler)
        entries = client.fetch_entries()
        assert [entry.title for entry in entries] == ["(Δ) Δ nova", "(N1) N1 nova", "(Δ) Δ stara"]

    def test_failing_site_is_left_out(self, caplog) -> None:
        """Test that one failing site doesn't stop the refresh."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "n1info.rs":
                return httpx.Response(status_code=500)
            return news_handler(request)

        client = make_client(handler=handler)
        with caplog.at_level(logging.ERROR):
            entries = client.fetch_entries()
        assert [entry.site for entry in entries] == ["Insajder", "Insajder"]
        assert "Couldn't get articles from N1: Server returned an error: 500 Internal Server Error" in caplog.text

    def test_all_sites_failing(self) -> None:
        """Test that the refresh fails when no site answers."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        client = make_client(handler=handler)
        with pytest.raises(FetchError, match="Couldn't get any articles"):
            client.fetch_entries()

    def test_older_page(self) -> None:
        """Test that older pages are requested from each site."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return news_handler(request)

        make_client(handler=handler).fetch_entries(page=1)
        assert str(requests[0].url) == "https://n1info.rs/feed/?paged=2"
        assert b"offset:50" in requests[1].content

    def test_batches_per_site(self) -> None:
        """Test that each answering site gets its own batch, newest first."""
        batches = make_client(handler=news_handler).fetch_batches()
        assert [[entry.title for entry in batch] for batch in batches] == [
            ["(N1) N1 nova", "(N1) N1 stara"],
            ["(Δ) Δ nova", "(Δ) Δ stara"],
        ]

    def test_batches_all_empty(self) -> None:
        """Test that a page without any entries is a fetch error."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "n1info.rs":
                return httpx.Response(status_code=200, text="<rss version=\"2.0\"><channel></channel></rss>")
            return httpx.Response(status_code=200, json={"data": {"items": []}})

        with pytest.raises(FetchError, match="Couldn't get any articles"):
            make_client(handler=handler).fetch_batches()


class TestFetchBody:
    """Test for NewsClient.fetch_body."""

    def test_remote_body_is_downloaded_once(self) -> None:
        """Test that articles are parsed and kept in the cache."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return news_handler(request)

        client = make_client(handler=handler)
        entry = make_entry(minutes=1, title="(N1) Vest")
        blocks = client.fetch_body(entry=entry)
        assert blocks == [Title(text="Naslov članka"), Paragraph(text="Tekst članka")]
        assert client.fetch_body(entry=entry) == blocks
        assert len(requests) == 1
        assert str(requests[0].url) == "https://example.com/1"

    def test_fetched_body_needs_no_request(self) -> None:
        """Test that bodies that came with the feed are parsed directly."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError(f"Unexpected request to {request.url}")

        client = make_client(handler=handler)
        entry = make_entry(minutes=2, title="(Δ) Vest", site="Insajder", fetched=True)
        assert client.fetch_body(entry=entry) == [Title(text="Vest"), Lead(text="Lead"), Paragraph(text="Body")]

    def test_title_without_headline(self) -> None:
        """Test that the entry title without the site label is used when the page has no headline."""
        client = make_client(
            handler=lambda request: httpx.Response(status_code=200, text='<div class="entry-content"><p>Tekst</p></div>')
        )
        blocks = client.fetch_body(entry=make_entry(minutes=1, title="(N1) Vest"))
        assert blocks == [Title(text="Vest"), Paragraph(text="Tekst")]

    def test_http_error_status(self) -> None:
        """Test the message of an error response."""
        client = make_client(handler=lambda request: httpx.Response(status_code=404))
        with pytest.raises(FetchError, match="Server returned an error: 404 Not Found"):
            client.fetch_body(entry=make_entry(minutes=1))

    def test_connection_error(self) -> None:
        """Test the message of a failed connection."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = make_client(handler=handler)
        with pytest.raises(FetchError, match="Couldn't connect: Connection refused"):
            client.fetch_body(entry=make_entry(minutes=1))

    def test_article_without_content(self) -> None:
        """Test that an article page without content is a fetch error."""
        client = make_client(handler=lambda request: httpx.Response(status_code=200, text="<p>Moved</p>"))
        with pytest.raises(FetchError, match="No content in the HTML"):
            client.fetch_body(entry=make_entry(minutes=1))

    def test_unknown_site(self) -> None:
        """Test that an entry of an unsupported site can't be opened."""
        client = make_client(handler=news_handler)
        with pytest.raises(FetchError, match="No support for site Politika"):
            client.fetch_body(entry=make_entry(minutes=1, site="Politika"))

    def test_site_outside_configured_ones(self) -> None:
        """Test that saved entries of a site that was disabled can still be opened."""
        client = NewsClient(
            sites=[N1()], clean_urls=False, transport=httpx.MockTransport(handler=news_handler)
        )
        entry = make_entry(minutes=1, site="Insajder", fetched=True)
        assert client.fetch_body(entry=entry)[-1] == Paragraph(text="Body")
