"""Tests for feed entries and the feed."""

import json
from datetime import timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from conftest import BASE_TIME, make_entry
from vestcli.engine.blocks import Boxed
from vestcli.models import Feed, FeedEntry, FetchedBody, RemoteBody, merge_site_batches

minutes = st.sets(st.integers(min_value=-10_000, max_value=10_000), max_size=30)


class TestFeedEntry:
    """Test for FeedEntry."""

    def test_to_block(self) -> None:
        """Test that an entry is shown as a box with its title and time."""
        entry = make_entry(minutes=30, title="(N1) Vest")
        assert entry.to_block() == Boxed(paragraphs=("(N1) Vest", "06.01.2025. 12:30"))
        assert entry.to_block(date_format="%H:%M") == Boxed(paragraphs=("(N1) Vest", "12:30"))

    def test_dict_round_trip(self) -> None:
        """Test that both kinds of body survive serialization."""
        for entry in (make_entry(minutes=1), make_entry(minutes=2, site="Insajder", fetched=True)):
            assert FeedEntry.from_dict(data=json.loads(json.dumps(entry.to_dict()))) == entry

    def test_from_dict_rejects_bad_data(self) -> None:
        """Test that broken entries raise ValueError."""
        with pytest.raises(ValueError):
            FeedEntry.from_dict(data={"title": "x"})
        data = make_entry(minutes=1).to_dict()
        data["body"] = {"type": "carrier pigeon"}
        with pytest.raises(ValueError, match="Unknown body type"):
            FeedEntry.from_dict(data=data)
        data = make_entry(minutes=1).to_dict()
        data["published"] = "yesterday"
        with pytest.raises(ValueError):
            FeedEntry.from_dict(data=data)


class TestMergeSiteBatches:
    """Test for merge_site_batches."""

    def test_entries_older_than_cutoff_are_dropped(self) -> None:
        """Test that the result only spans the time every site covers."""
        site_a = [make_entry(minutes=60), make_entry(minutes=0), make_entry(minutes=-60)]
        site_b = [make_entry(minutes=30, site="Danas"), make_entry(minutes=10, site="Danas")]
        merged = merge_site_batches(batches=[site_a, site_b])
        assert [entry.published for entry in merged] == [
            BASE_TIME + timedelta(minutes=60),
            BASE_TIME + timedelta(minutes=30),
            BASE_TIME + timedelta(minutes=10),
        ]

    def test_empty_batches_are_ignored(self) -> None:
        """Test that a site without entries doesn't empty the feed."""
        assert merge_site_batches(batches=[]) == []
        assert merge_site_batches(batches=[[], [make_entry(minutes=1)]]) == [make_entry(minutes=1)]

    def test_duplicates_are_dropped(self) -> None:
        """Test that the same entry from two pages is kept once."""
        assert merge_site_batches(batches=[[make_entry(minutes=1), make_entry(minutes=1)]]) == [make_entry(minutes=1)]

    def test_held_back_entries(self) -> None:
        """Test that the entries below the cutoff are handed back newest first."""
        site_a = [make_entry(minutes=100), make_entry(minutes=80), make_entry(minutes=90)]
        site_b = [make_entry(minutes=99, site="Danas"), make_entry(minutes=95, site="Danas")]
        held_back: list[FeedEntry] = []
        merged = merge_site_batches(batches=[site_a, site_b], held_back=held_back)
        assert [entry.title for entry in merged] == ["Entry 100", "Entry 99", "Entry 95"]
        assert held_back == [make_entry(minutes=90), make_entry(minutes=80)]


class TestFeed:
    """Test for Feed."""

    def test_entries_are_sorted_newest_first(self) -> None:
        """Test that the feed orders its entries."""
        feed = Feed(entries=[make_entry(minutes=1), make_entry(minutes=3), make_entry(minutes=2)])
        assert [entry.title for entry in feed.entries] == ["Entry 3", "Entry 2", "Entry 1"]
        assert feed.newest == make_entry(minutes=3)
        assert feed.oldest == make_entry(minutes=1)
        assert len(feed) == 3
        assert feed[1] == make_entry(minutes=2)

    def test_empty_feed(self) -> None:
        """Test a feed without entries."""
        feed = Feed(entries=[])
        assert feed.newest is None
        assert feed.oldest is None
        assert feed.merge_new(batch=[make_entry(minutes=1)]) == [make_entry(minutes=1)]

    def test_merge_new_stops_at_known_entries(self) -> None:
        """Test that only entries newer than the newest one are added."""
        feed = Feed(entries=[make_entry(minutes=0), make_entry(minutes=-5)])
        batch = [make_entry(minutes=0), make_entry(minutes=20), make_entry(minutes=-10), make_entry(minutes=10)]
        assert feed.merge_new(batch=batch) == [make_entry(minutes=20), make_entry(minutes=10)]
        assert [entry.title for entry in feed.entries] == ["Entry 20", "Entry 10", "Entry 0", "Entry -5"]

    def test_extend_old(self) -> None:
        """Test that older entries are added at the end and the page advances."""
        feed = Feed(entries=[make_entry(minutes=0)])
        added = feed.extend_old(batch=[make_entry(minutes=5), make_entry(minutes=-10), make_entry(minutes=-5)])
        assert added == [make_entry(minutes=-5), make_entry(minutes=-10)]
        assert feed.page == 1
        assert feed.oldest == make_entry(minutes=-10)

    def test_pages_of_several_sites_leave_no_gap(self) -> None:
        """Test that entries cut from one page show up with the next one."""
        feed = Feed(entries=[])
        first = feed.merge_new_batches(
            batches=[
                [make_entry(minutes=100), make_entry(minutes=90), make_entry(minutes=80)],
                [make_entry(minutes=99, site="Danas"), make_entry(minutes=95, site="Danas")],
            ]
        )
        assert [entry.published for entry in first] == [BASE_TIME + timedelta(minutes=m) for m in (100, 99, 95)]
        assert feed.held_back == [make_entry(minutes=90), make_entry(minutes=80)]
        older = feed.extend_old_batches(
            batches=[
                [make_entry(minutes=70), make_entry(minutes=60)],
                [make_entry(minutes=50, site="Danas")],
            ]
        )
        assert [entry.published for entry in older] == [BASE_TIME + timedelta(minutes=m) for m in (90, 80, 70, 60)]
        assert [entry.published for entry in feed.entries] == [
            BASE_TIME + timedelta(minutes=m) for m in (100, 99, 95, 90, 80, 70, 60)
        ]
        assert feed.held_back == [make_entry(minutes=50, site="Danas")]
        assert feed.page == 1

    def test_refresh_keeps_held_back_entries(self) -> None:
        """Test that only the first page of an empty feed replaces the held back entries."""
        feed = Feed(entries=[])
        feed.merge_new_batches(
            batches=[[make_entry(minutes=10), make_entry(minutes=0)], [make_entry(minutes=5, site="Danas")]]
        )
        assert feed.held_back == [make_entry(minutes=0)]
        new = feed.merge_new_batches(
            batches=[[make_entry(minutes=20), make_entry(minutes=1)], [make_entry(minutes=15, site="Danas")]]
        )
        assert new == [make_entry(minutes=20), make_entry(minutes=15, site="Danas")]
        assert feed.held_back == [make_entry(minutes=0)]

    def test_is_stale(self) -> None:
        """Test the refresh interval check."""
        feed = Feed(entries=[])
        assert feed.is_stale(interval=0) is True
        assert feed.is_stale(interval=3600) is False
        feed.refreshed_at -= 7200
        assert feed.is_stale(interval=3600) is True
        feed.touch()
        assert feed.is_stale(interval=3600) is False

    def test_json_round_trip(self) -> None:
        """Test that a saved feed loads with the same entries."""
        feed = Feed(entries=[make_entry(minutes=1), make_entry(minutes=2, site="Insajder", fetched=True)])
        loaded = Feed.from_json(text=feed.to_json(), known_sites={"N1", "Insajder"})
        assert loaded.entries == feed.entries

    def test_unknown_site_is_rejected(self) -> None:
        """Test that a saved entry of a site that isn't supported fails to load."""
        feed = Feed(entries=[make_entry(minutes=1, site="Politika")])
        with pytest.raises(ValueError, match="Couldn't find the parser for Politika"):
            Feed.from_json(text=feed.to_json(), known_sites={"N1"})

    def test_from_json_needs_list(self) -> None:
        """Test that anything but a list of entries is rejected."""
        with pytest.raises(ValueError):
            Feed.from_json(text='{"entries": []}')
        with pytest.raises(ValueError):
            Feed.from_json(text="not json")

    def test_save_and_load(self, tmp_path) -> None:
        """Test writing the feed to disk and reading it back."""
        path = tmp_path / "state" / "feed.json"
        feed = Feed(entries=[make_entry(minutes=1)])
        feed.save(path=path)
        assert Feed.load(path=path, known_sites={"N1"}).entries == feed.entries
        assert json.loads(path.read_text(encoding="utf-8"))[0]["body"] == {
            "type": "remote",
            "url": "https://example.com/1",
        }

    def test_load_missing_file(self, tmp_path) -> None:
        """Test that loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Feed.load(path=tmp_path / "missing.json")

    @given(known=minutes, fetched=minutes)
    def test_merge_keeps_strict_order(self, known: set[int], fetched: set[int]) -> None:
        """Test that merging never duplicates entries or breaks the order."""
        feed = Feed(entries=[make_entry(minutes=m) for m in known])
        inserted = feed.merge_new(batch=[make_entry(minutes=m) for m in fetched])
        times = [entry.published for entry in feed.entries]
        assert all(a > b for a, b in zip(times, times[1:]))
        assert len(feed) == len(known) + len(inserted)
        if known:
            assert all(entry.published > BASE_TIME + timedelta(minutes=max(known)) for entry in inserted)

    def test_bodies(self) -> None:
        """Test the two kinds of article body."""
        assert FetchedBody(html="<p>x</p>").lead == ""
        assert RemoteBody(url="https://example.com").url == "https://example.com"
