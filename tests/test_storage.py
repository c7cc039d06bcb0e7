"""Tests for the watchlist model and its YAML store."""

import pytest
import yaml

from feedticker.core.errors import ConfigError
from feedticker.core.storage import WatchlistStore, default_watchlist_path
from feedticker.models.datatypes import Investment, Watchlist


class TestWatchlist:

    def test_add_feed_rejects_duplicates(self):
        wl = Watchlist()
        assert wl.add_feed("https://a.example/rss")
        assert not wl.add_feed("https://a.example/rss")
        assert wl.feeds == ["https://a.example/rss"]

    def test_remove_feed(self):
        wl = Watchlist(feeds=["https://a.example/rss"])
        assert wl.remove_feed("https://a.example/rss")
        assert not wl.remove_feed("https://a.example/rss")

    def test_add_investment_uppercases(self):
        wl = Watchlist()
        assert wl.add_investment("aapl", "Apple")
        assert wl.investments == [Investment(ticker="AAPL", name="Apple")]

    def test_add_investment_rejects_duplicate_any_case(self):
        wl = Watchlist(investments=[Investment("AAPL")])
        assert not wl.add_investment("aapl")

    def test_empty_name_is_absent(self):
        wl = Watchlist()
        wl.add_investment("MSFT", "")
        assert wl.investments[0].name is None

    def test_remove_investment_case_insensitive(self):
        wl = Watchlist(investments=[Investment("AAPL"), Investment("TSLA")])
        assert wl.remove_investment("tsla")
        assert not wl.remove_investment("tsla")
        assert [i.ticker for i in wl.investments] == ["AAPL"]

    def test_find_investment(self):
        wl = Watchlist(investments=[Investment("AAPL", "Apple")])
        assert wl.find_investment("aapl") == Investment("AAPL", "Apple")
        assert wl.find_investment("MSFT") is None

    def test_display(self):
        assert Investment("AAPL", "Apple").display == "AAPL (Apple)"
        assert Investment("AAPL").display == "AAPL"


class TestWatchlistStore:

    def test_missing_file_is_empty(self, watchlist_path):
        assert WatchlistStore(watchlist_path).load() == Watchlist()

    def test_save_then_load(self, watchlist_path, watchlist):
        store = WatchlistStore(watchlist_path)
        store.save(watchlist)
        assert watchlist_path.exists()
        assert store.load() == watchlist

    def test_saved_document_shape(self, watchlist_path):
        WatchlistStore(watchlist_path).save(
            Watchlist(feeds=["https://a.example/rss"], investments=[Investment("XYZ")])
        )
        data = yaml.safe_load(watchlist_path.read_text(encoding="utf-8"))
        assert data == {"feeds": ["https://a.example/rss"], "investments": [{"ticker": "XYZ"}]}

    def test_load_normalizes_ticker_case(self, watchlist_path):
        watchlist_path.parent.mkdir(parents=True)
        watchlist_path.write_text("investments:\n  - ticker: nvda\n    name: Nvidia\n", encoding="utf-8")
        wl = WatchlistStore(watchlist_path).load()
        assert wl.feeds == []
        assert wl.investments == [Investment("NVDA", "Nvidia")]

    def test_empty_file_is_empty_watchlist(self, watchlist_path):
        watchlist_path.parent.mkdir(parents=True)
        watchlist_path.write_text("", encoding="utf-8")
        assert WatchlistStore(watchlist_path).load() == Watchlist()

    def test_invalid_yaml(self, watchlist_path):
        watchlist_path.parent.mkdir(parents=True)
        watchlist_path.write_text("feeds: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            WatchlistStore(watchlist_path).load()

    def test_not_a_mapping(self, watchlist_path):
        watchlist_path.parent.mkdir(parents=True)
        watchlist_path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            WatchlistStore(watchlist_path).load()

    def test_investment_without_ticker(self, watchlist_path):
        watchlist_path.parent.mkdir(parents=True)
        watchlist_path.write_text("investments:\n  - name: Nameless\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            WatchlistStore(watchlist_path).load()

    def test_default_path_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FEEDTICKER_WATCHLIST", str(tmp_path / "wl.yaml"))
        assert default_watchlist_path() == tmp_path / "wl.yaml"
        assert WatchlistStore().path == tmp_path / "wl.yaml"
