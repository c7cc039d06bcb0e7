"""YAML-backed store for the watchlist (subscribed feeds and tracked investments)."""

import os
from pathlib import Path
from typing import Optional

import yaml

from feedticker.core.errors import ConfigError
from feedticker.core.logger import logger
from feedticker.models.datatypes import Investment, Watchlist

_DEFAULT_PATH = Path.home() / ".config" / "feedticker" / "watchlist.yaml"


def default_watchlist_path() -> Path:
    """``$FEEDTICKER_WATCHLIST`` if set, else ``~/.config/feedticker/watchlist.yaml``."""
    env_path = os.getenv("FEEDTICKER_WATCHLIST")
    return Path(env_path).expanduser() if env_path else _DEFAULT_PATH


class WatchlistStore:
    """Loads and saves a :class:`Watchlist` as a YAML document.

    The document looks like::

        feeds:
          - https://example.com/rss
        investments:
          - ticker: AAPL
            name: Apple

    Args:
        path: File location. Defaults to :func:`default_watchlist_path`.
    """

    def __init__(self, path: Optional[str | Path] = None) -> None:
        self.path = Path(path).expanduser() if path else default_watchlist_path()

    def load(self) -> Watchlist:
        """Read the watchlist. A missing file yields an empty watchlist.

        Raises:
            ConfigError: If the file cannot be parsed or has the wrong shape.
        """
        if not self.path.exists():
            logger.info(f"WatchlistStore: no file at {self.path}; starting empty")
            return Watchlist()

        try:
            with open(self.path, "r", encoding="utf-8") as file:
                data = yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read watchlist {self.path}: {exc}", path=str(self.path)) from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Watchlist {self.path} must contain a mapping", path=str(self.path))

        feeds = [str(url) for url in data.get("feeds") or []]
        investments = []
        for entry in data.get("investments") or []:
            if not isinstance(entry, dict) or not entry.get("ticker"):
                raise ConfigError(
                    f"Watchlist {self.path} has an investment without a ticker: {entry!r}",
                    path=str(self.path),
                )
            name = entry.get("name")
            investments.append(
                Investment(ticker=str(entry["ticker"]).upper(), name=str(name) if name else None)
            )

        logger.info(
            f"WatchlistStore: loaded {len(feeds)} feeds and "
            f"{len(investments)} investments from {self.path}"
        )
        return Watchlist(feeds=feeds, investments=investments)

    def save(self, watchlist: Watchlist) -> None:
        """Write the watchlist, creating parent directories as needed."""
        data = {
            "feeds": list(watchlist.feeds),
            "investments": [
                {"ticker": inv.ticker, **({"name": inv.name} if inv.name else {})}
                for inv in watchlist.investments
            ],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as file:
                yaml.safe_dump(data, file, sort_keys=False)
        except OSError as exc:
            raise ConfigError(f"Cannot write watchlist {self.path}: {exc}", path=str(self.path)) from exc
        logger.info(f"WatchlistStore: saved watchlist to {self.path}")
