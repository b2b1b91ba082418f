"""Coordinates the remote fetcher and the local store into the articles on display."""

import asyncio
import logging
from typing import List, Optional

from news_reader.errors import NetworkError
from news_reader.filter_articles import filter_articles
from news_reader.interfaces.protocols import ArticleStoreProtocol, RemoteFetcherProtocol
from news_reader.models import Article


class ArticlesOrchestrator:
    """Owns the current article set and decides between the network and the cache.

    All state is mutated on a single asyncio event loop. The remote fetch and the
    connectivity check run off the loop and are the only suspension points. Overlapping fetches are neither sequenced nor cancelled, so the
    state reflects whichever fetch completes last.
    """

    def __init__(
        self,
        fetcher: RemoteFetcherProtocol,
        store: ArticleStoreProtocol,
    ):
        """Initialize the orchestrator.

        Args:
            fetcher: Remote fetcher used for headlines and online searches
            store: Local store holding the article cache and bookmarks
        """
        self.fetcher = fetcher
        self.store = store

        self.is_loading = False
        self.last_error: Optional[NetworkError] = None
        self._articles: List[Article] = []
        self._search_text = ""
        self.filtered_articles: List[Article] = []

    @property
    def articles(self) -> List[Article]:
        """The base article set; assigning it re-applies the search filter."""
        return self._articles

    @articles.setter
    def articles(self, articles: List[Article]) -> None:
        self._articles = list(articles)
        self._filter_articles()

    @property
    def search_text(self) -> str:
        """The live filter text; assigning it re-applies the search filter."""
        return self._search_text

    @search_text.setter
    def search_text(self, search_text: str) -> None:
        self._search_text = search_text
        self._filter_articles()

    @property
    def error_message(self) -> Optional[str]:
        """The user-visible message of the last fetch error, if any."""
        return self.last_error.message if self.last_error else None

    def start(self) -> "asyncio.Task[None]":
        """Show cached articles right away and schedule a live fetch.

        Must be called from a running event loop. The returned task is independent of
        the cache snapshot; its outcome supersedes the snapshot when it completes.
        """
        self._load_cached_articles()
        return asyncio.get_running_loop().create_task(self.fetch_articles())

    async def fetch_articles(self, query: Optional[str] = None) -> None:
        """Fetch articles and cache them, falling back to the cache when offline.

        Args:
            query: Search query; top headlines are fetched when None or empty
        """
        self.is_loading = True
        self.last_error = None

        error: Optional[NetworkError] = None
        try:
            articles = await self.fetcher.fetch_articles(query)
        except NetworkError as e:
            error = e
        finally:
            self.is_loading = False

        if error is not None:
            self.last_error = error
            logging.warning(f"Failed to fetch articles: {error.message}")
            if not await self._is_connected_to_internet():
                logging.info("Offline, showing cached articles.")
                self._load_cached_articles()
            return

        self.articles = articles
        self.store.save_cached_articles(articles)

    async def refresh_articles(self) -> None:
        """Fetch the top headlines again."""
        await self.fetch_articles()

    async def search_articles(self, query: str) -> None:
        """Search the news API when online, or the cached articles when offline.

        A blank query refreshes the top headlines instead.
        """
        if not query.strip():
            await self.refresh_articles()
            return

        if await self._is_connected_to_internet():
            await self.fetch_articles(query)
        else:
            # Already cached, so nothing is written back.
            self.articles = self.store.search_cached_articles(query)

    def toggle_bookmark(self, article: Article) -> bool:
        """Bookmark the article, or remove its bookmark if it has one.

        Returns:
            bool: True if the article is bookmarked afterwards, False otherwise.
        """
        if self.store.is_article_bookmarked(article):
            self.store.remove_bookmark(article)
            return False
        self.store.save_bookmark(article)
        return True

    def is_bookmarked(self, article: Article) -> bool:
        """Check if the article is bookmarked."""
        return self.store.is_article_bookmarked(article)

    async def _is_connected_to_internet(self) -> bool:
        # The check may block on a socket, so it runs in a worker thread.
        return await asyncio.to_thread(self.fetcher.is_connected_to_internet)

    def _load_cached_articles(self) -> None:
        cached_articles = self.store.fetch_cached_articles()
        if cached_articles:
            self.articles = cached_articles

    def _filter_articles(self) -> None:
        self.filtered_articles = filter_articles(self._articles, self._search_text)


class BookmarkList:
    """The bookmarked articles with their own live filter."""

    def __init__(self, store: ArticleStoreProtocol):
        """Initialize the list and load the bookmarks from the store."""
        self.store = store
        self.bookmarked_articles: List[Article] = []
        self.filtered_bookmarks: List[Article] = []
        self._search_text = ""
        self.load_bookmarks()

    @property
    def search_text(self) -> str:
        return self._search_text

    @search_text.setter
    def search_text(self, search_text: str) -> None:
        self._search_text = search_text
        self._filter_bookmarks()

    def load_bookmarks(self) -> None:
        """Re-read the bookmarks from the store."""
        self.bookmarked_articles = self.store.fetch_bookmarked_articles()
        self._filter_bookmarks()

    def remove_bookmark(self, article: Article) -> None:
        """Remove the article's bookmark and reload the list."""
        self.store.remove_bookmark(article)
        self.load_bookmarks()

    def _filter_bookmarks(self) -> None:
        self.filtered_bookmarks = filter_articles(self.bookmarked_articles, self._search_text)
