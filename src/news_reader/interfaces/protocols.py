"""Defines protocols for dependency injection and mocking core components."""

from typing import List, Optional, Protocol

from news_reader.models import Article


class ArticleStoreProtocol(Protocol):
    """Protocol defining the interface for the local article cache and bookmarks."""

    def save_cached_articles(self, articles: List[Article]) -> None:
        """Replace the whole article cache with the given articles."""
        ...

    def fetch_cached_articles(self) -> List[Article]:
        """Return cached articles, most recently cached first."""
        ...

    def search_cached_articles(self, query: str) -> List[Article]:
        """Return cached articles whose title or description contains the query."""
        ...

    def save_bookmark(self, article: Article) -> None:
        """Bookmark an article unless its URL is already bookmarked."""
        ...

    def remove_bookmark(self, article: Article) -> None:
        """Remove every bookmark with the article's URL."""
        ...

    def fetch_bookmarked_articles(self) -> List[Article]:
        """Return bookmarked articles, most recently bookmarked first."""
        ...

    def is_article_bookmarked(self, article: Article) -> bool:
        """Check if a bookmark with the article's URL exists."""
        ...


class RemoteFetcherProtocol(Protocol):
    """Protocol defining the interface for fetching articles over the network."""

    async def fetch_articles(self, query: Optional[str] = None) -> List[Article]:
        """Fetch top headlines, or search results when a query is given.

        Raises:
            NetworkError: The fetch failed; the error carries its classified kind.
        """
        ...

    def is_connected_to_internet(self) -> bool:
        """Report whether the news API is currently reachable."""
        ...
