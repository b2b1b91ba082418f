import asyncio
from typing import Dict, List, Optional

from news_reader.models import Article, Source

def generate_test_article(
        index: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        author: Optional[str] = None,
        source: Optional[Source] = None,
        url: Optional[str] = None,
    ) -> Article:
    """
    Generate a test article with the given index.
    """
    return Article(
        source=source,
        author=author,
        title=title if title is not None else f"Test Article {index}",
        description=description if description is not None else f"Test Description {index}",
        url=url or f"https://example.com/article-{index}",
        image_url=f"https://example.com/article-{index}.jpg",
        published_at=f"2025-08-{index + 1:02d}T09:30:00Z",
        content=f"Test Content {index}",
    )

def generate_test_articles(count: int) -> List[Article]:
    return [generate_test_article(index) for index in range(1, count + 1)]

def urls(articles: List[Article]) -> List[str]:
    return [article.url for article in articles]

class FakeFetcher:
    """
    In-memory remote fetcher.

    Returns `articles` or raises `error`. When a query has a gate registered, the
    fetch waits for the gate to be set before completing.
    """
    def __init__(
            self,
            articles: Optional[List[Article]] = None,
            error: Optional[Exception] = None,
            connected: bool = True,
        ):
        self.articles = articles or []
        self.error = error
        self.connected = connected
        self.results: Dict[Optional[str], List[Article]] = {}
        self.gates: Dict[Optional[str], asyncio.Event] = {}
        self.queries: List[Optional[str]] = []

    async def fetch_articles(self, query: Optional[str] = None) -> List[Article]:
        self.queries.append(query)
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.results.get(query, self.articles)

    def is_connected_to_internet(self) -> bool:
        return self.connected

class InMemoryArticleStore:
    """
    In-memory local store keeping the same ordering rules as the JSON store.
    """
    def __init__(
            self,
            cached_articles: Optional[List[Article]] = None,
            bookmarks: Optional[List[Article]] = None,
        ):
        self.cached_articles = list(cached_articles or [])
        self.bookmarks = list(bookmarks or [])
        self.save_calls: List[List[Article]] = []
        self.search_queries: List[str] = []

    def save_cached_articles(self, articles: List[Article]):
        self.save_calls.append(list(articles))
        self.cached_articles = list(articles)

    def fetch_cached_articles(self) -> List[Article]:
        return list(self.cached_articles)

    def search_cached_articles(self, query: str) -> List[Article]:
        self.search_queries.append(query)
        needle = query.lower()
        return [
            article for article in self.cached_articles
            if needle in article.title.lower() or needle in (article.description or "").lower()
        ]

    def save_bookmark(self, article: Article):
        if not self.is_article_bookmarked(article):
            self.bookmarks.insert(0, article)

    def remove_bookmark(self, article: Article):
        self.bookmarks = [bookmark for bookmark in self.bookmarks if bookmark.url != article.url]

    def fetch_bookmarked_articles(self) -> List[Article]:
        return list(self.bookmarks)

    def is_article_bookmarked(self, article: Article) -> bool:
        return any(bookmark.url == article.url for bookmark in self.bookmarks)
