import os
import logging
import contextlib
import tempfile
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from news_reader.interfaces.protocols import ArticleStoreProtocol
from news_reader.models import Article, BookmarkRecord, CachedArticleRecord

# The maximum number of articles kept by a cache write.
DEFAULT_MAX_CACHED_ARTICLES = 100

CACHED_ARTICLES_FILE_NAME = "cached_articles.json"
BOOKMARKS_FILE_NAME = "bookmarks.json"

class CachedArticles(BaseModel):
    """
    The cached articles file: the single most recent write generation.
    """
    records: List[CachedArticleRecord] = [] # Cached records in the order they were written.

class Bookmarks(BaseModel):
    """
    The bookmarks file.
    """
    records: List[BookmarkRecord] = [] # Bookmark records in insertion order, unique by url.

Document = TypeVar("Document", CachedArticles, Bookmarks)

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class JsonArticleStore(ArticleStoreProtocol):
    """
    Local store for cached and bookmarked articles, kept as two JSON files.

    Storage failures never reach the caller: reads degrade to empty results and
    writes to no-ops, both logged.
    """
    def __init__(
            self,
            state_dir: str, # The directory holding the cache and bookmark files
            max_cached_articles: int = DEFAULT_MAX_CACHED_ARTICLES, # The retention bound of the cache
            clock: Optional[Callable[[], datetime]] = None, # Source of record timestamps
        ):
        """
        Initialize the store. Files are created lazily on the first write.
        """
        if max_cached_articles < 0:
            raise ValueError(f"max_cached_articles must not be negative, got {max_cached_articles}.")

        self._state_dir = state_dir
        self._max_cached_articles = max_cached_articles
        self._clock = clock or utc_now
        self._lock = threading.RLock()

    @property
    def cached_articles_path(self) -> str:
        return os.path.join(self._state_dir, CACHED_ARTICLES_FILE_NAME)

    @property
    def bookmarks_path(self) -> str:
        return os.path.join(self._state_dir, BOOKMARKS_FILE_NAME)

    ### Cache

    def save_cached_articles(self, articles: List[Article]):
        """
        Replace all cached articles with the given ones, stamped with the current time.

        Only the first `max_cached_articles` articles are kept.
        """
        if len(articles) > self._max_cached_articles:
            logging.info(f"Caching {self._max_cached_articles} of {len(articles)} articles, dropping the rest.")
            articles = articles[:self._max_cached_articles]

        cached_at = self._clock()
        document = CachedArticles(
            records=[CachedArticleRecord.from_article(article, cached_at) for article in articles],
        )
        with self._lock:
            if self._write(self.cached_articles_path, document):
                logging.info(f"Cached {len(articles)} articles.")

    def fetch_cached_articles(self) -> List[Article]:
        """
        Return cached articles ordered by cache time, most recent first.
        """
        with self._lock:
            document = self._load(self.cached_articles_path, CachedArticles)
        if document is None:
            return []
        # Stable sort, a single batch keeps the order it was saved in.
        records = sorted(document.records, key=lambda record: record.cached_at, reverse=True)
        return [record.to_article() for record in records]

    def search_cached_articles(self, query: str) -> List[Article]:
        """
        Return cached articles whose title or description contains the query, ignoring case.
        """
        needle = query.casefold()
        return [
            article for article in self.fetch_cached_articles()
            if needle in article.title.casefold()
            or (article.description is not None and needle in article.description.casefold())
        ]

    ### Bookmarks

    def save_bookmark(self, article: Article):
        """
        Bookmark the article. Does nothing if its URL is already bookmarked.
        """
        with self._lock:
            document = self._load(self.bookmarks_path, Bookmarks)
            if document is None:
                return
            if any(record.url == article.url for record in document.records):
                logging.info(f"Article \"{article.url}\" is already bookmarked.")
                return

            document.records.append(BookmarkRecord.from_article(article, self._clock()))
            if self._write(self.bookmarks_path, document):
                logging.info(f"Bookmarked article \"{article.url}\".")

    def remove_bookmark(self, article: Article):
        """
        Remove every bookmark record with the article's URL.
        """
        with self._lock:
            document = self._load(self.bookmarks_path, Bookmarks)
            if document is None:
                return
            remaining = [record for record in document.records if record.url != article.url]
            if len(remaining) == len(document.records):
                return

            if self._write(self.bookmarks_path, Bookmarks(records=remaining)):
                logging.info(f"Removed bookmark for article \"{article.url}\".")

    def fetch_bookmarked_articles(self) -> List[Article]:
        """
        Return bookmarked articles ordered by bookmark time, most recent first.
        """
        with self._lock:
            document = self._load(self.bookmarks_path, Bookmarks)
        if document is None:
            return []
        # Reversed so that equal timestamps put the latest insertion first.
        records = sorted(reversed(document.records), key=lambda record: record.bookmarked_at, reverse=True)
        return [record.to_article() for record in records]

    def is_article_bookmarked(self, article: Article) -> bool:
        with self._lock:
            document = self._load(self.bookmarks_path, Bookmarks)
        if document is None:
            return False
        return any(record.url == article.url for record in document.records)

    ### Files

    @classmethod
    def _load(
            cls,
            file_path: str,
            document_type: Type[Document],
        ) -> Optional[Document]:
        """
        Load a document from the given path.

        Returns:
            The document, an empty document if the file does not exist yet, or None if it cannot be read.
        """
        if not os.path.exists(file_path):
            return document_type()

        try:
            # Read as bytes; pydantic validates the encoding.
            with open(file_path, "rb") as f:
                return document_type.model_validate_json(f.read())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logging.error(f"Failed to read \"{file_path}\": {e}")
            return None

    @classmethod
    def _write(
            cls,
            file_path: str,
            document: BaseModel,
        ) -> bool:
        """
        Write a document to the given path, replacing the previous file in one step.

        Returns:
            True if the document was written, False otherwise.
        """
        directory = os.path.dirname(file_path) or "."
        temp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document.model_dump_json())
            os.replace(temp_path, file_path)
            return True
        except OSError as e:
            logging.error(f"Failed to write \"{file_path}\": {e}")
            if temp_path is not None:
                with contextlib.suppress(OSError):
                    os.remove(temp_path)
            return False
