from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from news_reader.utils.date_format import format_published_at

# URL of an article, the natural key used for identity across the app.
ArticleURL = str

### Article

class Source(BaseModel):
    """
    Publisher of an article.
    """
    id: Optional[str] = None # The identifier of the source, if the API knows one.
    name: str # The display name of the source.

    model_config = ConfigDict(
        frozen = True,
    )

class Article(BaseModel):
    """
    A news article as returned by the remote API.

    Two articles are the same article when their URLs are equal, whatever
    the other fields say. The `id` is generated per instance and never used
    for identity.
    """
    source: Optional[Source] = None # The publisher of the article.
    author: Optional[str] = None # The author of the article.
    title: str # The title of the article, may be empty.
    description: Optional[str] = None # A short description of the article.
    url: ArticleURL # The URL of the article.
    image_url: Optional[str] = Field(default=None, alias="urlToImage") # The URL of the lead image.
    published_at: str = Field(alias="publishedAt") # The publication date as sent by the API.
    content: Optional[str] = None # A truncated body of the article.

    _id: UUID = PrivateAttr(default_factory=uuid4)

    model_config = ConfigDict(
        frozen = True,
        populate_by_name = True,
    )

    @property
    def id(self) -> UUID:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    @property
    def display_title(self) -> str:
        return self.title if self.title else "No Title"

    @property
    def display_description(self) -> str:
        return self.description if self.description is not None else "No description available"

    @property
    def display_author(self) -> str:
        if self.author is not None:
            return self.author
        if self.source is not None:
            return self.source.name
        return "Unknown"

    @property
    def formatted_date(self) -> str:
        return format_published_at(self.published_at)

class NewsResponse(BaseModel):
    """
    Result set returned by the news API.
    """
    status: str # The status of the request, "ok" on success.
    total_results: int = Field(alias="totalResults") # The total number of results available.
    articles: List[Article] # The articles of the current page.

    model_config = ConfigDict(
        populate_by_name = True,
    )

### Persisted records

class ArticleRecord(BaseModel):
    """
    Flat persisted form of an article.
    """
    title: str
    description: Optional[str] = None
    author: Optional[str] = None
    url: ArticleURL
    image_url: Optional[str] = None
    published_at: str
    content: Optional[str] = None
    source_name: Optional[str] = None
    source_id: Optional[str] = None

    @classmethod
    def _fields_from_article(cls, article: Article) -> dict:
        return dict(
            title=article.title,
            description=article.description,
            author=article.author,
            url=article.url,
            image_url=article.image_url,
            published_at=article.published_at,
            content=article.content,
            source_name=article.source.name if article.source else None,
            source_id=article.source.id if article.source else None,
        )

    def to_article(self) -> Article:
        """
        Rebuild the article. A fresh `id` is generated.
        """
        source = None
        if self.source_name is not None or self.source_id is not None:
            source = Source(id=self.source_id, name=self.source_name or "Unknown")
        return Article(
            source=source,
            author=self.author,
            title=self.title,
            description=self.description,
            url=self.url,
            image_url=self.image_url,
            published_at=self.published_at,
            content=self.content,
        )

class CachedArticleRecord(ArticleRecord):
    """
    An article from the most recent successful fetch.
    """
    cached_at: datetime # When the batch holding this article was written.

    @classmethod
    def from_article(cls, article: Article, cached_at: datetime) -> "CachedArticleRecord":
        return cls(**cls._fields_from_article(article), cached_at=cached_at)

class BookmarkRecord(ArticleRecord):
    """
    An article bookmarked by the user.
    """
    bookmarked_at: datetime # When the user bookmarked the article.

    @classmethod
    def from_article(cls, article: Article, bookmarked_at: datetime) -> "BookmarkRecord":
        return cls(**cls._fields_from_article(article), bookmarked_at=bookmarked_at)

### App

class AppEnvSettings(BaseSettings):
    """
    App settings from environment variables.
    """
    news_api_key: Optional[str] = None # The API key for NewsAPI.
    news_api_base_url: Optional[str] = None # The base URL of the news API.
    news_country: Optional[str] = None # The country for top headlines.
    news_page_size: Optional[int] = None # The number of articles per request.
    state_dir: Optional[str] = None # The directory holding the cache and bookmark files.
    max_cached_articles: Optional[int] = None # The maximum number of cached articles kept.
    request_timeout: Optional[float] = None # The timeout of a news API request in seconds.

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
        extra="ignore",
    )

class AppConfig(BaseModel):
    """
    Global app config.
    """
    command: str # The CLI command to run.
    query: Optional[str] = None # The search query of the `search` command.
    article_url: Optional[ArticleURL] = None # The article URL of the `bookmark` command.
    filter_text: str = "" # The live filter applied to the printed list.
    news_api_key: Optional[str] = None # The API key for NewsAPI.
    news_api_base_url: str # The base URL of the news API.
    news_country: str # The country for top headlines.
    news_page_size: int # The number of articles per request.
    state_dir: str # The directory holding the cache and bookmark files.
    max_cached_articles: int # The maximum number of cached articles kept.
    request_timeout: float # The timeout of a news API request in seconds.

    model_config = ConfigDict(
        frozen = True,
    )
