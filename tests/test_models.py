import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from news_reader.errors import NetworkError, NetworkErrorKind
from news_reader.models import (
    Article,
    BookmarkRecord,
    CachedArticleRecord,
    NewsResponse,
    Source,
)
from tests.test_utils import generate_test_article

def api_article_json(url: str = "https://example.com/a", **overrides) -> dict:
    article = {
        "source": {"id": "bbc-news", "name": "BBC News"},
        "author": "Jane Doe",
        "title": "Apple News",
        "description": "Latest updates",
        "url": url,
        "urlToImage": "https://example.com/a.jpg",
        "publishedAt": "2025-08-17T09:30:00Z",
        "content": "Body",
    }
    article.update(overrides)
    return article

def test_article_equality_uses_url_only():
    first = generate_test_article(1, title="First title")
    second = generate_test_article(2, title="Second title", url=first.url)

    assert first == second
    assert hash(first) == hash(second)
    assert first != generate_test_article(3)
    assert len({first, second}) == 1

def test_article_ids_are_generated_per_instance():
    first = generate_test_article(1)
    second = generate_test_article(1)

    assert first.id != second.id
    assert first == second

def test_article_is_immutable():
    article = generate_test_article(1)

    with pytest.raises(ValidationError):
        article.title = "Changed"

def test_article_decodes_api_aliases():
    article = Article.model_validate(api_article_json())

    assert article.image_url == "https://example.com/a.jpg"
    assert article.published_at == "2025-08-17T09:30:00Z"
    assert article.source == Source(id="bbc-news", name="BBC News")

def test_article_ignores_incoming_id():
    article = Article.model_validate(api_article_json(id="not-a-uuid"))

    assert str(article.id) != "not-a-uuid"

@pytest.mark.parametrize(
    "title, expected",
    [
        ("Apple News", "Apple News"),
        ("", "No Title"),
    ]
)
def test_article_display_title(title, expected):
    assert generate_test_article(1, title=title).display_title == expected

def test_article_display_description_placeholder():
    article = Article(title="T", url="u", published_at="x")

    assert article.display_description == "No description available"

@pytest.mark.parametrize(
    "author, source, expected",
    [
        ("Jane Doe", Source(name="BBC News"), "Jane Doe"),
        (None, Source(name="BBC News"), "BBC News"),
        (None, None, "Unknown"),
    ]
)
def test_article_display_author(author, source, expected):
    article = Article(title="T", url="u", published_at="x", author=author, source=source)

    assert article.display_author == expected

def test_article_formatted_date():
    assert generate_test_article(16).formatted_date == "Aug 17, 2025, 09:30 AM"
    assert Article(title="T", url="u", published_at="yesterday").formatted_date == "yesterday"

def test_news_response_decodes_result_set():
    payload = json.dumps({
        "status": "ok",
        "totalResults": 2,
        "articles": [
            api_article_json("https://example.com/1"),
            api_article_json("https://example.com/2", source=None, author=None, description=None),
        ],
    })

    response = NewsResponse.model_validate_json(payload)

    assert response.status == "ok"
    assert response.total_results == 2
    assert [article.url for article in response.articles] == ["https://example.com/1", "https://example.com/2"]
    assert response.articles[1].display_author == "Unknown"

def test_news_response_rejects_article_without_title():
    payload = json.dumps({
        "status": "ok",
        "totalResults": 1,
        "articles": [api_article_json(title=None)],
    })

    with pytest.raises(ValidationError):
        NewsResponse.model_validate_json(payload)

def test_cached_record_round_trip_keeps_fields():
    article = Article.model_validate(api_article_json())
    cached_at = datetime(2025, 8, 17, tzinfo=timezone.utc)

    record = CachedArticleRecord.from_article(article, cached_at)
    restored = record.to_article()

    assert record.source_name == "BBC News"
    assert record.source_id == "bbc-news"
    assert record.cached_at == cached_at
    assert restored.model_dump() == article.model_dump()
    assert restored.id != article.id

@pytest.mark.parametrize(
    "source_name, source_id, expected",
    [
        (None, None, None),
        ("BBC News", None, Source(id=None, name="BBC News")),
        (None, "bbc-news", Source(id="bbc-news", name="Unknown")),
    ]
)
def test_bookmark_record_source(source_name, source_id, expected):
    record = BookmarkRecord(
        title="T",
        url="u",
        published_at="x",
        source_name=source_name,
        source_id=source_id,
        bookmarked_at=datetime(2025, 8, 17, tzinfo=timezone.utc),
    )

    assert record.to_article().source == expected

@pytest.mark.parametrize(
    "error, message",
    [
        (NetworkError(NetworkErrorKind.NO_INTERNET_CONNECTION), "No internet connection available"),
        (NetworkError(NetworkErrorKind.INVALID_URL), "Invalid URL"),
        (NetworkError(NetworkErrorKind.NO_DATA), "No data received"),
        (NetworkError(NetworkErrorKind.DECODING_ERROR), "Failed to decode response"),
        (NetworkError.server_error(500), "Server error with code: 500"),
        (NetworkError(NetworkErrorKind.UNKNOWN), "An unknown error occurred"),
    ]
)
def test_network_error_messages(error, message):
    assert error.message == message
    assert str(error) == message

def test_network_error_equality():
    assert NetworkError.server_error(404) == NetworkError.server_error(404)
    assert NetworkError.server_error(404) != NetworkError.server_error(500)
    assert NetworkError(NetworkErrorKind.NO_DATA) != NetworkError(NetworkErrorKind.UNKNOWN)
