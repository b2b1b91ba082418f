from typing import List

from news_reader.models import Article

def filter_articles(
    articles: List[Article],
    search_text: str,
) -> List[Article]:
    """
    Filter articles by a live search text.

    An empty search text returns every article. Otherwise an article matches when its
    title, description or author contains the text, ignoring case. The relative order
    of `articles` is kept.
    """
    if not search_text:
        return list(articles)

    needle = search_text.casefold()
    return [
        article for article in articles
        if needle in article.title.casefold()
        or needle in article.display_description.casefold()
        or needle in article.display_author.casefold()
    ]
