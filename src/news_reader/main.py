import asyncio
import logging
import sys
from typing import List, Optional

from news_reader.article_store import JsonArticleStore
from news_reader.config import load_config
from news_reader.fetch_articles import NewsApiFetcher
from news_reader.interfaces.protocols import ArticleStoreProtocol, RemoteFetcherProtocol
from news_reader.models import AppConfig, Article
from news_reader.orchestrator import ArticlesOrchestrator, BookmarkList

logging.basicConfig(level=logging.INFO)

def format_article(article: Article) -> str:
    """
    Render an article as a few lines of plain text.
    """
    return "\n".join([
        article.display_title,
        f"  {article.display_author} | {article.formatted_date}",
        f"  {article.display_description}",
        f"  {article.url}",
    ])

def print_articles(articles: List[Article]):
    if not articles:
        print("No articles available.")
        return
    for article in articles:
        print(format_article(article))
        print()

class Main:
    """
    Main class for the News Reader application.
    """
    def __init__(
            self,
            config: AppConfig,
            fetcher: Optional[RemoteFetcherProtocol] = None,
            store: Optional[ArticleStoreProtocol] = None,
            ):
        self.config = config
        self.store = store or JsonArticleStore(
            state_dir=config.state_dir,
            max_cached_articles=config.max_cached_articles,
        )
        self._fetcher = fetcher

    @property
    def fetcher(self) -> RemoteFetcherProtocol:
        # Built lazily, the bookmarks command runs without an API key.
        if self._fetcher is None:
            if self.config.news_api_key is None:
                raise ValueError("No NewsAPI key provided.")
            self._fetcher = NewsApiFetcher(
                api_key=self.config.news_api_key,
                base_url=self.config.news_api_base_url,
                country=self.config.news_country,
                page_size=self.config.news_page_size,
                timeout=self.config.request_timeout,
            )
        return self._fetcher

    def run(self) -> int:
        """
        Run the configured command.

        Returns:
            The process exit code.
        """
        command = self.config.command
        if command == "bookmarks":
            return self.show_bookmarks()
        if command == "bookmark":
            return self.toggle_bookmark()
        return asyncio.run(self.show_articles())

    async def show_articles(self) -> int:
        """
        Print the headlines or search results, falling back to the cache when offline.
        """
        orchestrator = ArticlesOrchestrator(fetcher=self.fetcher, store=self.store)
        orchestrator.search_text = self.config.filter_text

        if self.config.command == "search":
            await orchestrator.search_articles(self.config.query or "")
        else:
            # Shows the cache immediately; the live fetch supersedes it.
            await orchestrator.start()

        if orchestrator.error_message:
            logging.warning(orchestrator.error_message)
        print_articles(orchestrator.filtered_articles)
        return 0

    def show_bookmarks(self) -> int:
        bookmark_list = BookmarkList(store=self.store)
        bookmark_list.search_text = self.config.filter_text
        print_articles(bookmark_list.filtered_bookmarks)
        return 0

    def toggle_bookmark(self) -> int:
        """
        Toggle the bookmark of a cached or bookmarked article, looked up by URL.
        """
        url = self.config.article_url
        candidates = self.store.fetch_cached_articles() + self.store.fetch_bookmarked_articles()
        article = next((candidate for candidate in candidates if candidate.url == url), None)
        if article is None:
            logging.warning(f"Article \"{url}\" is neither cached nor bookmarked.")
            return 1

        orchestrator = ArticlesOrchestrator(fetcher=self.fetcher, store=self.store)
        if orchestrator.toggle_bookmark(article):
            print(f"Bookmarked: {article.display_title}")
        else:
            print(f"Removed bookmark: {article.display_title}")
        return 0

def main():
    try:
        config = load_config()
    except ValueError as e:
        logging.error(e)
        sys.exit(1)
    main = Main(config=config)
    sys.exit(main.run())

if __name__ == "__main__":
    main()
