from typing import List, Optional
from argparse import ArgumentParser, Namespace as ArgNamespace
from dotenv import load_dotenv

from news_reader.article_store import DEFAULT_MAX_CACHED_ARTICLES
from news_reader.fetch_articles import DEFAULT_BASE_URL
from news_reader.models import AppConfig, AppEnvSettings

# Commands that talk to the news API and therefore need an API key.
NETWORK_COMMANDS = ("headlines", "search", "bookmark")

def parse_cli_arguments(argv: Optional[List[str]] = None) -> ArgNamespace:
    """
    Parse the command line arguments.
    """
    parser = ArgumentParser(description="News Reader")
    parser.add_argument(
        "-k", "--news-api-key",
        type=str,
        help="The API key for NewsAPI.",
    )
    parser.add_argument(
        "-b", "--base-url",
        type=str,
        help="The base URL of the news API.",
    )
    parser.add_argument(
        "--country",
        type=str,
        help="The country of the top headlines.",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        help="The number of articles to request.",
    )
    parser.add_argument(
        "-s", "--state-dir",
        type=str,
        help="The directory holding the article cache and the bookmarks.",
    )
    parser.add_argument(
        "--max-cached-articles",
        type=int,
        help="The maximum number of articles kept in the cache.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="The timeout of a news API request in seconds.",
    )
    parser.add_argument(
        "-f", "--filter",
        type=str,
        default="",
        help="Only show articles whose title, description or author contains this text.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "headlines",
        help="Show the top headlines, or the cached ones when offline.",
    )
    search_parser = subparsers.add_parser(
        "search",
        help="Search the news API, or the cached articles when offline.",
    )
    search_parser.add_argument("query", type=str, help="The search query.")
    subparsers.add_parser(
        "bookmarks",
        help="Show the bookmarked articles.",
    )
    bookmark_parser = subparsers.add_parser(
        "bookmark",
        help="Bookmark a cached article, or remove its bookmark.",
    )
    bookmark_parser.add_argument("url", type=str, help="The URL of the article.")

    return parser.parse_args(argv)

def first_set(*values):
    """
    Return the first value that is not None, so that explicit zeros are kept.
    """
    return next((value for value in values if value is not None), None)

def load_config(argv: Optional[List[str]] = None) -> AppConfig:
    """
    Load the configuration.
    """
    load_dotenv(verbose=True)
    cli_args = parse_cli_arguments(argv)
    env_settings = AppEnvSettings()
    command = cli_args.command or "headlines"

    news_api_key = cli_args.news_api_key or env_settings.news_api_key
    if news_api_key is None and command in NETWORK_COMMANDS:
        raise ValueError("No NewsAPI key provided.")

    return AppConfig(
        command=command,
        query=getattr(cli_args, "query", None),
        article_url=getattr(cli_args, "url", None),
        filter_text=cli_args.filter,
        news_api_key=news_api_key,
        news_api_base_url=cli_args.base_url
            or env_settings.news_api_base_url
            or DEFAULT_BASE_URL,
        news_country=cli_args.country
            or env_settings.news_country
            or "us",
        news_page_size=first_set(
            cli_args.page_size,
            env_settings.news_page_size,
            20,
        ),
        state_dir=cli_args.state_dir
            or env_settings.state_dir
            or "state",
        max_cached_articles=first_set(
            cli_args.max_cached_articles,
            env_settings.max_cached_articles,
            DEFAULT_MAX_CACHED_ARTICLES,
        ),
        request_timeout=first_set(
            cli_args.timeout,
            env_settings.request_timeout,
            10.0,
        ),
    )
