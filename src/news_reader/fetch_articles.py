import asyncio
import logging
import socket
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

import requests
from pydantic import ValidationError

from news_reader.errors import NetworkError, NetworkErrorKind
from news_reader.interfaces.protocols import RemoteFetcherProtocol
from news_reader.models import Article, NewsResponse

DEFAULT_BASE_URL = "https://newsapi.org/v2"
TOP_HEADLINES_ENDPOINT = "/top-headlines"
EVERYTHING_ENDPOINT = "/everything"

# Timeout of the connectivity probe in seconds.
CONNECTIVITY_TIMEOUT = 3.0

class NewsApiFetcher(RemoteFetcherProtocol):
    """
    Fetches articles from NewsAPI.
    """
    def __init__(
            self,
            api_key: str, # The NewsAPI key
            base_url: str = DEFAULT_BASE_URL, # The base URL of the API
            country: str = "us", # The country of the top headlines
            page_size: int = 20, # The number of articles per request
            timeout: float = 10.0, # The request timeout in seconds
        ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.page_size = page_size
        self.timeout = timeout

    def build_request(
            self,
            query: Optional[str] = None,
        ) -> Tuple[str, Dict[str, str]]:
        """
        Build the URL and query parameters for a request.

        Returns:
            The search endpoint when a query is given; otherwise, the top headlines endpoint.
        """
        if query:
            return self.base_url + EVERYTHING_ENDPOINT, {
                "q": query,
                "sortBy": "publishedAt",
                "pageSize": str(self.page_size),
            }
        return self.base_url + TOP_HEADLINES_ENDPOINT, {
            "country": self.country,
            "pageSize": str(self.page_size),
        }

    def is_connected_to_internet(self) -> bool:
        """
        Check if a TCP connection to the API host can be opened.
        """
        parsed_url = urlparse(self.base_url)
        host = parsed_url.hostname
        if not host:
            return False
        try:
            port = parsed_url.port or (80 if parsed_url.scheme == "http" else 443)
        except ValueError:
            return False
        try:
            with socket.create_connection((host, port), timeout=CONNECTIVITY_TIMEOUT):
                return True
        except OSError as e:
            logging.info(f"News API host \"{host}\" is unreachable: {e}")
            return False

    async def fetch_articles(
            self,
            query: Optional[str] = None,
        ) -> List[Article]:
        """
        Fetch top headlines, or search results when a query is given.

        The connectivity check and the blocking request run in worker threads.
        """
        if not await asyncio.to_thread(self.is_connected_to_internet):
            raise NetworkError(NetworkErrorKind.NO_INTERNET_CONNECTION)
        return await asyncio.to_thread(self._fetch, query)

    def _fetch(
            self,
            query: Optional[str],
        ) -> List[Article]:
        url, params = self.build_request(query)
        logging.info(f"Fetching articles from {url}.")
        try:
            response = requests.get(
                url,
                params=params,
                headers={
                    "X-Api-Key": self.api_key,
                    "Accept": "application/json",
                },
                timeout=self.timeout,
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema) as e:
            logging.error(f"Invalid news API URL {url}: {e}")
            raise NetworkError(NetworkErrorKind.INVALID_URL) from e
        except requests.RequestException as e:
            logging.error(f"Network error while fetching {url}: {e}")
            raise NetworkError(NetworkErrorKind.UNKNOWN) from e

        if response.status_code != 200:
            logging.error(f"Failed to fetch articles from {url}. Code: {response.status_code}")
            raise NetworkError.server_error(response.status_code)

        if not response.content:
            raise NetworkError(NetworkErrorKind.NO_DATA)

        try:
            news_response = NewsResponse.model_validate_json(response.content)
        except ValidationError as e:
            logging.error(f"Decoding error: {e}")
            raise NetworkError(NetworkErrorKind.DECODING_ERROR) from e

        logging.info(f"Fetched {len(news_response.articles)} of {news_response.total_results} articles.")
        return news_response.articles
