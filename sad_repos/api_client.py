"""GitHub API client for making requests and handling pagination."""

import os
import logging
from typing import Dict, Iterator, List
from urllib.parse import parse_qs, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


GITHUB_API_URL = 'https://api.github.com'
PER_PAGE = 100


def build_session(headers: Dict[str, str] = None) -> requests.Session:
    """Create a session that surfaces the first transport error.

    Args:
        headers: Default headers to send with every request

    Returns:
        Configured requests session
    """
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=Retry(total=0, read=False))
    session.mount('https://', adapter)
    session.mount('http://', adapter)
    if headers:
        session.headers.update(headers)
    return session


def next_page_number(response: requests.Response) -> int:
    """Extract the next page number from a response's Link header.

    Args:
        response: Response of a paginated GitHub API request

    Returns:
        The next page number, or 0 if this was the last page
    """
    next_link = response.links.get('next')
    if not next_link:
        return 0

    values = parse_qs(urlparse(next_link.get('url', '')).query).get('page')
    if not values:
        return 0
    try:
        return int(values[0])
    except ValueError:
        return 0


class GitHubAPIClient:
    """Handles GitHub API requests and pagination."""

    def __init__(self, token: str = None):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.session = build_session({'Accept': 'application/vnd.github.v3+json'})

        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")
            logging.warning("Set GITHUB_TOKEN environment variable or pass token as argument.")

    def iter_pages(self, url: str, params: Dict = None) -> Iterator[List[Dict]]:
        """Yield each page of a paginated GitHub API endpoint.

        Starts at page 1 and follows the next-page indicator of every
        response until the service reports no further page.

        Args:
            url: The API endpoint URL
            params: Query parameters

        Yields:
            The decoded JSON list of each page

        Raises:
            requests.exceptions.RequestException: On transport or HTTP errors
            ValueError: If a page is not a JSON list
        """
        params = dict(params or {})
        params['per_page'] = PER_PAGE
        page = 1

        while page:
            logging.debug(f"Fetching page {page} from {url}")
            response = self.session.get(url, params={**params, 'page': page})
            response.raise_for_status()

            data = response.json()
            if not isinstance(data, list):
                raise ValueError(f"Expected a list from {url} page {page}, got {type(data).__name__}")

            yield data
            page = next_page_number(response)

    def commits_url(self, owner: str, name: str) -> str:
        return f"{GITHUB_API_URL}/repos/{owner}/{name}/commits"

    def close(self):
        self.session.close()
