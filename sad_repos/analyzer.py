"""Main commit sentiment analyzer."""

import logging
from typing import Dict, List

from .api_client import GitHubAPIClient
from .batching import MAX_BATCH_BYTES, process
from .commit_fetcher import CommitFetcher
from .errors import SadReposError
from .models import AnalysisResult, Repo
from .sentiment_client import SENTIMENT_ENDPOINT, SentimentClient


class SentimentAnalyzer:
    """Analyzes the sentiment of commit messages across repositories."""

    def __init__(
        self,
        token: str = None,
        endpoint: str = SENTIMENT_ENDPOINT,
        max_batch_bytes: int = MAX_BATCH_BYTES,
        api_client: GitHubAPIClient = None,
        sentiment_client: SentimentClient = None
    ):
        """Initialize the analyzer.

        Args:
            token: GitHub personal access token
            endpoint: URL of the batch sentiment endpoint
            max_batch_bytes: Maximum serialized size of one sentiment request
            api_client: GitHub client to use instead of creating one
            sentiment_client: Sentiment client to use instead of creating one
        """
        self.api_client = api_client or GitHubAPIClient(token)
        self.sentiment_client = sentiment_client or SentimentClient(endpoint)
        self.fetcher = CommitFetcher(self.api_client)
        self.max_batch_bytes = max_batch_bytes

    def analyze(self, owner: str, name: str) -> List[AnalysisResult]:
        """Analyze all non-merge commit messages of one repository.

        All commit pages are fetched before the first batch is sent.

        Args:
            owner: Repository owner
            name: Repository name

        Returns:
            One AnalysisResult per commit message, in API order

        Raises:
            FetchError: If the commit history cannot be retrieved
            BatchError: If any batch cannot be analyzed
        """
        logging.info(f"Analyzing: {owner}/{name}")
        messages = self.fetcher.fetch(owner, name)
        results = process(messages, self.sentiment_client.bulk_analyze, self.max_batch_bytes)
        logging.info(f"Analyzed {len(results)} commit messages of {owner}/{name}")
        return results

    def analyze_repositories(self, repos: List[Repo]) -> Dict[str, List[AnalysisResult]]:
        """Analyze repositories one after another.

        Stops at the first failing repository and propagates its error.

        Args:
            repos: Repositories to analyze

        Returns:
            Mapping of repository full name to its results, in input order
        """
        results = {}
        for repo in repos:
            try:
                results[repo.full_name] = self.analyze(repo.owner, repo.name)
            except SadReposError as e:
                logging.error(f"Error analyzing {repo.full_name}: {e}")
                raise
        return results

    def close(self):
        self.api_client.close()
        self.sentiment_client.close()
