"""Sad Repos - sentiment analysis of GitHub commit messages."""

from .models import AnalysisResult, Repo, RepositorySummary, parse_repositories
from .errors import SadReposError, FetchError, BatchError
from .api_client import GitHubAPIClient
from .commit_fetcher import CommitFetcher
from .sentiment_client import SentimentClient
from .analyzer import SentimentAnalyzer
from .output import OutputFormatter, summarize

__all__ = [
    'AnalysisResult',
    'Repo',
    'RepositorySummary',
    'parse_repositories',
    'SadReposError',
    'FetchError',
    'BatchError',
    'GitHubAPIClient',
    'CommitFetcher',
    'SentimentClient',
    'SentimentAnalyzer',
    'OutputFormatter',
    'summarize',
]
