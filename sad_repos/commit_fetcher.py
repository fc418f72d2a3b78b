"""Retrieval of commit messages from a GitHub repository."""

import logging
from typing import Iterator, List

import requests

from .api_client import GitHubAPIClient
from .errors import FetchError


# Messages starting with these prefixes are merge commits and carry no sentiment
MERGE_PREFIXES = ('Merge pull request', 'Merge branch')


def is_merge_commit(message: str) -> bool:
    """Check whether a commit message belongs to a merge commit."""
    return message.startswith(MERGE_PREFIXES)


def extract_message(commit: dict) -> str:
    """Extract the message text from a commit record of the commits API.

    Raises:
        KeyError, TypeError: If the record does not have the expected shape
    """
    message = commit['commit']['message']
    if not isinstance(message, str):
        raise TypeError(f"Commit message is {type(message).__name__}, not str")
    return message


class CommitFetcher:
    """Pages through the commit history of a repository."""

    def __init__(self, api_client: GitHubAPIClient):
        """Initialize the fetcher.

        Args:
            api_client: Client used for the commit listing requests
        """
        self.api_client = api_client
        self.disregarded = 0

    def iter_messages(self, owner: str, name: str) -> Iterator[str]:
        """Lazily yield the non-merge commit messages of a repository.

        Messages are produced in the order returned by the API, newest first.
        The iterator is single-pass and stops with a FetchError on the first
        failed page.

        Args:
            owner: Repository owner
            name: Repository name

        Yields:
            Commit message strings

        Raises:
            FetchError: On transport, authorization or malformed response errors
        """
        self.disregarded = 0
        for messages in self._iter_pages(owner, name):
            for message in messages:
                if is_merge_commit(message):
                    self.disregarded += 1
                    continue
                yield message

        logging.info(f"Disregarded {self.disregarded} merge commits in {owner}/{name}")

    def _iter_pages(self, owner: str, name: str) -> Iterator[List[str]]:
        """Yield the messages of each commit page, wrapping errors in FetchError."""
        page = 1
        try:
            for commits in self.api_client.iter_pages(self.api_client.commits_url(owner, name)):
                yield [extract_message(commit) for commit in commits]
                page += 1
        except requests.exceptions.RequestException as e:
            raise FetchError(
                f"Failed to fetch commits of {owner}/{name} (page {page}): {e}",
                owner, name, page
            ) from e
        except (ValueError, KeyError, TypeError) as e:
            raise FetchError(
                f"Malformed commit listing for {owner}/{name} (page {page}): {e}",
                owner, name, page
            ) from e

    def fetch(self, owner: str, name: str) -> List[str]:
        """Fetch all non-merge commit messages of a repository.

        Either the complete message list is returned or a FetchError is
        raised; no partial result is returned.

        Args:
            owner: Repository owner
            name: Repository name

        Returns:
            Ordered list of commit messages
        """
        messages = list(self.iter_messages(owner, name))
        logging.info(f"Fetched {len(messages)} commit messages from {owner}/{name}")
        return messages
