"""Data models for commit sentiment analysis."""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple


POSITIVE = 'Positive'
NEGATIVE = 'Negative'


@dataclass(frozen=True)
class AnalysisResult:
    """Sentiment classification of a single commit message."""
    sentiment: str
    confidence: float
    confidence_str: str = ''  # Raw decimal string as returned by the service


@dataclass(frozen=True)
class Repo:
    """A GitHub repository identified by owner and name."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass
class RepositorySummary:
    """Counts derived from a repository's analysis results."""
    repo: str
    positive: int = 0
    negative: int = 0
    below_confidence: int = 0
    total: int = 0
    confidences: List[float] = field(default_factory=list)

    @property
    def ratio(self) -> Optional[float]:
        """Positive-to-negative ratio.

        Returns infinity when there are positive but no negative commits,
        and None when both counts are zero.
        """
        if self.negative == 0:
            return math.inf if self.positive > 0 else None
        return self.positive / self.negative

    @property
    def average_confidence(self) -> float:
        if not self.confidences:
            return 0.0
        return sum(self.confidences) / len(self.confidences)


def parse_repositories(identifiers: Iterable[str]) -> Tuple[List[Repo], List[str]]:
    """Split 'owner/name' identifiers into repositories and skipped inputs.

    An identifier is skipped unless it splits on '/' into exactly two
    non-empty parts.

    Args:
        identifiers: Repository identifiers as given by the user

    Returns:
        Tuple of (valid repositories, skipped identifiers), both in input order
    """
    repos = []
    skipped = []
    for identifier in identifiers:
        parts = identifier.split('/')
        if len(parts) != 2 or not all(parts):
            skipped.append(identifier)
            continue
        repos.append(Repo(parts[0], parts[1]))
    return repos, skipped
