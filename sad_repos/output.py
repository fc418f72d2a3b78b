"""Output formatting and display for sentiment analysis results."""

import math
from typing import Iterable, List, Optional

from .models import NEGATIVE, POSITIVE, AnalysisResult, RepositorySummary


# ANSI color codes
GREEN = '\033[92m'
RED = '\033[91m'
BOLD = '\033[1m'
RESET = '\033[0m'

DEFAULT_MIN_CONFIDENCE = 75.0


def validate_confidence(value: float) -> float:
    """Ensure a minimum confidence lies within 0-100 inclusively.

    Raises:
        ValueError: If the value is out of range
    """
    if math.isnan(value) or value < 0 or value > 100:
        raise ValueError("confidence must be between 0-100 inclusively")
    return value


def summarize(repo: str, results: Iterable[AnalysisResult], min_confidence: float) -> RepositorySummary:
    """Count positive, negative and low-confidence results of a repository.

    Results below the minimum confidence only count as below confidence,
    whatever their label. Labels other than Positive and Negative are not
    counted in any column.

    Args:
        repo: Repository full name
        results: Analysis results of the repository
        min_confidence: Minimum confidence for a label to count

    Returns:
        RepositorySummary with the counts
    """
    summary = RepositorySummary(repo=repo)
    for result in results:
        summary.total += 1
        summary.confidences.append(result.confidence)
        if result.confidence < min_confidence:
            summary.below_confidence += 1
            continue
        if result.sentiment == POSITIVE:
            summary.positive += 1
        elif result.sentiment == NEGATIVE:
            summary.negative += 1
    return summary


def format_ratio(ratio: Optional[float]) -> str:
    if ratio is None:
        return 'n/a'
    if math.isinf(ratio):
        return 'inf'
    return f"{ratio:f}"


class OutputFormatter:
    """Formats and prints the per-repository sentiment table."""

    COLUMNS = [
        ('Repo', 30),
        ('Positive Commits', 18),
        ('Negative Commits', 18),
        ('Commits Below Confidence', 26),
        ('Pos-to-Neg Ratio', 18),
        ('Avg Confidence', 15),
    ]

    def __init__(self, min_confidence: float = DEFAULT_MIN_CONFIDENCE, use_color: bool = True):
        """Initialize the output formatter.

        Args:
            min_confidence: Minimum confidence used for the counts
            use_color: Whether to color the ratio column
        """
        self.min_confidence = min_confidence
        self.use_color = use_color

    def _color_ratio(self, summary: RepositorySummary, text: str) -> str:
        if not self.use_color or summary.ratio is None:
            return text
        if summary.ratio >= 1:
            return f"{GREEN}{text}{RESET}"
        return f"{RED}{text}{RESET}"

    def format_header(self) -> str:
        return ' '.join(f"{title:<{width}}" for title, width in self.COLUMNS)

    def format_row(self, summary: RepositorySummary) -> str:
        values = [
            summary.repo,
            str(summary.positive),
            str(summary.negative),
            str(summary.below_confidence),
            format_ratio(summary.ratio),
            f"{summary.average_confidence:.2f}",
        ]
        cells = [f"{value:<{width}}" for value, (_, width) in zip(values, self.COLUMNS)]
        # Pad before coloring so escape codes do not shift the columns
        cells[4] = self._color_ratio(summary, cells[4])
        return ' '.join(cells).rstrip()

    def print_summary(self, summaries: List[RepositorySummary]):
        """Print the sentiment table for all analyzed repositories.

        Args:
            summaries: One summary per repository, in display order
        """
        print("\n" + "="*80)
        print(f"{BOLD}COMMIT SENTIMENT SUMMARY{RESET}" if self.use_color else "COMMIT SENTIMENT SUMMARY")
        print("="*80)
        print(f"Minimum Confidence: {self.min_confidence:f}%")

        if not summaries:
            print("\nNo repositories analyzed.")
            return

        header = self.format_header()
        print()
        print(header.rstrip())
        print('-' * len(header))
        for summary in summaries:
            print(self.format_row(summary))
