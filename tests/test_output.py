"""
Unit tests for summary computation and table output
"""

import pytest

from sad_repos.models import AnalysisResult, RepositorySummary
from sad_repos.output import OutputFormatter, format_ratio, summarize, validate_confidence


def result(sentiment, confidence):
    return AnalysisResult(sentiment=sentiment, confidence=confidence)


class TestValidateConfidence:
    """Test cases for minimum confidence validation."""

    @pytest.mark.parametrize('value', [0, 75, 100, 99.9])
    def test_accepts_range(self, value):
        """Test that values within 0-100 are accepted."""
        assert validate_confidence(value) == value

    @pytest.mark.parametrize('value', [101, -1, 100.01, float('nan')])
    def test_rejects_out_of_range(self, value):
        """Test that values outside 0-100 are rejected."""
        with pytest.raises(ValueError, match='between 0-100'):
            validate_confidence(value)


class TestSummarize:
    """Test cases for per-repository counts."""

    def test_counts(self):
        """Test positive, negative and below-confidence counts."""
        results = [
            result('Positive', 90.0),
            result('Positive', 80.0),
            result('Negative', 76.0),
            result('Negative', 50.0),
            result('Positive', 10.0),
            result('Neutral', 99.0),
        ]

        summary = summarize('o/r', results, 75)

        assert summary.repo == 'o/r'
        assert summary.positive == 2
        assert summary.negative == 1
        assert summary.below_confidence == 2
        assert summary.total == 6

    def test_confidence_equal_to_threshold_counts_for_label(self):
        """Test that the threshold itself is not below confidence."""
        summary = summarize('o/r', [result('Negative', 75.0)], 75)
        assert summary.negative == 1
        assert summary.below_confidence == 0

    def test_other_labels_count_nowhere(self):
        """Test that unknown labels above threshold are in no column."""
        summary = summarize('o/r', [result('Neutral', 95.0)], 75)
        assert (summary.positive, summary.negative, summary.below_confidence) == (0, 0, 0)
        assert summary.total == 1

    def test_zero_threshold(self):
        """Test that nothing is below a threshold of 0."""
        summary = summarize('o/r', [result('Positive', 0.0), result('Negative', 0.0)], 0)
        assert summary.below_confidence == 0
        assert summary.ratio == 1.0

    def test_empty_results(self):
        """Test summary of a repository without results."""
        summary = summarize('o/r', [], 75)
        assert summary.total == 0
        assert summary.ratio is None


class TestFormatRatio:
    """Test cases for ratio rendering."""

    def test_finite_ratio(self):
        """Test six-decimal rendering."""
        assert format_ratio(2 / 3) == '0.666667'

    def test_infinite_ratio(self):
        """Test rendering when there are no negative commits."""
        assert format_ratio(float('inf')) == 'inf'

    def test_undefined_ratio(self):
        """Test rendering when there are no labelled commits."""
        assert format_ratio(None) == 'n/a'


class TestOutputFormatter:
    """Test cases for table printing."""

    @pytest.fixture
    def summaries(self):
        return [
            RepositorySummary(repo='psf/requests', positive=10, negative=4, below_confidence=3,
                              total=20, confidences=[80.0, 90.0]),
            RepositorySummary(repo='pallets/flask', positive=5, negative=0, total=5),
        ]

    def test_print_summary(self, summaries, capsys):
        """Test that every repository appears with its counts."""
        formatter = OutputFormatter(75, use_color=False)
        formatter.print_summary(summaries)
        output = capsys.readouterr().out

        assert 'Minimum Confidence: 75.000000%' in output
        for column in ['Repo', 'Positive Commits', 'Negative Commits',
                       'Commits Below Confidence', 'Pos-to-Neg Ratio', 'Avg Confidence']:
            assert column in output

        lines = output.splitlines()
        requests_row = next(line for line in lines if line.startswith('psf/requests'))
        assert requests_row.split() == ['psf/requests', '10', '4', '3', '2.500000', '85.00']
        flask_row = next(line for line in lines if line.startswith('pallets/flask'))
        assert flask_row.split() == ['pallets/flask', '5', '0', '0', 'inf', '0.00']

    def test_columns_are_aligned(self, summaries):
        """Test that row cells start under their headers."""
        formatter = OutputFormatter(75, use_color=False)
        header = formatter.format_header()
        row = formatter.format_row(summaries[0])
        assert header.index('Negative Commits') == row.index(' 4 ') + 1

    def test_colored_ratio(self, summaries):
        """Test that ratios are colored when color is enabled."""
        formatter = OutputFormatter(75, use_color=True)
        assert '\033[92m' in formatter.format_row(summaries[0])
        low = RepositorySummary(repo='a/b', positive=1, negative=4)
        assert '\033[91m' in formatter.format_row(low)

    def test_no_repositories(self, capsys):
        """Test output without any analyzed repository."""
        OutputFormatter(50, use_color=False).print_summary([])
        assert 'No repositories analyzed.' in capsys.readouterr().out
