#!/usr/bin/env python3
"""
Sad Repos
Analyzes the sentiment of commit messages in GitHub repositories.
"""

import os
import sys
import logging
from dotenv import load_dotenv

from sad_repos.analyzer import SentimentAnalyzer
from sad_repos.errors import SadReposError
from sad_repos.models import parse_repositories
from sad_repos.output import OutputFormatter, summarize
from sad_repos.settings import load_settings

# Configure logging (can be overridden by LOG_LEVEL environment variable)
log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format='%(asctime)s %(levelname)s: %(message)s',
    datefmt='%m/%d/%Y %I:%M:%S %p'
)


def main(argv=None):
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()

    if argv is None:
        argv = sys.argv[1:]

    # Validate settings before any network call
    try:
        settings = load_settings(os.environ, argv)
    except ValueError as e:
        logging.error(str(e))
        sys.exit(1)

    # LOG_LEVEL may have been set by the .env file
    logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))

    print("Sad Repos - Commit Sentiment Analyzer")
    print("="*80)

    # Get token from environment or prompt (optional but recommended)
    token = settings.token
    if not token:
        token_input = input("\nEnter GitHub token (or press Enter to skip): ").strip()
        if token_input:
            token = token_input

    # Get repositories from arguments, environment or prompt
    identifiers = settings.repos
    if not identifiers:
        print("\nEnter repositories (format: owner/repo, one per line)")
        print("Press Enter on an empty line when done")
        print("Example: psf/requests")

        while True:
            repo = input("Repository: ").strip()
            if not repo:
                break
            identifiers.append(repo)

    repos, skipped = parse_repositories(identifiers)
    for identifier in skipped:
        logging.warning(f"Skipping '{identifier}': expected format owner/repo")

    if not repos:
        logging.error("At least one repository is required")
        sys.exit(1)

    logging.info(f"Minimum Confidence: {settings.min_confidence:f}%")

    analyzer = SentimentAnalyzer(
        token,
        endpoint=settings.endpoint,
        max_batch_bytes=settings.max_batch_bytes
    )

    # Analyze each repository, stopping at the first failure
    logging.info(f"Starting analysis of {len(repos)} repository/repositories")
    try:
        results_by_repo = analyzer.analyze_repositories(repos)
    except SadReposError:
        sys.exit(1)
    finally:
        analyzer.close()

    summaries = [
        summarize(repo, results, settings.min_confidence)
        for repo, results in results_by_repo.items()
    ]
    output_formatter = OutputFormatter(settings.min_confidence, use_color=sys.stdout.isatty())
    output_formatter.print_summary(summaries)


if __name__ == "__main__":
    main()
