"""Runtime settings read from the environment and the command line."""

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from .batching import MAX_BATCH_BYTES
from .output import DEFAULT_MIN_CONFIDENCE, validate_confidence
from .sentiment_client import SENTIMENT_ENDPOINT


@dataclass
class Settings:
    """Settings of one analysis run."""
    token: Optional[str] = None
    repos: List[str] = field(default_factory=list)
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    endpoint: str = SENTIMENT_ENDPOINT
    max_batch_bytes: int = MAX_BATCH_BYTES
    log_level: str = 'INFO'


def split_list(value: str) -> List[str]:
    """Parse a comma-separated list, dropping empty entries."""
    return [item.strip() for item in value.split(',') if item.strip()]


def parse_min_confidence(value: str) -> float:
    """Parse and validate a minimum confidence value.

    Raises:
        ValueError: If the value is not a number within 0-100
    """
    try:
        confidence = float(value)
    except ValueError:
        raise ValueError(f"Invalid MIN_CONFIDENCE value '{value}'") from None
    return validate_confidence(confidence)


def parse_max_batch_bytes(value: str) -> int:
    try:
        max_bytes = int(value)
    except ValueError:
        raise ValueError(f"Invalid MAX_BATCH_BYTES value '{value}'") from None
    if max_bytes <= 0:
        raise ValueError(f"MAX_BATCH_BYTES must be positive, got {max_bytes}")
    return max_bytes


def load_settings(environ: Mapping[str, str], argv: Sequence[str] = ()) -> Settings:
    """Build settings from environment variables and positional arguments.

    Repositories given as arguments take precedence over GITHUB_REPOS.

    Args:
        environ: Environment variables
        argv: Positional command-line arguments (repository identifiers)

    Returns:
        Settings for the run

    Raises:
        ValueError: If a value is invalid
    """
    settings = Settings(
        token=environ.get('GITHUB_TOKEN') or None,
        endpoint=environ.get('SENTIMENT_ENDPOINT') or SENTIMENT_ENDPOINT,
        log_level=environ.get('LOG_LEVEL', 'INFO').upper(),
    )

    if argv:
        settings.repos = [r.strip() for r in argv if r.strip()]
    elif environ.get('GITHUB_REPOS'):
        settings.repos = split_list(environ['GITHUB_REPOS'])
        logging.info(f"Using repositories from environment: {', '.join(settings.repos)}")

    if environ.get('MIN_CONFIDENCE'):
        settings.min_confidence = parse_min_confidence(environ['MIN_CONFIDENCE'])

    if environ.get('MAX_BATCH_BYTES'):
        settings.max_batch_bytes = parse_max_batch_bytes(environ['MAX_BATCH_BYTES'])

    return settings
