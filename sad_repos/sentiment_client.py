"""Client for the batch sentiment analysis service."""

import json
import logging
from typing import List

import requests

from .api_client import build_session
from .batching import serialize_batch
from .errors import BatchError
from .models import AnalysisResult


SENTIMENT_ENDPOINT = 'http://sentiment.vivekn.com/api/batch/'

# Maximum number of characters of a raw response body kept in errors
BODY_EXCERPT_LENGTH = 500


def _excerpt(body: str) -> str:
    if len(body) <= BODY_EXCERPT_LENGTH:
        return body
    return body[:BODY_EXCERPT_LENGTH] + '...'


def parse_confidence(value: str) -> float:
    """Convert a decimal confidence string such as '87.50' to a float.

    Raises:
        ValueError: If the value is not a decimal string
    """
    if not isinstance(value, str):
        raise ValueError(f"confidence must be a string, got {type(value).__name__}")
    return float(value)


def parse_analysis_response(body: str) -> List[AnalysisResult]:
    """Parse the JSON body returned by the sentiment service.

    The body is an array of objects with a 'result' label and a decimal
    'confidence' string. Any malformed record aborts the whole batch.

    Args:
        body: Raw response body

    Returns:
        Analysis results in the order returned by the service

    Raises:
        BatchError: If the body or any record is malformed
    """
    try:
        records = json.loads(body)
    except ValueError as e:
        raise BatchError(f"json err: {e}", body=_excerpt(body)) from e

    if not isinstance(records, list):
        raise BatchError(
            f"Expected a JSON array of results, got {type(records).__name__}",
            body=_excerpt(body)
        )

    results = []
    for index, record in enumerate(records):
        try:
            sentiment = record['result']
            confidence_str = record['confidence']
        except (KeyError, TypeError) as e:
            raise BatchError(f"Malformed result record at index {index}: {record!r}", body=_excerpt(body)) from e

        try:
            confidence = parse_confidence(confidence_str)
        except ValueError as e:
            raise BatchError(f"Invalid confidence {confidence_str!r} at index {index}: {e}") from e

        results.append(AnalysisResult(sentiment=sentiment, confidence=confidence, confidence_str=confidence_str))

    return results


class SentimentClient:
    """Sends batches of commit messages to the sentiment analysis service."""

    def __init__(self, endpoint: str = SENTIMENT_ENDPOINT, session: requests.Session = None):
        """Initialize the sentiment client.

        Args:
            endpoint: URL of the batch analysis endpoint
            session: HTTP session to use; a new one is created if omitted
        """
        self.endpoint = endpoint
        self.session = session or build_session()
        logging.info(f"Initialized sentiment client for {self.endpoint}")

    def bulk_analyze(self, messages: List[str]) -> List[AnalysisResult]:
        """Analyze one batch of commit messages with a single request.

        Args:
            messages: Batch of commit messages

        Returns:
            One AnalysisResult per message, in batch order

        Raises:
            BatchError: On transport errors, non-2xx responses or malformed bodies
        """
        body = serialize_batch(messages)
        logging.debug(f"Posting {len(messages)} messages ({len(body)} bytes) to {self.endpoint}")

        try:
            response = self.session.post(
                self.endpoint,
                data=body,
                headers={'Content-Type': 'application/json'}
            )
        except requests.exceptions.RequestException as e:
            raise BatchError(f"http: {e}") from e

        text = response.text
        if not response.ok:
            raise BatchError(
                f"Sentiment service returned HTTP {response.status_code}",
                body=_excerpt(text)
            )

        results = parse_analysis_response(text)
        if len(results) != len(messages):
            raise BatchError(
                f"Sentiment service returned {len(results)} results for {len(messages)} messages",
                body=_excerpt(text)
            )
        return results

    def close(self):
        self.session.close()
