"""Size-bounded batching of commit messages for the sentiment service.

Messages are grouped in input order so that the serialized JSON array of
each batch stays within ``MAX_BATCH_BYTES``. A message that is too large on
its own is still sent, alone, in its own batch.
"""

import json
import logging
from typing import Callable, Iterable, Iterator, List

from .errors import BatchError
from .models import AnalysisResult


MAX_BATCH_BYTES = 1000000

# Size of the enclosing '[' and ']'
_EMPTY_ARRAY_SIZE = 2


def serialize_batch(messages: List[str]) -> bytes:
    """Serialize messages to the compact UTF-8 JSON array sent on the wire.

    Raises:
        BatchError: If the messages cannot be serialized
    """
    try:
        return json.dumps(messages, ensure_ascii=False, separators=(',', ':')).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise BatchError(f"Failed to serialize batch of {len(messages)} messages: {e}") from e


def serialized_size(message: str) -> int:
    """Number of bytes a single message adds as a JSON array element."""
    return len(serialize_batch([message])) - _EMPTY_ARRAY_SIZE


def iter_batches(messages: Iterable[str], max_bytes: int = MAX_BATCH_BYTES) -> Iterator[List[str]]:
    """Partition an ordered stream of messages into size-bounded batches.

    The size of the pending batch is tracked incrementally; it always equals
    ``len(serialize_batch(batch))``.

    Args:
        messages: Ordered commit messages
        max_bytes: Maximum serialized size of a batch

    Yields:
        Non-empty batches, in input order
    """
    batch: List[str] = []
    size = _EMPTY_ARRAY_SIZE

    for message in messages:
        element_size = serialized_size(message)
        if _EMPTY_ARRAY_SIZE + element_size > max_bytes:
            logging.warning(
                f"Commit message of {element_size} bytes exceeds the batch limit "
                f"of {max_bytes} bytes, sending it alone"
            )

        # A comma separates every element after the first
        tentative_size = size + element_size + (1 if batch else 0)

        if tentative_size > max_bytes and batch:
            yield batch
            batch = [message]
            size = _EMPTY_ARRAY_SIZE + element_size
        else:
            batch.append(message)
            size = tentative_size

    if batch:
        yield batch


def process(
    messages: Iterable[str],
    bulk_analyze: Callable[[List[str]], List[AnalysisResult]],
    max_bytes: int = MAX_BATCH_BYTES
) -> List[AnalysisResult]:
    """Analyze an ordered stream of messages batch by batch.

    Batches are sent one after another and their results concatenated, so
    the returned list is positionally aligned with the input messages.

    Args:
        messages: Ordered commit messages
        bulk_analyze: Function analyzing one batch
        max_bytes: Maximum serialized size of a batch

    Returns:
        One AnalysisResult per input message, in input order

    Raises:
        BatchError: On the first batch that fails; no partial result is returned
    """
    results: List[AnalysisResult] = []
    for index, batch in enumerate(iter_batches(messages, max_bytes), start=1):
        logging.debug(f"Sending batch {index} with {len(batch)} messages")
        results.extend(bulk_analyze(batch))
    return results
