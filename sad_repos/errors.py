"""Exception types raised by the commit sentiment pipeline."""

from typing import Optional


class SadReposError(Exception):
    """Base class for all pipeline errors."""


class FetchError(SadReposError):
    """Raised when the commit history of a repository cannot be retrieved."""

    def __init__(self, message: str, owner: str = None, name: str = None, page: int = None):
        super().__init__(message)
        self.owner = owner
        self.name = name
        self.page = page


class BatchError(SadReposError):
    """Raised when a batch of commit messages cannot be analyzed.

    Args:
        message: Description of the failure
        body: Excerpt of the raw response body, if one was received
    """

    def __init__(self, message: str, body: Optional[str] = None):
        if body is not None:
            message = f"{message}\njson: {body}"
        super().__init__(message)
        self.body = body
