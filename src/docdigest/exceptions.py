"""Exception taxonomy for docdigest.

Generation errors abort a summarization job; parse errors never do.
"""


class DocdigestError(Exception):
    """Base class for docdigest errors."""


class GenerationError(DocdigestError):
    """The text-generation contract failed.

    Raised after transport retries are exhausted, or when a provider returns
    no text content.
    """


class GenerationTimeoutError(GenerationError):
    """A generation call did not complete within its timeout."""


class SummarizationError(DocdigestError):
    """A summarization job failed as a whole.

    No partial result accompanies this error.
    """

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"Summarization failed during '{stage}': {message}")
        self.stage = stage


class RateLimitExceededError(DocdigestError):
    """The rate limiter refused the request for the given key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Rate limit exceeded for '{key}'")
        self.key = key
