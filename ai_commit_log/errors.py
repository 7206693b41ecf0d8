from __future__ import annotations


EXIT_FAILURE = 1
EXIT_USAGE = 2


class CommitLogError(Exception):
    """Base for every failure that terminates a run."""

    exit_code = EXIT_FAILURE

    def __init__(self, message: str, *, raw: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        # Raw provider body, echoed to stderr for debugging.
        self.raw = raw


class UsageError(CommitLogError):
    """Missing input, unsupported provider or missing credential."""

    exit_code = EXIT_USAGE


class TransportError(CommitLogError):
    """The HTTP call itself failed after the built-in retries."""


class ResponseFormatError(CommitLogError):
    """Empty body or a body that is not JSON."""


class ApplicationError(CommitLogError):
    """The provider returned an explicit error payload."""


class ExtractionError(CommitLogError):
    """Well-formed response without usable message content."""
