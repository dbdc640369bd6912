"""Errors surfaced by the search pipeline."""


class SearchRelayError(Exception):
    """Base class for failures that reach the request boundary."""


class MissingCredentialError(SearchRelayError, ValueError):
    """No product-search credential is configured."""


class AllCredentialsExhausted(SearchRelayError):
    """Every candidate credential failed for one search."""

    def __init__(self, attempts: int, last_error: str):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Failed to search AliExpress: all {attempts} API key(s) failed. Last error: {last_error}"
        )
