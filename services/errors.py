"""Error types shared by the services and API layers."""


class ContentValidationError(ValueError):
    """Input was rejected before any provider was called.

    Covers blank or too-short text, malformed URLs and uploads that fail the
    size, type or signature checks.
    """


class ContentFetchError(Exception):
    """A URL could not be fetched or produced no readable text."""


class ProviderError(Exception):
    """An LLM provider failed or returned an unusable response."""

    def __init__(self, message: str, provider: str = "", status_code: int = 0):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class AuthenticationError(Exception):
    """A bearer token was missing or rejected by Supabase Auth."""


class StorageError(Exception):
    """A Supabase table, storage or RPC call failed."""
