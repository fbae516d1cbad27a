"""Error types raised while collecting clone URLs.

Every error carries the offending URL, repo id or provider name so the
command line can report a single readable line and exit.
"""


class ClonepickError(Exception):
    """Base exception for the entire application."""


class InvalidConfiguration(ClonepickError):
    """Configuration is missing, malformed or names an unknown provider."""


class FirstRun(InvalidConfiguration):
    """A template config file was just written and needs to be filled in."""

    def __init__(self, config_path):
        self.config_path = config_path
        super().__init__(
            "It looks like clonepick has been executed for the first time. "
            f"Please provide the necessary repo provider config in '{config_path}'"
        )


# -- HTTP ------------------------------------------------------------------


class InvalidUrl(ClonepickError):
    """A configured or derived URL can not be used to build a request."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid url '{url}'")


class RequestFailed(ClonepickError):
    """Non-2xx response or transport failure (DNS, connection, TLS)."""

    def __init__(self, url: str, detail: str):
        self.url = url
        self.detail = detail
        super().__init__(f"HTTP request to '{url}' failed: {detail}")


class DeserializationFailed(ClonepickError):
    """Response body does not match the expected shape."""

    def __init__(self, url: str, detail: str):
        self.url = url
        self.detail = detail
        super().__init__(f"Can't deserialize response from '{url}': {detail}")


class MissingCloneLink(ClonepickError):
    """A repository has clone links, but none of them is named ``ssh``.

    Recoverable: the repository is skipped and the fetch continues.
    """

    def __init__(self, repo_id):
        self.repo_id = repo_id
        super().__init__(f"Repository '{repo_id}' has no ssh clone link")


# -- Cache -----------------------------------------------------------------


class CacheUnavailable(ClonepickError):
    """The cache file for a provider can not be created or opened."""

    def __init__(self, provider_name: str, reason: str = ""):
        self.provider_name = provider_name
        self.reason = reason
        message = f"Cache file for '{provider_name}' is unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
