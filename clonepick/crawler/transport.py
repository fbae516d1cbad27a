"""HTTP plumbing shared by the remote clients.

Translates httpx and pydantic failures into the application's error types,
always naming the URL of the request that failed.
"""

import logging
from typing import TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from .. import __version__
from ..errors import DeserializationFailed, InvalidUrl, RequestFailed

logger = logging.getLogger(__name__)

USER_AGENT = f"clonepick/{__version__}"

T = TypeVar("T")


def build_client(
    token: str,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an HTTP client that authenticates with a bearer token.

    Certificate verification is switched off on purpose: the tool is aimed
    at self-hosted GitHub Enterprise and Bitbucket Server instances, which
    are commonly served with certificates from an internal CA. This trades
    protection against a man-in-the-middle for working out of the box.
    """
    return httpx.Client(
        headers={
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        },
        verify=False,
        follow_redirects=True,
        transport=transport,
    )


def get(client: httpx.Client, url: str) -> httpx.Response:
    """GET ``url`` and return the response, raising on anything but 2xx."""
    logger.debug("GET %s", url)
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidUrl(url) from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidUrl(url)

    try:
        response = client.get(parsed)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        raise InvalidUrl(url) from e
    except httpx.HTTPError as e:
        raise RequestFailed(url, str(e) or type(e).__name__) from e

    if not response.is_success:
        raise RequestFailed(
            url, f"status: {response.status_code} {response.reason_phrase}".rstrip()
        )
    return response


def decode(response: httpx.Response, url: str, adapter: TypeAdapter[T]) -> T:
    """Validate the JSON body of ``response`` against ``adapter``."""
    try:
        return adapter.validate_json(response.content)
    except ValidationError as e:
        raise DeserializationFailed(url, _describe(e)) from e


def _describe(error: ValidationError) -> str:
    errors = error.errors()
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"])
    detail = f"{location}: {first['msg']}" if location else first["msg"]
    if len(errors) > 1:
        detail += f" (and {len(errors) - 1} more)"
    return detail
