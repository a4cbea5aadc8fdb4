"""Client for the npm registry's public HTTP API.

Two read-only operations, each a single GET against registry.npmjs.org:
``search`` (text search over ``/-/v1/search``) and ``fetch_package`` (the full
package document at ``/<name>``). Responses decode straight into the pydantic
models in ``npm_registry_mcp.models`` (RESPONSE_SHAPER pattern); every failure
is raised as one of the ``RegistryError`` subclasses (ERROR_CLASSIFICATION
pattern). Nothing is retried or cached.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import quote_plus

import httpx
from pydantic import BaseModel, ValidationError

from npm_registry_mcp.errors import DecodeError, TransportError, UnexpectedStatusError
from npm_registry_mcp.models import GetPackage, SearchOptions, SearchResults

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

NPM_REGISTRY_URL = "https://registry.npmjs.org"
NPM_SEARCH_URL = f"{NPM_REGISTRY_URL}/-/v1/search"

HTTP_HEADERS = {
    "User-Agent": "npm-registry-mcp/0.1 (compatible; python-httpx)",
    "Accept": "application/json",
}

# Applies only to clients this module creates; injected clients keep their own.
DEFAULT_TIMEOUT = 15.0

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_search_url(term: str, options: SearchOptions | None = None) -> str:
    """Build the search URL for ``term``, appending only the options that are set.

    Zero is the "unset" sentinel for every option, so a literal zero weight
    or offset is never sent and the registry default is used instead.
    """
    opts = options or SearchOptions()
    url = f"{NPM_SEARCH_URL}?text={quote_plus(term)}"

    if opts.size:
        url += f"&size={opts.size}"
    if opts.from_:
        url += f"&from={opts.from_}"
    # LEARN: Weights always go out with six decimal digits (0.5 -> "0.500000").
    if opts.quality:
        url += f"&quality={opts.quality:.6f}"
    if opts.popularity:
        url += f"&popularity={opts.popularity:.6f}"
    if opts.maintenance:
        url += f"&maintenance={opts.maintenance:.6f}"

    return url


def build_package_url(name: str) -> str:
    """Build the package document URL.

    The name is used as given: scoped packages must already be encoded the
    way the registry expects (``@scope%2Fname``). An empty name would address
    the registry root, so it is rejected with ValueError.
    """
    if not name.strip():
        msg = "package name must not be empty"
        raise ValueError(msg)
    return f"{NPM_REGISTRY_URL}/{name}"


@asynccontextmanager
async def _client_scope(client: httpx.AsyncClient | None) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client untouched, or a fresh one closed on exit."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(headers=HTTP_HEADERS, timeout=DEFAULT_TIMEOUT, follow_redirects=True) as owned:
        yield owned


async def _get(url: str, client: httpx.AsyncClient | None) -> httpx.Response:
    """Issue one GET and return the fully read response, or raise."""
    logger.debug("GET %s", url)
    # LEARN: InvalidURL is raised before any request exists, so it is not a RequestError.
    try:
        async with _client_scope(client) as http:
            response = await http.get(url)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        logger.warning("Request to %s failed: %s", url, exc)
        msg = f"failed to fetch {url}: {exc}"
        raise TransportError(msg, url=url) from exc

    if response.status_code != 200:  # noqa: PLR2004
        logger.warning("npm registry returned HTTP %s for %s", response.status_code, url)
        raise UnexpectedStatusError(response.status_code, url=url)

    return response


def _decode(model: type[ModelT], response: httpx.Response, url: str) -> ModelT:
    # LEARN: model_validate_json parses and validates in one pass, so malformed
    # JSON and a wrong root shape both surface as ValidationError.
    try:
        return model.model_validate_json(response.content)
    except ValidationError as exc:
        logger.warning("Could not decode %s from %s: %s", model.__name__, url, exc)
        msg = f"failed to decode {model.__name__} from {url}: {exc}"
        raise DecodeError(msg, url=url) from exc


async def search(
    term: str,
    options: SearchOptions | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> SearchResults:
    """Search the npm registry for packages matching ``term``.

    Raises TransportError, UnexpectedStatusError or DecodeError on failure.
    """
    url = build_search_url(term, options)
    response = await _get(url, client)
    results = _decode(SearchResults, response, url)
    logger.debug("Search %r returned %d of %d results", term, len(results.objects), results.total)
    return results


async def fetch_package(name: str, *, client: httpx.AsyncClient | None = None) -> GetPackage:
    """Fetch the full package document for ``name``.

    A name the registry does not know yields UnexpectedStatusError (404).
    """
    url = build_package_url(name)
    response = await _get(url, client)
    package = _decode(GetPackage, response, url)
    logger.debug("Fetched %s with %d versions", package.name, len(package.versions))
    return package
