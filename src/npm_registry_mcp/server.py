"""FastMCP server exposing npm registry lookups as tools.

The server is an optional adapter over ``npm_registry_mcp.registry``; importing
it does not start anything. Run it with ``mcp.run()``.

Applies arcade patterns throughout:
- QUERY_TOOL: All tools are read-only, safe to retry
- TOOL_DESCRIPTION: LLM-optimized docstrings with next-action hints
- SMART_DEFAULTS: Tuning params default to zero, i.e. registry defaults
- TOKEN_EFFICIENT_RESPONSE: Single versions instead of whole documents, truncated READMEs
- RECOVERY_GUIDE: Every failure says RETRYABLE or PERMANENT and what to do next
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from npm_registry_mcp.errors import DecodeError, RegistryError, TransportError, UnexpectedStatusError
from npm_registry_mcp.models import GetPackageVersion, SearchOptions, SearchResults
from npm_registry_mcp.registry import NPM_REGISTRY_URL, fetch_package, search

logger = logging.getLogger(__name__)

mcp = FastMCP(
    name="npm Registry",
    instructions=(
        "Search the npm registry (registry.npmjs.org) for JavaScript packages. "
        "Use search_npm_packages to find packages by free text. "
        "Use get_npm_package to read the metadata of one version (defaults to the 'latest' dist-tag). "
        "Use get_package_readme to read a package's README. "
        "No API key required."
    ),
)


def _classify_http_error(status_code: int) -> str:
    """Classify a registry status code into an agent-friendly recovery message.

    LEARN: RETRYABLE means the same call may succeed later; PERMANENT means the
    agent has to change the package name, version or query first.
    """
    match status_code:
        case 429:
            return "RETRYABLE: Rate limited by the npm registry. Wait 60 seconds, then retry the same request."
        case 404:
            return (
                "PERMANENT: Package not found in the npm registry (404). Check the spelling, "
                "and encode scoped names as @scope%2Fname."
            )
        case s if 500 <= s < 600:  # noqa: PLR2004
            return f"RETRYABLE: The npm registry returned server error ({s}). Retry in 30 seconds."
        case _:
            return f"PERMANENT: Unexpected HTTP {status_code} from the npm registry. Check {NPM_REGISTRY_URL} manually."


def _recovery_message(exc: RegistryError) -> str:
    logger.info("npm registry call for %s failed: %s", exc.url, exc)
    if isinstance(exc, UnexpectedStatusError):
        return _classify_http_error(exc.status_code)
    if isinstance(exc, TransportError):
        return "RETRYABLE: Could not reach registry.npmjs.org (network error or timeout). Retry in 30 seconds."
    if isinstance(exc, DecodeError):
        return "PERMANENT: The npm registry sent a response that could not be decoded. Try a different package or query."
    return f"PERMANENT: npm registry request failed: {exc}"


def _require_name(name: str) -> None:
    if not name.strip():
        msg = "PERMANENT: Provide a package name (e.g. 'taita')."
        raise ToolError(msg)


def _truncate_readme(content: str, max_length: int) -> str:
    """Truncate README content if it exceeds max_length, noting the full length."""
    if max_length > 0 and len(content) > max_length:
        truncation_msg = f"\n\n... [truncated, full README is {len(content)} chars. Pass max_length=0 for full.]"
        return content[:max_length] + truncation_msg
    return content


@mcp.tool
async def search_npm_packages(  # noqa: PLR0913, PLR0917
    query: str = "",
    size: int = 0,
    offset: int = 0,
    quality: float = 0.0,
    popularity: float = 0.0,
    maintenance: float = 0.0,
) -> SearchResults:
    """Search the npm registry for packages matching a free-text query.

    This is a QUERY tool: read-only, safe to call multiple times.

    Args:
        query: Free-text search (e.g. "command palette", "yaml parser").
        size: Number of results to return. 0 uses the registry default (20).
        offset: Offset of the first result, for paging. 0 starts at the top.
        quality: Weight of the quality sub-score in ranking. 0 uses the registry default.
        popularity: Weight of the popularity sub-score in ranking. 0 uses the registry default.
        maintenance: Weight of the maintenance sub-score in ranking. 0 uses the registry default.

    Results keep the registry's relevance order. `total` is the number of matches,
    which may exceed the number returned; pass offset=<offset + size> for more.
    After finding a package, use get_npm_package(name) for its metadata.
    """
    if not query.strip():
        msg = "PERMANENT: Provide a search query (e.g. 'command palette')."
        raise ToolError(msg)

    options = SearchOptions(
        size=size,
        from_=offset,
        quality=quality,
        popularity=popularity,
        maintenance=maintenance,
    )
    try:
        return await search(query, options)
    except RegistryError as exc:
        raise ToolError(_recovery_message(exc)) from exc


@mcp.tool
async def get_npm_package(name: str, version: str = "latest") -> GetPackageVersion:
    """Fetch the metadata of one published version of an npm package.

    This is a QUERY tool: read-only, safe to call multiple times.

    Args:
        name: Package name (e.g. "taita"). Scoped names must be encoded: "@types%2Fnode".
        version: A dist-tag (e.g. "latest", "next") or an exact version (e.g. "1.2.0").

    Returns the version's description, license, repository, dependencies, dist
    (tarball, integrity) and maintainers. Use get_package_readme(name) for the README.
    """
    _require_name(name)
    try:
        package = await fetch_package(name)
    except RegistryError as exc:
        raise ToolError(_recovery_message(exc)) from exc

    resolved = package.version_for(version)
    if resolved is None:
        tags = ", ".join(sorted(package.dist_tags)) or "none"
        msg = f"PERMANENT: {name} has no version or dist-tag '{version}'. Known dist-tags: {tags}."
        raise ToolError(msg)
    return resolved


@mcp.tool
async def get_package_readme(name: str, max_length: int = 4000) -> str:
    """Fetch the README of an npm package as published to the registry.

    This is a QUERY tool: read-only, safe to call multiple times.

    Args:
        name: Package name (e.g. "taita"). Scoped names must be encoded: "@types%2Fnode".
        max_length: Maximum characters to return (default 4000). Set to 0 for full content.
            Larger values use more tokens.

    Returns the README content, usually markdown. If the README is longer than
    max_length, it is truncated with a note about the full length.
    """
    _require_name(name)
    try:
        package = await fetch_package(name)
    except RegistryError as exc:
        raise ToolError(_recovery_message(exc)) from exc

    if not package.readme:
        return f"No README published for {name}. Check https://www.npmjs.com/package/{name} manually."
    return _truncate_readme(package.readme, max_length)
