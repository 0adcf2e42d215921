"""Introspection loading and caching."""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

import requests

from . import utils
from .config import Config

logger = logging.getLogger(__name__)


@dataclass
class IntrospectionProfile:
    """Raw introspection response with metadata."""

    source: str
    fetched_at: str
    hash: str
    text: str


def load_introspection(
    url: Optional[str] = None,
    schema_file: Optional[str] = None,
    cfg: Optional[Config] = None,
    allow_cache: bool = True,
    refresh: bool = False,
    token: Optional[str] = None,
) -> IntrospectionProfile:
    """
    Load an introspection response from file or via HTTP.

    Args:
        url: GraphQL endpoint URL
        schema_file: Path to a saved introspection response
        cfg: Configuration object
        allow_cache: Whether to use cached responses
        refresh: Force refresh even if cached
        token: Optional bearer token for authentication

    Returns:
        IntrospectionProfile with the raw response text

    Raises:
        ValueError: If neither url nor schema_file provided
    """
    cfg = cfg or Config()

    # Load from file
    if schema_file:
        text = utils.read_text(schema_file)
        return IntrospectionProfile(
            source=f"file://{schema_file}",
            fetched_at=utils.now_iso(),
            hash=utils.sha256(text),
            text=text,
        )

    if not url:
        raise ValueError("No URL or schema file provided")

    cache_path = cache_path_for(url, cfg)

    # Try cache first
    if allow_cache and utils.exists(cache_path) and not refresh:
        logger.debug("Using cached introspection for %s from %s", url, cache_path)
        text = utils.read_text(cache_path)
        return IntrospectionProfile(
            source=url,
            fetched_at=utils.now_iso(),
            hash=utils.sha256(text),
            text=text,
        )

    # Fetch from server
    text = introspect(url, token, timeout=cfg.timeout)
    prof = IntrospectionProfile(
        source=url,
        fetched_at=utils.now_iso(),
        hash=utils.sha256(text),
        text=text,
    )

    # Save to cache
    utils.ensure_dir(utils.dirname(cache_path))
    utils.write_text(cache_path, text)
    logger.info("Cached introspection for %s at %s", url, cache_path)

    return prof


def introspect(graphql_url: str, token: Optional[str] = None, timeout: int = 30) -> str:
    """
    Run the introspection query over HTTP.

    Args:
        graphql_url: GraphQL endpoint URL
        token: Optional bearer token for authentication
        timeout: Request timeout in seconds

    Returns:
        Raw response body, the full ``{"data": {"__schema": ...}}`` envelope

    Raises:
        RuntimeError: If the request fails or the server does not answer with JSON
    """
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    resp = requests.post(
        graphql_url, json={"query": utils.INTROSPECTION_QUERY}, headers=headers, timeout=timeout
    )

    if resp.status_code != 200:
        raise RuntimeError(f"Introspection failed with status {resp.status_code}")

    # Only checks the body is JSON; decoding happens in parser.
    utils.safe_json_response(resp)
    return resp.text


def cache_path_for(url: str, cfg: Config) -> str:
    """
    Get cache path for an endpoint URL.

    Args:
        url: GraphQL endpoint URL
        cfg: Configuration object

    Returns:
        Path to cache file
    """
    host = utils.sanitize_host(url)
    return utils.join(cfg.schema_cache_dir, f"{host}.json")


def profile_metadata(prof: IntrospectionProfile) -> dict:
    """Profile fields for display, without the response body."""
    data = asdict(prof)
    data.pop("text")
    return data
