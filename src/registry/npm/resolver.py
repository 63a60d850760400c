"""Latest-version resolution for npm package names.

One batch lookup goes to the npm metadata service first. If that fails in
any way, every name is looked up on its own against the npm registry, all
requests in flight together. Failures never propagate: a name that cannot be
resolved is simply missing from the returned mapping.
"""

from __future__ import annotations

import asyncio
import logging
import urllib.parse
from typing import Any, Dict, Iterable, Optional, Protocol, Tuple

from constants import Constants
from common.http_client import AsyncHttpClient
from common.logging_utils import extra_context, is_debug_enabled, Timer

from .models import MalformedResponse, PackageVersion, decode_metadata, parse_entry

logger = logging.getLogger(__name__)


class JsonClient(Protocol):
    """Transport used by the resolver."""

    async def get_json(self, url: str, *, context: str) -> Tuple[int, Optional[Any]]:
        ...


def batch_url(names: Iterable[str]) -> str:
    """URL of the combined lookup; names are '+'-joined and encoded as one segment."""
    joined = "+".join(names)
    return Constants.REGISTRY_URL_NPM_META + urllib.parse.quote(joined, safe="!~*'()")


def single_url(name: str) -> str:
    """URL of the latest manifest for one (possibly scoped) name."""
    return f"{Constants.REGISTRY_URL_NPM}{urllib.parse.quote(name, safe='@/')}/latest"


def _is_success(status: int) -> bool:
    return 200 <= status < 300


async def _lookup_batch(client: JsonClient, names: list) -> Optional[Dict[str, str]]:
    """Return the batch mapping, or None when the batch must be abandoned."""
    url = batch_url(names)
    status, data = await client.get_json(url, context="npm-meta")
    if not _is_success(status) or data is None:
        logger.info(
            "Batch version lookup failed (status %s); falling back to per-package lookups",
            status or "unreachable",
            extra=extra_context(
                event="batch_lookup_failed",
                component="resolver",
                outcome="network_unavailable" if status == 0 else "lookup_failed",
                status_code=status or None,
                count=len(names),
            ),
        )
        return None
    try:
        decoded = decode_metadata(data)
    except MalformedResponse as exc:
        logger.info(
            "Batch version lookup returned malformed data (%s); falling back",
            exc,
            extra=extra_context(event="batch_lookup_failed", component="resolver", outcome="malformed"),
        )
        return None
    if is_debug_enabled(logger):
        logger.debug(
            "Batch lookup decoded",
            extra=extra_context(
                event="parse",
                component="resolver",
                action="batch",
                outcome=decoded.shape.value,
                count=len(decoded.entries),
            ),
        )
    return decoded.to_ranges()


async def _lookup_single(client: JsonClient, name: str) -> Optional[PackageVersion]:
    """Resolve one name; any failure yields None."""
    try:
        status, data = await client.get_json(single_url(name), context="npm")
    except Exception as exc:  # pylint: disable=broad-exception-caught
        # Injected transports may raise; a sibling lookup must never be affected
        logger.warning("Version lookup for %s raised: %s", name, exc)
        return None
    entry = parse_entry(data) if _is_success(status) else None
    if entry is None:
        logger.warning(
            "Could not resolve latest version of %s",
            name,
            extra=extra_context(
                event="name_lookup_failed",
                component="resolver",
                outcome="network_unavailable" if status == 0 else "lookup_failed",
                status_code=status or None,
                package=name,
            ),
        )
        return None
    return PackageVersion(name=name, version=entry.version)


async def _lookup_each(client: JsonClient, names: list) -> Dict[str, str]:
    results = await asyncio.gather(*(_lookup_single(client, name) for name in names))
    return {entry.name: entry.version_range for entry in results if entry is not None}


async def resolve(names: Iterable[str], client: Optional[JsonClient] = None) -> Dict[str, str]:
    """Resolve package names to ``^X.Y.Z`` ranges of their latest versions.

    Args:
        names: Package names; duplicates and order are irrelevant.
        client: Transport exposing ``get_json``. A fresh AsyncHttpClient is
            opened (and closed) when omitted.

    Returns:
        dict: name -> version range for every name that resolved. Names that
        could not be resolved are absent.
    """
    unique = sorted(set(names))
    if not unique:
        return {}

    if client is None:
        async with AsyncHttpClient() as owned:
            return await resolve(unique, owned)

    with Timer() as t:
        try:
            resolved = await _lookup_batch(client, unique)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.info("Batch version lookup raised (%s); falling back", exc)
            resolved = None
        if resolved is None:
            resolved = await _lookup_each(client, unique)

    if is_debug_enabled(logger):
        logger.debug(
            "Version resolution finished",
            extra=extra_context(
                event="function_exit",
                component="resolver",
                action="resolve",
                count=len(resolved),
                duration_ms=t.duration_ms(),
            ),
        )
    return resolved


def resolve_sync(names: Iterable[str], client: Optional[JsonClient] = None) -> Dict[str, str]:
    """Blocking wrapper around :func:`resolve` for the CLI."""
    return asyncio.run(resolve(names, client))
