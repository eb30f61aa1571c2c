"""Live Chia network data fetcher (Space Farmers pool stats API)."""

import logging
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError

from app.core.config import POOL_STATS_URL, POOL_STATS_TIMEOUT_SECONDS
from app.models.pool_stats import PoolStatsResponse
from app.models.snapshot import NetworkSnapshot


log = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a network snapshot cannot be fetched."""


class FetchTransportError(FetchError):
    """The pool stats API could not be reached or answered with a non-2xx status."""


class FetchParseError(FetchError):
    """The pool stats API answered with a document that cannot be used."""


def _fetch_pool_stats() -> PoolStatsResponse:
    """
    Fetch and decode the pool stats document.

    Raises:
        FetchTransportError: On network failure or a non-2xx status
        FetchParseError: On a body that is not a pool stats document
    """
    try:
        response = httpx.get(POOL_STATS_URL, timeout=POOL_STATS_TIMEOUT_SECONDS)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise FetchTransportError(f"Failed to fetch pool stats: {str(e)}") from e

    try:
        return PoolStatsResponse.model_validate(response.json())
    except ValidationError as e:
        raise FetchParseError(
            f"Unexpected pool stats format ({e.error_count()} errors)"
        ) from e
    except ValueError as e:
        raise FetchParseError(f"Pool stats response is not valid JSON: {str(e)}") from e


def fetch_network_snapshot() -> NetworkSnapshot:
    """
    Fetch a snapshot of live Chia network figures.

    A response is only accepted if its status is "OK" (any case) and it
    carries a netspace figure.

    Returns:
        NetworkSnapshot with netspace, XCH price and peak height

    Raises:
        FetchTransportError: On network failure or a non-2xx status
        FetchParseError: On a malformed, non-OK or incomplete response
    """
    try:
        stats = _fetch_pool_stats()
    except FetchError as e:
        log.warning("Pool stats fetch failed: %s", e)
        raise

    if not stats.is_ok:
        log.warning("Pool stats status was %r", stats.status)
        raise FetchParseError(f"Pool stats status was {stats.status!r}, expected 'OK'")

    netspace_bytes = stats.netspace_bytes
    if netspace_bytes is None:
        log.warning("Pool stats response has no netspace figure")
        raise FetchParseError("Netspace not available from pool stats")

    snapshot = NetworkSnapshot(
        netspace_bytes=netspace_bytes,
        xch_price_usd=stats.xch_price_usd,
        block_height=stats.data.xch.peak_height,
        fetched_at=datetime.now(timezone.utc),
    )
    log.debug(
        "Fetched pool stats: height=%s netspace=%.0f bytes price=%s",
        snapshot.block_height,
        netspace_bytes,
        snapshot.xch_price_usd,
    )
    return snapshot


def pool_stats_source() -> str:
    """Host name of the configured pool stats API, used to label snapshots."""
    try:
        return httpx.URL(POOL_STATS_URL).host or POOL_STATS_URL
    except httpx.InvalidURL:
        return POOL_STATS_URL
