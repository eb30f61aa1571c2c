"""In-process calculator session: farm inputs, latest snapshot and refresh lifecycle."""

import asyncio
import logging
import threading
import time
from datetime import datetime
from typing import Callable, Optional

from app.core.config import MIN_REFRESH_SECONDS
from app.models.plots import CompressionLevel, ProofSize
from app.models.requests import FarmInputs
from app.models.responses import LiveDataResponse, MetricsResponse
from app.models.snapshot import NetworkSnapshot
from app.engine.calc import calculate_farming_metrics, chance_to_win_within
from app.engine.live_data import FetchError, fetch_network_snapshot, pool_stats_source


log = logging.getLogger(__name__)


class FarmingSession:
    """
    Holds the state behind one calculator.

    The snapshot is only ever replaced as a whole by a successful refresh.
    Metrics are recomputed on every read.
    """

    def __init__(
        self,
        fetcher: Callable[[], NetworkSnapshot] = fetch_network_snapshot,
        min_refresh_seconds: float = MIN_REFRESH_SECONDS,
    ):
        self.inputs = FarmInputs()
        self.snapshot: Optional[NetworkSnapshot] = None
        self.error_message: Optional[str] = None
        self.is_refreshing = False
        self._fetcher = fetcher
        self._min_refresh_seconds = min_refresh_seconds
        self._generation = 0

    @property
    def last_updated(self) -> Optional[datetime]:
        return self.snapshot.fetched_at if self.snapshot else None

    async def refresh(self) -> bool:
        """
        Fetch a new snapshot and publish it.

        A refresh started later supersedes this one: if another refresh
        begins while this one is in flight, this one's result is dropped.
        On failure the previous snapshot is kept and error_message is set.

        Returns:
            True if a new snapshot was published
        """
        self._generation += 1
        generation = self._generation
        self.error_message = None
        self.is_refreshing = True
        start = time.monotonic()

        snapshot = None
        error = None
        try:
            try:
                snapshot = await asyncio.to_thread(self._fetcher)
            except FetchError as e:
                error = str(e)
            except Exception as e:
                log.exception("Unexpected error during refresh #%d", generation)
                error = f"Failed to refresh network data: {str(e)}"

            # Keep the refresh visible for a minimum time
            remaining = self._min_refresh_seconds - (time.monotonic() - start)
            if remaining > 0:
                await asyncio.sleep(remaining)
        finally:
            if generation == self._generation:
                self.is_refreshing = False

        if generation != self._generation:
            log.info("Discarding result of superseded refresh #%d", generation)
            return False

        if error is not None:
            self.error_message = error
            return False

        self.snapshot = snapshot
        return True

    async def load_if_needed(self) -> None:
        """Refresh only if no snapshot has been loaded yet."""
        if self.snapshot is None:
            await self.refresh()

    def set_unit_count(self, unit_count: int) -> None:
        self.inputs.unit_count = unit_count

    def adjust_unit_count(self, delta: int) -> None:
        """Move the plot count by delta, never below one."""
        self.inputs.unit_count = self.inputs.unit_count + delta

    def set_proof_size(self, proof_size: ProofSize) -> None:
        self.inputs.proof_size = proof_size

    def set_compression_level(self, compression_level: CompressionLevel) -> None:
        self.inputs.compression_level = compression_level

    def metrics(self) -> MetricsResponse:
        return calculate_farming_metrics(self.snapshot, self.inputs)

    def chance_to_win(self, hours: float) -> Optional[float]:
        return chance_to_win_within(hours, self.snapshot, self.inputs)

    def live_data(self) -> LiveDataResponse:
        """Current network figures and refresh status."""
        snapshot = self.snapshot
        return LiveDataResponse(
            source=pool_stats_source(),
            netspace_bytes=snapshot.netspace_bytes if snapshot else None,
            xch_price_usd=snapshot.xch_price_usd if snapshot else None,
            block_height=snapshot.block_height if snapshot else None,
            updated_at=self.last_updated,
            is_refreshing=self.is_refreshing,
            error=self.error_message,
        )


# Process-wide session
_session: Optional[FarmingSession] = None
_session_lock = threading.Lock()


def get_session() -> FarmingSession:
    """Return the process-wide session, creating it on first use."""
    global _session
    with _session_lock:
        if _session is None:
            _session = FarmingSession()
        return _session


def reset_session(session: Optional[FarmingSession] = None) -> FarmingSession:
    """Replace the process-wide session. Useful for testing."""
    global _session
    with _session_lock:
        _session = session or FarmingSession()
        return _session
