"""Session tests: inputs, refresh lifecycle and the /v1/inputs and /v1/chance endpoints."""

import asyncio
import threading
import time

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.engine.live_data import FetchTransportError
from app.engine.session import FarmingSession, get_session, reset_session
from app.models.plots import CompressionLevel, ProofSize
from app.models.snapshot import NetworkSnapshot


client = TestClient(app)


def setup_function():
    reset_session(FarmingSession(min_refresh_seconds=0))


def make_snapshot(block_height=1_000_000) -> NetworkSnapshot:
    return NetworkSnapshot(
        netspace_bytes=1000 * 1024**4,
        xch_price_usd=20.0,
        block_height=block_height,
    )


def test_refresh_publishes_snapshot():
    snapshot = make_snapshot()
    session = FarmingSession(fetcher=lambda: snapshot, min_refresh_seconds=0)

    assert asyncio.run(session.refresh()) is True
    assert session.snapshot is snapshot
    assert session.last_updated == snapshot.fetched_at
    assert session.error_message is None
    assert session.is_refreshing is False


def test_failed_refresh_keeps_snapshot():
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) > 1:
            raise FetchTransportError("Failed to fetch pool stats: timeout")
        return make_snapshot()

    session = FarmingSession(fetcher=fetcher, min_refresh_seconds=0)
    asyncio.run(session.refresh())
    first = session.snapshot

    assert asyncio.run(session.refresh()) is False
    assert session.snapshot is first
    assert session.error_message == "Failed to fetch pool stats: timeout"
    assert session.is_refreshing is False


def test_unexpected_fetch_error_is_reported():
    """Test an error outside the fetch error types still ends the refresh cleanly."""
    snapshot = make_snapshot()
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) > 1:
            raise RuntimeError("pool stats URL is malformed")
        return snapshot

    session = FarmingSession(fetcher=fetcher, min_refresh_seconds=0)
    asyncio.run(session.refresh())

    assert asyncio.run(session.refresh()) is False
    assert session.snapshot is snapshot
    assert session.is_refreshing is False
    assert "pool stats URL is malformed" in session.error_message


def test_refresh_endpoint_survives_unexpected_error():
    def fetcher():
        raise OverflowError("int too large to convert to float")

    reset_session(FarmingSession(fetcher=fetcher, min_refresh_seconds=0))
    response = client.post("/v1/refresh")

    assert response.status_code == 200
    data = response.json()
    assert data["is_refreshing"] is False
    assert "int too large" in data["error"]


def test_stale_refresh_does_not_overwrite_newer_snapshot():
    """Test a slow, older refresh finishing last is discarded."""
    slow = make_snapshot(block_height=1)
    fast = make_snapshot(block_height=2)
    release_slow = threading.Event()
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) == 1:
            release_slow.wait(timeout=5)
            return slow
        return fast

    session = FarmingSession(fetcher=fetcher, min_refresh_seconds=0)

    async def run():
        first = asyncio.create_task(session.refresh())
        await asyncio.sleep(0.05)
        second_published = await session.refresh()
        release_slow.set()
        first_published = await first
        return first_published, second_published

    first_published, second_published = asyncio.run(run())

    assert second_published is True
    assert first_published is False
    assert session.snapshot.block_height == 2


def test_refresh_lasts_minimum_duration():
    session = FarmingSession(fetcher=make_snapshot, min_refresh_seconds=0.2)
    start = time.monotonic()
    asyncio.run(session.refresh())
    assert time.monotonic() - start >= 0.2


def test_load_if_needed_fetches_once():
    calls = []

    def fetcher():
        calls.append(1)
        return make_snapshot()

    session = FarmingSession(fetcher=fetcher, min_refresh_seconds=0)
    asyncio.run(session.load_if_needed())
    asyncio.run(session.load_if_needed())
    assert len(calls) == 1


def test_input_mutators():
    session = FarmingSession(fetcher=make_snapshot, min_refresh_seconds=0)

    session.set_unit_count(0)
    assert session.inputs.unit_count == 1

    session.set_unit_count(250)
    session.adjust_unit_count(-10)
    assert session.inputs.unit_count == 240

    session.adjust_unit_count(-1000)
    assert session.inputs.unit_count == 1

    session.set_proof_size(ProofSize.K34)
    session.set_compression_level(CompressionLevel.C9)
    assert session.metrics().plot_size_gib == 315.5


def test_metrics_recomputed_after_mutation():
    session = FarmingSession(fetcher=make_snapshot, min_refresh_seconds=0)
    asyncio.run(session.refresh())

    before = session.metrics().owned_storage_share
    session.set_unit_count(session.inputs.unit_count * 2)
    assert session.metrics().owned_storage_share == pytest.approx(before * 2)


def test_chance_to_win_accessor():
    session = FarmingSession(fetcher=make_snapshot, min_refresh_seconds=0)
    assert session.chance_to_win(24) is None

    asyncio.run(session.refresh())
    assert session.chance_to_win(0) == 0.0
    assert 0 < session.chance_to_win(1) < session.chance_to_win(24)


def test_get_session_is_shared():
    assert get_session() is get_session()


def test_inputs_endpoint_round_trip():
    response = client.get("/v1/inputs")
    assert response.status_code == 200
    assert response.json() == {
        "unit_count": 10,
        "proof_size": 32,
        "compression_level": 0,
        "plot_size_gib": 101.4,
    }

    response = client.put(
        "/v1/inputs",
        json={"unit_count": 100, "proof_size": 33, "compression_level": 7},
    )
    assert response.status_code == 200
    assert response.json() == {
        "unit_count": 100,
        "proof_size": 33,
        "compression_level": 7,
        "plot_size_gib": 160.6,
    }
    assert get_session().inputs.unit_count == 100


def test_inputs_endpoint_clamps_and_adjusts():
    data = client.put("/v1/inputs", json={"unit_count": 5, "unit_count_delta": -10}).json()
    assert data["unit_count"] == 1

    data = client.put("/v1/inputs", json={"unit_count_delta": 10}).json()
    assert data["unit_count"] == 11


def test_inputs_endpoint_rejects_unknown_compression():
    response = client.put("/v1/inputs", json={"compression_level": 8})
    assert response.status_code == 422
    assert get_session().inputs.compression_level == CompressionLevel.C0


def test_chance_endpoint():
    response = client.get("/v1/chance", params={"hours": 24})
    assert response.status_code == 200
    assert response.json() == {"hours": 24.0, "chance": None}

    reset_session(FarmingSession(fetcher=make_snapshot, min_refresh_seconds=0))
    asyncio.run(get_session().refresh())

    data = client.get("/v1/chance", params={"hours": 24}).json()
    assert 0 < data["chance"] < 1

    response = client.get("/v1/chance", params={"hours": -1})
    assert response.status_code == 422


def test_get_session_creates_one_session_across_threads():
    import app.engine.session as session_module

    session_module._session = None
    barrier = threading.Barrier(8)
    seen = []

    def first_request():
        barrier.wait()
        seen.append(get_session())

    threads = [threading.Thread(target=first_request) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(seen) == 8
    assert all(session is seen[0] for session in seen)
