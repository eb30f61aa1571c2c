"""API v1 route handlers."""

from typing import List
from fastapi import APIRouter, Query

from app.models.requests import CalculationRequest, InputsUpdate
from app.models.responses import (
    ChanceResponse,
    InputsResponse,
    LiveDataResponse,
    MetricsResponse,
)
from app.models.snapshot import NetworkSnapshot
from app.models.assumptions import Assumptions, get_default_assumptions
from app.models.plots import PlotSize, PLOT_SIZE_LIBRARY, plot_size_gib
from app.engine.calc import calculate_farming_metrics
from app.engine.session import FarmingSession, get_session


router = APIRouter()


def _inputs_response(session: FarmingSession) -> InputsResponse:
    inputs = session.inputs
    return InputsResponse(
        unit_count=inputs.unit_count,
        proof_size=inputs.proof_size,
        compression_level=inputs.compression_level,
        plot_size_gib=plot_size_gib(inputs.proof_size, inputs.compression_level),
    )


@router.get("/plot-sizes", response_model=List[PlotSize])
def get_plot_sizes() -> List[PlotSize]:
    """Get the plot size library (every k-size and compression level)."""
    return PLOT_SIZE_LIBRARY


@router.get("/assumptions", response_model=Assumptions)
def get_assumptions() -> Assumptions:
    """Get current calculation assumptions and version."""
    return get_default_assumptions()


@router.post("/calculate", response_model=MetricsResponse)
def calculate(request: CalculationRequest) -> MetricsResponse:
    """Calculate farming metrics from explicit inputs and network figures."""
    snapshot = NetworkSnapshot(
        netspace_bytes=request.netspace_bytes,
        xch_price_usd=request.xch_price_usd,
        block_height=request.block_height,
    )
    return calculate_farming_metrics(snapshot, request, request.assumptions_version)


@router.get("/live", response_model=LiveDataResponse)
async def get_live_data() -> LiveDataResponse:
    """
    Get the network figures held by the session.

    Fetches from the Space Farmers pool stats API on first use; after that
    the figures only change through /v1/refresh.
    """
    session = get_session()
    await session.load_if_needed()
    return session.live_data()


@router.post("/refresh", response_model=LiveDataResponse)
async def refresh() -> LiveDataResponse:
    """
    Fetch fresh network figures.

    On failure the previous figures are kept and `error` describes the problem.
    """
    session = get_session()
    await session.refresh()
    return session.live_data()


@router.get("/inputs", response_model=InputsResponse)
def get_inputs() -> InputsResponse:
    """Get the session's farm inputs."""
    return _inputs_response(get_session())


@router.put("/inputs", response_model=InputsResponse)
def update_inputs(update: InputsUpdate) -> InputsResponse:
    """Change the session's farm inputs. Plot counts below one become one."""
    session = get_session()
    if update.unit_count is not None:
        session.set_unit_count(update.unit_count)
    if update.unit_count_delta is not None:
        session.adjust_unit_count(update.unit_count_delta)
    if update.proof_size is not None:
        session.set_proof_size(update.proof_size)
    if update.compression_level is not None:
        session.set_compression_level(update.compression_level)
    return _inputs_response(session)


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics() -> MetricsResponse:
    """Get farming metrics for the session's inputs and network figures."""
    return get_session().metrics()


@router.get("/chance", response_model=ChanceResponse)
def get_chance(hours: float = Query(..., ge=0, description="Window length in hours")) -> ChanceResponse:
    """Get the chance of winning at least one block within the given window."""
    return ChanceResponse(hours=hours, chance=get_session().chance_to_win(hours))
