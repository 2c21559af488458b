"""Simulation API endpoints."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from backend.core.logging_config import get_logger
from backend.models.simulation_models import (
    HypergeometricRequest,
    HypergeometricResponse,
    SimulationRequest,
    SimulationResponse,
)
from backend.models.validation_models import InputValidationResult
from backend.services.engine_config import get_engine_config
from backend.services.probability import (
    hypergeometric_at_least,
    hypergeometric_probability,
)
from backend.services.report import build_response
from backend.services.simulator import CombinationLimitError, run_request
from backend.services.validators import InputValidator

router = APIRouter()
logger = get_logger(__name__)


def get_validator() -> InputValidator:
    """Dependency to get an input validator."""
    return InputValidator()


@router.post("/run", response_model=SimulationResponse)
async def run_simulation(
    request: SimulationRequest,
    validator: InputValidator = Depends(get_validator),
):
    """Compute draw probabilities for a deck snapshot.

    Requests with many combinations are computed in a worker thread so the
    event loop stays responsive, bounded by the configured timeout.
    """
    validation = validator.validate(request)
    if not validation.valid:
        raise HTTPException(status_code=422, detail=validation.model_dump())

    config = get_engine_config()
    try:
        if len(request.combinations) >= config.background_threshold:
            result = await asyncio.wait_for(
                asyncio.to_thread(run_request, request),
                timeout=config.timeout_seconds,
            )
        else:
            result = run_request(request)
    except CombinationLimitError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except asyncio.TimeoutError:
        logger.error(
            "Simulation timed out",
            extra={"extra_data": {"combinations": len(request.combinations)}},
        )
        raise HTTPException(
            status_code=504,
            detail=f"Simulation timed out after {config.timeout_seconds}s",
        )
    except Exception as e:
        logger.error("Simulation failed", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Simulation failed: {str(e)}")

    warnings = [warning.message for warning in validation.warnings]
    return build_response(request, result, warnings)


@router.post("/validate", response_model=InputValidationResult)
async def validate_request(
    request: SimulationRequest,
    validator: InputValidator = Depends(get_validator),
):
    """Check a deck snapshot without computing probabilities."""
    return validator.validate(request)


@router.post("/hypergeometric", response_model=HypergeometricResponse)
async def hypergeometric(query: HypergeometricRequest):
    """Exact and cumulative probability of drawing k copies of a card."""
    if query.sample_size > query.population_size:
        raise HTTPException(
            status_code=422, detail="sample_size must not exceed population_size"
        )
    if query.successes_in_population > query.population_size:
        raise HTTPException(
            status_code=422,
            detail="successes_in_population must not exceed population_size",
        )

    return HypergeometricResponse(
        exact=hypergeometric_probability(
            query.population_size,
            query.successes_in_population,
            query.sample_size,
            query.successes_in_sample,
        ),
        at_least=hypergeometric_at_least(
            query.population_size,
            query.successes_in_population,
            query.sample_size,
            query.successes_in_sample,
        ),
    )
