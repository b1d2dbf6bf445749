from fastapi import APIRouter

from matchingref.api.schemas import HealthResponse
from matchingref.core.hints import HINT_STRATEGIES

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report liveness and the diagnostic kinds that have hint support."""
    return HealthResponse(kinds=sorted(HINT_STRATEGIES))
