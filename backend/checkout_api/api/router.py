from fastapi import APIRouter

from checkout_api.api.checkout import router as checkout_router
from checkout_api.api.session_status import router as session_status_router
from checkout_api.domain.schema import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True)


router.include_router(checkout_router)
router.include_router(session_status_router)
