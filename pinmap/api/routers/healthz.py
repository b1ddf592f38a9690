# pinmap/api/routers/healthz.py
from fastapi import APIRouter

from pinmap.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Liveness probe",
    description="Always 200 while the process serves requests; touches no storage.",
)
async def healthz():
    return {"ok": True}
