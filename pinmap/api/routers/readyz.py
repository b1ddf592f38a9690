from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pinmap.api.deps import get_health_service, get_pin_store, get_settings_dep
from pinmap.core.config import Settings
from pinmap.core.exceptions import InternalError
from pinmap.core.startup import is_migration_completed, last_migration_error
from pinmap.schemas.common import OkResponse
from pinmap.services.health import HealthService
from pinmap.services.pin_store import PinStore

router = APIRouter(prefix="/readyz", tags=["health"])


def _unavailable(code: str, message: str, detail: str | None = None) -> JSONResponse:
    payload = {"error": {"code": code, "message": message}}
    if detail:
        payload["error"]["detail"] = detail
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=payload)


@router.get(
    "",
    response_model=OkResponse,
    summary="Readiness probe",
    description=(
        "503 until migrations ran and the spatial index was loaded from storage;\n"
        "afterwards pings the pin repository."
    ),
)
async def readyz(
    settings: Settings = Depends(get_settings_dep),
    store: PinStore = Depends(get_pin_store),
    svc: HealthService = Depends(get_health_service),
):
    if settings.database_url and not is_migration_completed():
        return _unavailable(
            "migrations_pending",
            "Database migrations are still running",
            last_migration_error(),
        )
    if not store.loaded:
        return _unavailable("index_loading", "Spatial index is still loading")
    try:
        return await svc.ok()
    except InternalError:
        return _unavailable("storage_unavailable", "Pin storage is unavailable")
