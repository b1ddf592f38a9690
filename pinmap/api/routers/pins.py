"""/pins routers that delegate to the pin store via DI."""

from fastapi import APIRouter, Depends, Query

from pinmap.api.deps import get_pin_store
from pinmap.schemas.common import ErrorResponse
from pinmap.schemas.pins import NearbyPinItem, PinCreatedResponse, PinCreateRequest
from pinmap.services.pin_store import PinStore

router = APIRouter(prefix="/pins", tags=["pins"])


@router.post(
    "",
    status_code=201,
    response_model=PinCreatedResponse,
    summary="Create a pin",
    responses={
        400: {"model": ErrorResponse, "description": "validation error"},
        500: {"model": ErrorResponse, "description": "internal error"},
    },
)
async def create_pin(
    payload: PinCreateRequest,
    store: PinStore = Depends(get_pin_store),
):
    pin = (await store.create(payload.name, payload.lat, payload.lng)).unwrap()
    return PinCreatedResponse(id=pin.id)


@router.get(
    "",
    response_model=list[NearbyPinItem],
    summary="Pins within a radius, nearest first",
    description=(
        "Returns every pin within `radius` metres (1..10000) of `near` (`lat,lng`),\n"
        "ordered by great-circle distance ascending."
    ),
    responses={400: {"model": ErrorResponse, "description": "validation error"}},
)
async def nearby_pins(
    near: str | None = Query(None, description="Reference point as `lat,lng`"),
    radius: str | None = Query(None, description="Radius in metres (integer, 1..10000)"),
    store: PinStore = Depends(get_pin_store),
):
    items = store.nearby(near, radius).unwrap()
    return [NearbyPinItem.from_nearby(item) for item in items]
