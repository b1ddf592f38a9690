from fastapi import APIRouter, Depends, Query

from pinmap.api.deps import get_catalog_index
from pinmap.schemas.common import ErrorResponse
from pinmap.schemas.search import PoiItem
from pinmap.services.catalog import CatalogSearchIndex

router = APIRouter(prefix="/search", tags=["search"])


@router.get(
    "",
    response_model=list[PoiItem],
    summary="Catalog search (substring)",
    description="Case-insensitive substring match on name or category, in catalog order.",
    responses={400: {"model": ErrorResponse, "description": "empty query"}},
)
async def search_catalog(
    q: str | None = Query(None, description="Text to look for in name or category"),
    catalog: CatalogSearchIndex = Depends(get_catalog_index),
):
    return [PoiItem.from_poi(poi) for poi in catalog.search(q).unwrap()]
