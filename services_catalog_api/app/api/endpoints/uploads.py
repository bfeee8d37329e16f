"""Serve uploaded service photos from the asset store."""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from services_catalog_api.app.core.errors import NotFoundError
from services_catalog_api.app.services.asset_store import AssetStore, media_type_for

router = APIRouter()


@router.get("/{filename}", response_class=FileResponse)
async def get_upload(filename: str) -> FileResponse:
    path = AssetStore.path_for(filename)
    if path is None:
        raise NotFoundError("Файл не найден")
    return FileResponse(
        path,
        media_type=media_type_for(path.name),
        headers={"X-Content-Type-Options": "nosniff"},
    )
