"""
Service catalog endpoints.

``POST /services`` serves two kinds of clients: the admin form posts
``multipart/form-data`` (validated, with optional photo), while older
clients post a JSON document that is inserted without any checks.
The permissive JSON path is also exposed explicitly as
``POST /services/raw``.  Listing is public; deleting requires an
authenticated admin session.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile

from services_catalog_api.app.core.errors import ValidationError
from services_catalog_api.app.core.security import require_auth
from services_catalog_api.app.core.sessions import SessionContext
from services_catalog_api.app.schemas.service import DeleteResult, ServiceRead
from services_catalog_api.app.services.asset_store import AssetStore
from services_catalog_api.app.services.catalog_service import CatalogService

router = APIRouter()


def _form_text(form: FormData, key: str) -> Optional[str]:
    value = form.get(key)
    return value if isinstance(value, str) else None


def _form_list(form: FormData, *keys: str) -> List[str]:
    # Browsers send repeated ``description`` or ``description[]`` fields.
    values: List[str] = []
    for key in keys:
        values.extend(v for v in form.getlist(key) if isinstance(v, str))
    return values


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_201_CREATED: {"model": ServiceRead}},
    summary="Create a service (multipart) or insert a raw JSON document",
)
async def create_service(request: Request) -> Any:
    """Создать услугу.

    ``multipart/form-data``: поля ``name``, ``price``, ``description``
    (одно или несколько значений) и необязательное фото ``photo``
    (JPEG/PNG, до 5 МБ).  Фото сохраняется до проверки полей и
    удаляется, если проверка или запись в базу не удалась.

    ``application/json``: документ сохраняется как есть (см.
    ``POST /services/raw``).
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            document = await request.json()
        except ValueError:
            raise ValidationError("Некорректный JSON")
        if not isinstance(document, dict):
            raise ValidationError("Некорректный JSON")
        stored = await CatalogService.insert_raw(document)
        return JSONResponse(status_code=status.HTTP_200_OK, content=stored)

    async with request.form() as form:
        photo = form.get("photo")
        photo_filename = None
        if isinstance(photo, UploadFile) and photo.filename:
            photo_filename = await AssetStore.save(photo)
        stored = await CatalogService.create_service(
            name=_form_text(form, "name"),
            price=_form_text(form, "price"),
            description=_form_list(form, "description", "description[]"),
            photo_filename=photo_filename,
        )
    created = ServiceRead.model_validate(stored)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=created.model_dump(by_alias=True))


@router.post("/raw", summary="Insert a service document without validation")
async def insert_raw_service(document: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Сохранить документ услуги без проверки полей и без файла.

    Маршрут не требует авторизации; оставлен для совместимости со
    старыми клиентами.
    """
    return await CatalogService.insert_raw(document)


@router.get("", summary="List services")
async def list_services() -> List[Dict[str, Any]]:
    """Получить список услуг в порядке добавления."""
    return await CatalogService.list_services()


@router.delete("/{service_id}", response_model=DeleteResult)
async def delete_service(
    service_id: str = Path(..., description="ID услуги"),
    session: SessionContext = Depends(require_auth),
) -> DeleteResult:
    """Удалить услугу и её изображение (только администратор)."""
    message = await CatalogService.delete_service(service_id)
    return DeleteResult(message=message)
