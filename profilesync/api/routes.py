"""HTTP route handlers for profile import, lookup and selection."""

from __future__ import annotations

from typing import Any, Dict, List

import orjson
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from profilesync.config import Settings, get_settings
from profilesync.profiles.models import FieldName, Record
from profilesync.service import ProfileSyncService, get_service

from .schemas import (
    ActiveProfileModel,
    AutoDetectRequestModel,
    AutoDetectResponseModel,
    CredentialUpdateModel,
    ImportRequestModel,
    ImportResponseModel,
    ProfileDisplayModel,
    ProfileListItemModel,
    ProfileNameModel,
    SelectRequestModel,
)


router = APIRouter(prefix="/v1")


def _too_large(settings: Settings) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail={
            "error": "payload_too_large",
            "limit_bytes": settings.max_csv_bytes,
        },
    )


async def _read_body(http_request: Request, settings: Settings) -> bytes:
    header_length = http_request.headers.get("content-length")
    if header_length:
        try:
            content_length = int(header_length)
        except ValueError:
            content_length = None
        else:
            if content_length > settings.max_csv_bytes:
                raise _too_large(settings)

    body_bytes = await http_request.body()
    if body_bytes and len(body_bytes) > settings.max_csv_bytes:
        raise _too_large(settings)
    return body_bytes


def _parse_import_model(body_bytes: bytes) -> ImportRequestModel:
    try:
        data: Dict[str, Any] = orjson.loads(body_bytes) if body_bytes else {}
    except orjson.JSONDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_json", "details": str(exc)},
        ) from exc

    try:
        return ImportRequestModel.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(
            exc.errors(include_url=False, include_context=False)
        ) from exc


def _list_items(records: List[Record]) -> List[ProfileListItemModel]:
    return [ProfileListItemModel.from_record(record) for record in records]


@router.post("/profiles/import", response_model=ImportResponseModel)
async def import_profiles(
    http_request: Request,
    service: ProfileSyncService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    """Accept JSON ``{csv_text}``/``{csv_url}`` or a raw CSV body."""
    body_bytes = await _read_body(http_request, settings)
    content_type = http_request.headers.get("content-type", "")

    if "application/json" in content_type:
        import_request = _parse_import_model(body_bytes)
        if import_request.csv_text is not None:
            records = await service.import_csv_text(import_request.csv_text)
        else:
            records = await service.import_csv_url(str(import_request.csv_url))
    else:
        records = await service.import_csv_bytes(body_bytes)

    return ImportResponseModel(imported=len(records), profiles=_list_items(records))


@router.get("/profiles", response_model=List[ProfileListItemModel])
async def list_profiles(service: ProfileSyncService = Depends(get_service)):
    return _list_items(await service.list_profiles())


@router.get("/profiles/{profile_name}", response_model=ProfileDisplayModel)
async def get_profile(
    profile_name: str, service: ProfileSyncService = Depends(get_service)
):
    record = await service.get_profile(profile_name)
    return ProfileDisplayModel(
        profile_name=profile_name, display=service.display(record)
    )


@router.delete("/profiles", status_code=status.HTTP_204_NO_CONTENT)
async def clear_profiles(service: ProfileSyncService = Depends(get_service)):
    await service.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/active", response_model=ActiveProfileModel)
async def get_active(service: ProfileSyncService = Depends(get_service)):
    record = await service.active_profile()
    if record is None:
        return ActiveProfileModel(profile_name=await service.selector.current_name())
    return ActiveProfileModel(
        profile_name=record.get(FieldName.PROFILE_NAME.value),
        profile=record,
        display=service.display(record),
    )


@router.put("/active", response_model=ActiveProfileModel)
async def select_active(
    select_request: SelectRequestModel,
    service: ProfileSyncService = Depends(get_service),
):
    record = await service.select_profile(select_request.profile_name)
    return ActiveProfileModel(
        profile_name=record.get(FieldName.PROFILE_NAME.value),
        profile=record,
        display=service.display(record),
    )


@router.delete("/active", status_code=status.HTTP_204_NO_CONTENT)
async def clear_active(service: ProfileSyncService = Depends(get_service)):
    await service.clear_active()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/active/name", response_model=ProfileNameModel)
async def set_active_name(
    name_request: SelectRequestModel,
    service: ProfileSyncService = Depends(get_service),
):
    name = await service.selector.set_profile_name(name_request.profile_name)
    return ProfileNameModel(profile_name=name)


@router.delete("/active/name", status_code=status.HTTP_204_NO_CONTENT)
async def clear_active_name(service: ProfileSyncService = Depends(get_service)):
    await service.selector.clear_profile_name()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/active/auto-detect", response_model=AutoDetectResponseModel)
async def auto_detect_active_name(
    detect_request: AutoDetectRequestModel,
    service: ProfileSyncService = Depends(get_service),
):
    name = await service.detect_profile_name(detect_request.urls)
    return AutoDetectResponseModel(profile_name=name, detected=name is not None)


@router.post("/active/credential", response_model=ActiveProfileModel)
async def update_credential(
    credential_update: CredentialUpdateModel,
    service: ProfileSyncService = Depends(get_service),
):
    record = await service.update_credential(credential_update.new_password)
    return ActiveProfileModel(
        profile_name=record.get(FieldName.PROFILE_NAME.value),
        profile=record,
        display=service.display(record),
    )
