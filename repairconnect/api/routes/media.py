"""Media upload endpoint."""

from fastapi import APIRouter, Request, status

from repairconnect.api.dependencies import CurrentActorDep, MediaStorageDep
from repairconnect.api.schemas.update import MediaUploadResponse
from repairconnect.config.settings import settings
from repairconnect.domain.exceptions.validation_error import ValidationError
from repairconnect.domain.exceptions.workflow_error import ForbiddenError

router = APIRouter(prefix="/media", tags=["media"])


@router.post("", response_model=MediaUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    request: Request,
    actor: CurrentActorDep,
    storage: MediaStorageDep,
):
    """Store a raw image body and return the reference to attach to an update."""
    if not actor.is_provider:
        raise ForbiddenError("Only providers upload job media", actor_role=actor.role.value)

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.MEDIA_MAX_BYTES:
        raise ValidationError(
            "Upload is too large", {"field": "file", "max_bytes": settings.MEDIA_MAX_BYTES}
        )

    data = await request.body()
    url = await storage.store(data, request.headers.get("content-type"))
    return MediaUploadResponse(url=url)
