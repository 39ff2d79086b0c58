"""
Job update API schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from repairconnect.domain.entities.job_update import JobUpdate


class JobUpdateCreateRequest(BaseModel):
    message: Optional[str] = None
    image_url: Optional[str] = Field(
        None, max_length=1024, description="Reference returned by POST /media"
    )


class JobUpdateResponse(BaseModel):
    id: int
    request_id: int
    provider_id: int
    message: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, update: JobUpdate) -> "JobUpdateResponse":
        return cls(
            id=update.id,
            request_id=update.request_id,
            provider_id=update.provider_id,
            message=update.message,
            image_url=update.image_url,
            created_at=update.created_at,
        )


class MediaUploadResponse(BaseModel):
    url: str
