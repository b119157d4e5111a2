from __future__ import annotations

from pydantic import BaseModel, Field


class FreezeStatusResponse(BaseModel):
    limit: int
    total_resources: int
    frozen_count: int
    frozen_resource_ids: list[str]


class ResourceFreezeResponse(BaseModel):
    resource_id: str
    is_frozen: bool
    reason: str | None
    active_limit: int
    total_resources: int | None
    frozen_count: int


class BatchFreezeStatusRequest(BaseModel):
    owner_ids: list[str] = Field(default_factory=list, max_length=500)


class BatchFreezeStatusResponse(BaseModel):
    frozen_resource_ids: dict[str, list[str]]
