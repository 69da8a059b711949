"""
Activity ingestion schemas.

Request/response contracts for the bulk event endpoint plus the per-event
model validated inside the ingestor.

Dependencies: pydantic
System role: Bulk activity API contracts
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TenantScope(BaseModel):
    """Tenant and rank gate an activity token resolves to."""

    model_config = ConfigDict(frozen=True)

    workspace_group_id: int
    minimum_rank: int | None = None


class BulkEvent(BaseModel):
    """
    One occupancy event reported by the game agent.

    Accepts both the lowercase (`userid`, `placeid`) and camelCase
    (`userId`, `placeId`) spellings the agents send.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str
    user_id: int = Field(gt=0, validation_alias=AliasChoices("userid", "userId", "user_id"))
    place_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("placeid", "placeId", "place_id"),
    )
    idle_time: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("idleTime", "idle_time"),
    )
    messages: int | None = Field(default=None, ge=0)

    @field_validator("user_id", mode="before")
    @classmethod
    def _reject_blank_user_id(cls, value: Any) -> Any:
        if isinstance(value, bool) or value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("userid must be numeric")
        return value


class BulkEventRequest(BaseModel):
    """Request body for POST /activity/bulk; events are validated one by one later."""

    events: Any = Field(default=None, description="Array of raw event objects")


class BulkEventResults(BaseModel):
    """Aggregate outcome of a batch."""

    created: int = 0
    ended: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)


class BulkEventResponse(BaseModel):
    """Response body for POST /activity/bulk."""

    success: bool = True
    results: BulkEventResults
