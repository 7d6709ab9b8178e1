from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from shelfsync.schemas.common import UserId

SyncDirection = Literal["test", "export", "import", "both"]


class SyncRequest(BaseModel):
    direction: SyncDirection = Field(validation_alias=AliasChoices("direction", "action"))
    user_id: UserId | None = Field(None, validation_alias=AliasChoices("user_id", "userId"))
    conflict_policy: Literal["overwrite", "keep_existing"] = "overwrite"


class TableCountsResponse(BaseModel):
    exported: int
    imported: int
    errors: int


class SyncResponse(BaseModel):
    success: bool
    message: str | None = None
    results: dict[str, TableCountsResponse] | None = None
    duration_ms: int | None = None
    error: str | None = None


class ConnectionTestResponse(BaseModel):
    connected: bool
    message: str | None = None
    error: str | None = None
