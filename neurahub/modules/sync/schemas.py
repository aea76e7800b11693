from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

SyncCollection = Literal["tasks", "ideas", "events", "members"]


class SyncOperation(BaseModel):
    op: Literal["upsert", "delete"]
    collection: SyncCollection
    id: str = Field(min_length=1)
    payload: Dict[str, Any] = {}


class SyncBatch(BaseModel):
    operations: List[SyncOperation] = Field(max_length=500)


class SyncResult(BaseModel):
    id: str
    collection: SyncCollection
    op: Literal["upsert", "delete"]
    status: Literal["applied", "failed"]
    error: Optional[str] = None


class SyncResponse(BaseModel):
    applied: int
    failed: int
    results: List[SyncResult]
