"""Request/response Pydantic models."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel


class NotifyRequest(BaseModel):
    body: str
    title: str | None = None
    mode: Literal["sync", "stream", "background"] = "sync"
    tags: list[str] | None = None
    params: dict[str, str] | None = None
    metadata: dict[str, Any] = {}
    callback_url: str | None = None


class DeliveryOutcome(BaseModel):
    success: bool
    provider_id: str
    error: str | None = None
    error_type: str | None = None


class NotifyReport(BaseModel):
    task_id: str
    status: str = "completed"
    results: list[DeliveryOutcome] = []
    delivered: int = 0
    failed: int = 0
    created_at: datetime


class ProviderInfo(BaseModel):
    id: str
    schemes: list[str]
