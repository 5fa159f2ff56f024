"""Pydantic schemas for request and response bodies."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from typing import Optional
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict


class TraceOverrideRequest(BaseModel):
    """Body of ``POST /v5-set-trace-override``.

    ``account_id`` and ``offer_name`` are optional at the schema level so
    that a missing key is reported with the handler's own message.
    """

    model_config = ConfigDict(extra="ignore")

    account_id: Optional[str] = None
    offer_name: Optional[str] = None
    enabled: bool = True
    traces_per_day: Optional[int] = None
    speed_multiplier: Optional[float] = None
    trace_also_on_webhook: bool = True


class TraceOverrideSchema(BaseModel):
    """Trace override row as returned to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    account_id: str
    offer_name: str
    enabled: bool
    traces_per_day: Optional[int]
    speed_multiplier: Optional[float]
    trace_also_on_webhook: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class TraceOverrideResponse(BaseModel):
    success: bool = True
    override: TraceOverrideSchema


class PurgeResponse(BaseModel):
    success: bool = True
    message: str = "Purge completed"
    stats: dict[str, Any]


class RoleResponse(BaseModel):
    """Role of the calling user; ``role`` is None when unprovisioned."""

    role: Optional[str]
    is_admin: bool
    is_viewer: bool
