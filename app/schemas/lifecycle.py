# schemas/lifecycle.py
from __future__ import annotations

from pydantic import BaseModel, Field


class ResetAllResponse(BaseModel):
    """
    Body of DELETE /transactions/reset-all.

    Keys of `deleted` / `remaining` are entity types (camelCase).
    """

    success: bool = True
    message: str
    deleted: dict[str, int] = Field(default_factory=dict)
    remaining: dict[str, int] = Field(default_factory=dict)


class SeedResponse(BaseModel):
    success: bool = True
    created: dict[str, int] = Field(default_factory=dict)


class LifecycleErrorResponse(BaseModel):
    error: str
    details: str
    code: str
