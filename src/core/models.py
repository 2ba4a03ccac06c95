# src/core/models.py - v2
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# === INPUT ===


class Item(BaseModel):
    """One unit of input submitted to a batch.

    Owned by the caller. Frozen so the processor can only read it; strict so
    "10", True or 7.0 are rejected as sizes instead of being converted.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    name: str = Field(min_length=1)
    type: str
    size: int = Field(ge=0)


# === OUTPUT ===


class ProcessedResult(BaseModel):
    """Normalized record for an item that went through the transform."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    size: int
    processed: Literal[True] = True
    timestamp: str  # ISO-8601 instant at which this item was transformed


class FailureRecord(BaseModel):
    """Side-channel record for an item that failed validation or transform."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    item_name: str = Field(alias="itemName")
    reason: str
