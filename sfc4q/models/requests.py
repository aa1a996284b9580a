"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DecodeRequest(BaseModel):
    level: float | None = Field(default=None, description="Public level, a multiple of 0.5")
    curve: str | None = Field(default=None, description="Registered curve name (morton, hilbert)")
    key: int = Field(..., ge=0, description="Index along the public curve")
    base: str | None = Field(default=None, description="Base label for the cell label")


class EncodeRequest(BaseModel):
    level: float | None = Field(default=None, description="Public level, a multiple of 0.5")
    curve: str | None = Field(default=None, description="Registered curve name (morton, hilbert)")
    i: int = Field(..., ge=0, description="Column, left to right")
    j: int = Field(..., ge=0, description="Row, top to bottom")
    base: str | None = Field(default=None, description="Base label for the cell label")


class ConvertRequest(BaseModel):
    value: str = Field(..., description="Code written in from_base")
    from_base: str = Field(default="4h", description="Base label of value")
    to_base: str = Field(default="16h", description="Base label of the result")
