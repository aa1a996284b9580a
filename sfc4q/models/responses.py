"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    curves: list[str] = Field(default_factory=list)
    bases: list[str] = Field(default_factory=list)


class BaseInfo(BaseModel):
    label: str
    base: int
    alphabet: str
    bits_per_digit: int
    hierarchical: bool = False
    reference: str = ""


class BasesResponse(BaseModel):
    bases: list[BaseInfo] = Field(default_factory=list)
    aliases: dict[str, str] = Field(default_factory=dict)


class CellResponse(BaseModel):
    level: float
    curve: str
    key: int
    bkeys: list[int] = Field(default_factory=list)
    cells: list[tuple[int, int]] = Field(default_factory=list)
    key_bits: int = 0
    label: str = ""
    base: str = ""


class ConvertResponse(BaseModel):
    value: str
    base: str
    bits: int
    bit_string: str
