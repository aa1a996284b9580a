"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from sfc4q.curve.registry import get_curve_registry
from sfc4q.models.responses import BaseInfo, BasesResponse, HealthResponse
from sfc4q.numeral.registry import get_numeral_registry

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        curves=get_curve_registry().names(),
        bases=get_numeral_registry().labels(),
    )


@router.get("/bases", response_model=BasesResponse)
async def bases() -> BasesResponse:
    reg = get_numeral_registry()
    return BasesResponse(
        bases=[
            BaseInfo(
                label=a.label,
                base=a.base,
                alphabet=a.alphabet,
                bits_per_digit=a.bits_per_digit,
                hierarchical=a.is_hierarchical,
                reference=a.reference,
            )
            for a in reg.all()
        ],
        aliases=reg.aliases(),
    )
