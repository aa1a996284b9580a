"""POST /api/decode, /api/encode, /api/convert — curve cells and geocode labels."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from sfc4q.config import Settings
from sfc4q.curve.labeled import LabeledCurve
from sfc4q.dependencies import get_settings
from sfc4q.errors import InvalidLevel
from sfc4q.models.requests import ConvertRequest, DecodeRequest, EncodeRequest
from sfc4q.models.responses import CellResponse, ConvertResponse
from sfc4q.numeral.sized_integer import SizedInteger

logger = logging.getLogger(__name__)

router = APIRouter()


def _labeled(level: float | None, curve: str | None, base: str | None, settings: Settings) -> LabeledCurve:
    level = settings.default_level if level is None else level
    if level > settings.max_level:
        raise InvalidLevel(
            f"level {level} exceeds the service limit {settings.max_level}",
            context={"level": level, "max_level": settings.max_level},
        )
    return LabeledCurve.configured(
        level,
        curve or settings.default_curve,
        base=base or settings.default_base,
    )


def _cell_response(lbl: LabeledCurve) -> CellResponse:
    grid = lbl.grid
    key = lbl.key.value
    bkey1, bkey2 = grid.key_to_bkeys(key)
    ij0, ij1 = grid.key_decode(key)
    return CellResponse(
        level=grid.level,
        curve=grid.curve_name,
        key=key,
        bkeys=[b for b in (bkey1, bkey2) if b is not None],
        cells=[c for c in (ij0, ij1) if c is not None],
        key_bits=grid.key_bits,
        label=lbl.id_to_string(),
        base=lbl.base,
    )


@router.post("/decode", response_model=CellResponse)
async def decode(req: DecodeRequest, settings: Settings = Depends(get_settings)) -> CellResponse:
    lbl = _labeled(req.level, req.curve, req.base, settings)
    return _cell_response(lbl.set_by_key(req.key))


@router.post("/encode", response_model=CellResponse)
async def encode(req: EncodeRequest, settings: Settings = Depends(get_settings)) -> CellResponse:
    lbl = _labeled(req.level, req.curve, req.base, settings)
    # set_by_coordinate ignores out-of-grid input; the API reports it
    lbl.grid.check_coordinate(req.i, req.j)
    return _cell_response(lbl.set_by_coordinate(req.i, req.j))


@router.post("/convert", response_model=ConvertResponse)
async def convert(req: ConvertRequest) -> ConvertResponse:
    sized = SizedInteger.from_string(req.value, req.from_base)
    logger.debug("Convert %s from %s to %s", req.value, req.from_base, req.to_base)
    return ConvertResponse(
        value=sized.to_string(req.to_base),
        base=req.to_base,
        bits=sized.bits,
        bit_string=sized.to_bit_string(),
    )
