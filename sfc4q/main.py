"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sfc4q.config import settings
from sfc4q.errors import Sfc4qError, UnsupportedCurve

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.sfc4q_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="sfc4q",
        description="Space-filling curve geocodes for recursive 4-partition grids, with half levels",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    from sfc4q.api.router import api_router

    app.include_router(api_router)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    """Map core validation errors onto 422 responses."""

    @app.exception_handler(Sfc4qError)
    async def _sfc4q_error(request: Request, exc: Sfc4qError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=422, content=exc.to_dict())

    @app.exception_handler(UnsupportedCurve)
    async def _unsupported_curve(request: Request, exc: UnsupportedCurve) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"error": "UnsupportedCurve", "message": str(exc)})


app = create_app()
