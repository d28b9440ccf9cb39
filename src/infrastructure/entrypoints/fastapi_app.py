"""
FastAPI entry point: the HTTP boundary the rest of the application consumes.

Every successful response uses the envelope
``{"success": true, "data": ..., "cached": bool}`` with camelCase field names
(see schemas.py). InvalidInput becomes a 400 with a descriptive message;
source failures never surface here because the use cases absorb them.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

from typing import Optional

import structlog
from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, TypeAdapter

from src.domain.entities.cached_result import CachedResult
from src.domain.errors import InvalidInput
from src.infrastructure.config.logging_config import configure_logging
from src.infrastructure.config.settings import load_settings
from src.infrastructure.entrypoints import schemas
from src.infrastructure.entrypoints.container import MarketDataServices, build_services

logger = structlog.get_logger(__name__)


class CompareRequest(BaseModel):
    symbols: list[str] = Field(default_factory=list)
    period: Optional[str] = None


def _envelope(result: CachedResult, adapter: TypeAdapter) -> dict:
    return {"success": True, "data": schemas.dump_camel(adapter, result.data), "cached": result.cached}


def create_router(services: MarketDataServices) -> APIRouter:
    router = APIRouter(prefix="/api/stocks")

    @router.get("/quote/{symbol}")
    def get_quote(symbol: str) -> dict:
        return _envelope(services.quotes.execute(symbol), schemas.QUOTE)

    @router.get("/history/{symbol}")
    def get_history(symbol: str, period: Optional[str] = None) -> dict:
        return _envelope(services.history.execute(symbol, period), schemas.HISTORY)

    @router.post("/compare")
    def compare(body: CompareRequest) -> dict:
        return _envelope(services.compare.execute(body.symbols, body.period), schemas.COMPARISON)

    @router.get("/search/{query}")
    def search(query: str) -> dict:
        return _envelope(services.search.execute(query), schemas.SYMBOL_MATCHES)

    @router.get("/company/{symbol}")
    def company(symbol: str) -> dict:
        return _envelope(services.company.execute(symbol), schemas.COMPANY_PROFILE)

    @router.get("/trending")
    def trending() -> dict:
        return _envelope(services.trending.execute(), schemas.QUOTE_LIST)

    return router


def create_app(services: Optional[MarketDataServices] = None) -> FastAPI:
    """Build the FastAPI app; wires services from the environment when omitted."""
    if services is None:
        settings = load_settings()
        configure_logging(settings.log_level, settings.log_format)
        services = build_services(settings)

    app = FastAPI(title="Market Data API")
    app.include_router(create_router(services))

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
        logger.info("invalid_input", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500, content={"success": False, "message": "Internal server error"}
        )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "provider": services.provider.name if services.provider else None}

    return app


load_dotenv()
app = create_app()
