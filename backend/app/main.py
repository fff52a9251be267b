import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_concluded_ttl_seconds, get_cors_origins
from routes.game_ws import router as game_ws_router
from routes.players import router as players_router
from routes.sessions import router as sessions_router
from services.errors import GameError
from services.relay import relay

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    relay.registry.concluded_ttl_seconds = get_concluded_ttl_seconds()
    logger.info(
        "[app] Relay ready (concluded session TTL: %s)",
        relay.registry.concluded_ttl_seconds or "never",
    )
    yield
    logger.info("[app] Shutting down with %d session(s) in memory", len(relay.registry))


app = FastAPI(title="Tic Tac Toe Relay API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(sessions_router, prefix="/api")
app.include_router(players_router, prefix="/api")
app.include_router(game_ws_router)


@app.exception_handler(GameError)
async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
    logger.info("[app] %s %s rejected: %s (%s)", request.method, request.url.path, exc, exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc), "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    logger.info("[app] %s %s malformed request: %s", request.method, request.url.path, problems)
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": f"Invalid request: {problems}", "code": "invalid_request"},
    )


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
