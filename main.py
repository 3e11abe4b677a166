# /main.py
from fastapi import FastAPI, status, Request
from fastapi.responses import RedirectResponse, JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from api.v1 import router as v1_router
import logging
import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Optional
from config import Settings
from mcp_server import create_mcp_server

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    # stderr only: under stdio transport stdout carries the MCP protocol
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # The MCP server only shares the process when it speaks SSE; stdio needs the terminal
    if settings.mcp_transport == "sse":
        mcp_instance = create_mcp_server(settings)
        app.state.mcp_task = asyncio.create_task(mcp_instance.run_sse_async())
        logger.info("MCP server started")

    yield

    if hasattr(app.state, "mcp_task"):
        app.state.mcp_task.cancel()
        try:
            await app.state.mcp_task
        except asyncio.CancelledError:
            pass
        logger.info("MCP server stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """App factory; run standalone with `uvicorn main:create_app --factory`."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="claude-team-join API",
        version="0.1.0",
        description="Rejoin and inspect Claude Code agent teams",
        lifespan=lifespan
    )
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"detail": exc.errors(), "body": exc.body}),
        )

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    app.include_router(v1_router, prefix="/api")
    return app

