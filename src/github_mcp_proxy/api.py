"""
HTTP transport for the function dispatcher.

Endpoints:
    POST /api/mcp              - call a function: {"name": ..., "parameters": {...}}
    GET  /api/mcp/functions    - discovery listing
    GET  /health               - liveness and configuration summary
    /*                         - static assets (demo UI), when STATIC_DIR exists

Every /api/mcp response is an envelope: {"status": "success", "data": ...} or
{"status": "error", "error": ...}. Handled upstream failures answer 200, an
unknown function 400 and unexpected failures 500.
"""
import logging
import os
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from .config.defaults import GITHUB_TOKEN_ENV, STATIC_DIR
from .dispatcher import Dispatcher, get_dispatcher
from .utils.github_client import close_github_client
from .utils.types import Failure

logger = logging.getLogger(__name__)


def create_app(
    dispatcher: Dispatcher | None = None,
    static_dir: str | None = STATIC_DIR,
) -> Starlette:
    """Build the Starlette application.

    Args:
        dispatcher: Dispatcher to route calls to (defaults to the shared one)
        static_dir: Directory served at "/", None to disable static files
    """
    dispatcher = dispatcher or get_dispatcher()

    async def call_function(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            return JSONResponse(
                {"status": "error", "error": "Request body must be a JSON object"},
                status_code=400,
            )

        result = await dispatcher.dispatch(body.get("name"), body.get("parameters"))
        status_code = result.kind.http_status if isinstance(result, Failure) else 200
        return JSONResponse(result.to_envelope(), status_code=status_code)

    async def list_functions(request: Request) -> JSONResponse:
        return JSONResponse(dispatcher.registry.describe())

    async def health(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "functions": dispatcher.registry.names(),
                "github_token_configured": bool(os.getenv(GITHUB_TOKEN_ENV)),
            }
        )

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await close_github_client()

    routes = [
        Route("/api/mcp", call_function, methods=["POST"]),
        Route("/api/mcp/functions", list_functions, methods=["GET"]),
        Route("/health", health, methods=["GET"]),
    ]
    if static_dir and os.path.isdir(static_dir):
        routes.append(Mount("/", app=StaticFiles(directory=static_dir, html=True), name="static"))
    elif static_dir:
        logger.warning(f"Static directory {static_dir!r} not found, static files disabled")

    return Starlette(
        routes=routes,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["*"],
                allow_headers=["*"],
            )
        ],
        lifespan=lifespan,
    )
