import tomllib
from contextlib import asynccontextmanager
from http import HTTPStatus
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from voice_bridge import __version__
from voice_bridge.ai.summarize.router import router as summarize_router
from voice_bridge.ai.voice_ai.providers.factory import close_voice_ai_provider
from voice_bridge.ai.voice_ai.router import config_router
from voice_bridge.ai.voice_ai.router import router as calls_router
from voice_bridge.ai.voice_ai.router import webhook_router as vapi_webhook_router
from voice_bridge.config import get_app_settings
from voice_bridge.integrations.omi.dependencies import close_omi_client
from voice_bridge.integrations.omi.router import router as omi_router
from voice_bridge.utils.logger import logger


def get_version() -> str:
    """Get version from pyproject.toml, falling back to the package version."""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return __version__


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject malformed requests with 400 before any handler runs."""
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    logger.info("Rejected invalid request", path=request.url.path, errors=details)
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"error": "Invalid request", "details": details},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    logger.info("Shutting down, closing outbound clients")
    await close_voice_ai_provider()
    await close_omi_client()


def create_app() -> FastAPI:
    settings = get_app_settings()

    app = FastAPI(
        title="OMI Voice Bridge API",
        description="Places Vapi calls on behalf of OMI users and tracks their progress",
        version=get_version(),
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(calls_router, prefix=settings.api_prefix)
    app.include_router(vapi_webhook_router, prefix=settings.api_prefix)
    app.include_router(config_router, prefix=settings.api_prefix)
    app.include_router(omi_router, prefix=settings.api_prefix)
    app.include_router(summarize_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"status": "ok", "message": "OMI Voice Bridge API is running"}

    @app.get("/healthcheck")
    async def healthcheck():
        """Health check endpoint."""
        return {"status": "ok", "message": "OMI Voice Bridge API is running"}

    return app


app = create_app()
