"""Application factory and process entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine

import uvicorn

from backend_api.config import Settings, get_settings
from backend_api.core.openapi import install_openapi
from backend_api.core.users import EmailAlreadyRegisteredError, UserNotFoundError
from backend_api.database import create_db_engine, create_session_factory, synchronize_schema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database on startup and release its pool on shutdown."""
    settings: Settings = app.state.settings
    engine: Engine = app.state.engine

    logger.info(f"Using database {engine.url.render_as_string(hide_password=True)}")
    if settings.database_synchronize:
        synchronize_schema(engine)

    yield

    engine.dispose()


async def email_already_registered_handler(
    request: Request, exc: EmailAlreadyRegisteredError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Email already registered"},
    )


async def user_not_found_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "User not found"},
    )


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """Build the application: database, feature modules, docs and CORS.

    Args:
        settings: Application settings. Loaded from the environment if omitted
        engine: Pre-built engine, e.g. for tests. Built from settings if omitted

    Returns:
        FastAPI: Configured application, not yet serving
    """
    if settings is None:
        settings = get_settings()
    if engine is None:
        engine = create_db_engine(settings)

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url="/api",
        openapi_url="/api-json",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Request bodies derive from schemas.base.RequestModel, which rejects
    # undeclared fields; FastAPI answers 422 before the handler runs.
    app.add_exception_handler(EmailAlreadyRegisteredError, email_already_registered_handler)
    app.add_exception_handler(UserNotFoundError, user_not_found_handler)

    # API documentation with the bearer "Authorize" affordance
    install_openapi(app)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": "backend_api"}

    return app


def main() -> None:
    """Run the API server on the configured host and port."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting {settings.app_name} on port {settings.port}")
    uvicorn.run(
        "backend_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        loop="asyncio",  # Explicitly use asyncio instead of auto (which tries uvloop)
    )


if __name__ == "__main__":
    main()
