from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates

from banner_server import __version__
from banner_server.api import create_api_router
from banner_server.core.config import Settings, get_settings
from banner_server.core.container import ApplicationContainer
from banner_server.core.logging import configure_logging
from banner_server.infrastructure.database import dispose_engine, init_db
from banner_server.schemas import HealthResponse

BASE_DIR = Path(__file__).resolve().parent


def _resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (BASE_DIR / path).resolve()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    await init_db()
    container = ApplicationContainer.build(settings)
    app.state.container = container
    try:
        yield
    finally:
        await container.aclose()
        await dispose_engine()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Timed banner ingestion and storefront display service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(_resolve_path(settings.template_dir)))

    # storefront theme extensions fetch the public feed cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "banner_server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )
