from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from codemart import __version__
from codemart.core.config import Settings, get_settings
from codemart.core.errors import register_exception_handlers
from codemart.core.logging import configure_logging
from codemart.infrastructure.database.session import dispose_engine, init_db
from codemart.interfaces.http.routers import create_api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Marketplace for UI kits, templates and code snippets",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.mount(
        settings.storage.public_prefix,
        StaticFiles(directory=settings.upload_storage_dir, check_dir=False),
        name="uploads",
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
