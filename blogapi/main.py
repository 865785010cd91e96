import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from blogapi.api import router as api_router
from blogapi.core.config import Settings, settings as default_settings
from blogapi.core.mongodb import MongoDB
from blogapi.middleware.request_logger import RequestLoggerMiddleware
from blogapi.services.asset_store import build_asset_store
from blogapi.services.repository import Repositories

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        configure_logging(settings.log_level)
        if settings.asset_storage == "local":
            Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

        mongodb = MongoDB(settings.mongodb_url, settings.mongodb_database)
        await mongodb.connect()
        app.state.mongodb = mongodb
        app.state.repositories = Repositories(mongodb)
        app.state.asset_store = build_asset_store(settings)
        logger.info(f"Asset storage strategy: {settings.asset_storage}")

        yield
        # Shutdown
        await mongodb.disconnect()

    app = FastAPI(
        title="Blog API",
        description="Posts with uploaded images and comments, stored in MongoDB",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggerMiddleware)

    # Serve locally stored uploads; the directory is created at startup
    if settings.asset_storage == "local":
        app.mount(
            "/" + settings.static_path.strip("/"),
            StaticFiles(directory=settings.upload_dir, check_dir=False),
            name="uploads",
        )

    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse)
    async def health_check():
        return "Blog API is running!"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
