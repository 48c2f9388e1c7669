
import logging
from pathlib import Path

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from regs_insight.auth.deps import get_database
from regs_insight.auth.routes import router as auth_router
from regs_insight.config import Settings, get_settings
from regs_insight.db.bootstrap import init_database
from regs_insight.db.session import Database
from regs_insight.documents.routes import router as documents_router
from regs_insight.errors import register_error_handlers
from regs_insight.middleware.errors import CatchAllExceptionMiddleware
from regs_insight.schemas.document import HealthOut
from regs_insight.uploads.routes import router as upload_router
from regs_insight.uploads.storage import BlobStorage
from regs_insight.utils.log import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.storage = BlobStorage(settings.upload_dir)
    app.state.database = None
    app.state.storage.ensure_root()

    app.add_middleware(CatchAllExceptionMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(upload_router)
    app.include_router(documents_router)

    @app.on_event("startup")
    async def on_startup():
        app.state.database = await init_database(settings)
        if app.state.database is None:
            logger.warning("serving without a database; data endpoints will fail until restart")

    @app.on_event("shutdown")
    async def on_shutdown():
        if app.state.database is not None:
            await app.state.database.dispose()
            app.state.database = None

    @app.get("/api/health", response_model=HealthOut, response_model_exclude_none=True, tags=["health"])
    async def health(database: Database | None = Depends(get_database)):
        if database is None:
            return HealthOut(ok=True, db_connected=False, error="no-db-pool")
        try:
            await database.ping()
        except Exception as e:
            return HealthOut(ok=True, db_connected=False, error=str(e))
        return HealthOut(ok=True, db_connected=True)

    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    if Path(settings.public_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="ui")
    else:
        @app.get("/", tags=["root"])
        def root():
            return {"name": settings.app_name, "env": settings.app_env}

    return app
