
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fileflow.middleware.auth import auth_middleware
from fileflow.config import settings
from fileflow.errors import register_error_handlers
from fileflow.logging_config import configure_logging
from fileflow.storage.base import Storage
from fileflow.storage.factory import build_storage
from fileflow.storage.seed import seed_default_users
from fileflow.auth.routes import router as auth_router
from fileflow.files.quota import UploadQuota
from fileflow.files.routes import router as files_router
from fileflow.charts.routes import router as charts_router
from fileflow.admin_requests.routes import router as admin_requests_router
from fileflow.users.routes import router as users_router
from fileflow.stats.routes import router as stats_router

logger = logging.getLogger(__name__)

def create_app(storage: Storage | None = None) -> FastAPI:
    configure_logging(settings.log_level)
    if settings.app_env != "dev" and settings.secret_key == "dev-secret-key":
        logger.warning("SECRET_KEY is not set; using the development key")

    app = FastAPI(title=settings.app_name)
    app.state.storage = storage if storage is not None else build_storage(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.upload_quota = UploadQuota(
        max_uploads=settings.rate_limit_max_calls,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.middleware("http")(auth_middleware)
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(files_router)
    app.include_router(charts_router)
    app.include_router(admin_requests_router)
    app.include_router(users_router)
    app.include_router(stats_router)

    @app.on_event("startup")
    def on_startup():
        if settings.seed_default_users:
            seed_default_users(app.state.storage, settings.default_password)

    @app.get("/", tags=["root"])
    def root():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
