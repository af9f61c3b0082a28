from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# quiet the HTTP client / SQL libraries unless explicitly asked for
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
if not settings.SQL_ECHO:
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import attendance, classes, schools, teachers

from database.db import init_db


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
    )

    # ✅ CORS (front-end origins from settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ✅ latency header X-Latency-Ms + one log line per request
    app.add_middleware(TimingMiddleware, log_json=settings.REQUEST_LOG_JSON)

    # ✅ global error handlers (uniform JSON error envelope)
    add_error_handlers(app)

    # ✅ API routers under the configured prefix
    app.include_router(schools.router,    prefix=settings.API_PREFIX)
    app.include_router(teachers.router,   prefix=settings.API_PREFIX)
    app.include_router(classes.router,    prefix=settings.API_PREFIX)
    app.include_router(attendance.router, prefix=settings.API_PREFIX)

    # ✅ health check
    @app.get("/health")
    def health_check():
        return {"status": "ok", "message": "API is running"}

    @app.on_event("startup")
    def _create_tables():
        if settings.AUTO_CREATE_TABLES:
            init_db()
            logger.info("database schema ensured (%s)", settings.ENV)

    return app


app = create_app()
