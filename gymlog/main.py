from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
import uvicorn
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gymlog.core.config import Settings, get_settings
from gymlog.core.db import Store
from gymlog.core.errors import ConflictError, GymLogError, NotFoundError, StoreError, ValidationError
from gymlog.core.logging import configure_logging
from gymlog.routers.exercises import router as exercises_router
from gymlog.routers.progress import router as progress_router
from gymlog.routers.workouts import router as workouts_router

logger = structlog.get_logger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _status_for(exc: GymLogError) -> int:
    for error_cls, code in ERROR_STATUS.items():
        if isinstance(exc, error_cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GymLogError)
    async def gymlog_error_handler(request: Request, exc: GymLogError):
        code = _status_for(exc)
        if code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message, exc_info=exc)
        else:
            logger.warning("request_rejected", path=request.url.path, status=code, error=exc.message)
        return JSONResponse(status_code=code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning("request_invalid", path=request.url.path, error=message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("request_crashed", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = Store(settings.DATABASE_URL)
        await store.open(seed=settings.SEED_EXERCISES)
        app.state.store = store
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(title="Gym Log API", lifespan=lifespan)
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"^http://localhost(:\d+)?$",
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    api = APIRouter(prefix="/api")

    @api.get("/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    api.include_router(workouts_router)
    api.include_router(exercises_router)
    api.include_router(progress_router)
    app.include_router(api)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run("gymlog.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
