from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth.interfaces.routes import router as auth_router
from documents.interfaces.routes import router as documents_router
from shared.exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConcurrentModificationError,
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    RevertApplyError,
)
from shared.infrastructure.database import engine
from shared.infrastructure.redis import close_redis_pool
from shared.logging_config import configure_logging, get_logger
from versioning.interfaces.routes import router as versions_router
from versioning.interfaces.routes import search_router as version_search_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("startup")
    yield
    await engine.dispose()
    await close_redis_pool()
    logger.info("shutdown")


app = FastAPI(
    title="Document Version Service",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(documents_router)
app.include_router(versions_router)
app.include_router(version_search_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(InvalidOperationError)
async def invalid_operation_handler(request: Request, exc: InvalidOperationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(ConcurrentModificationError)
async def concurrent_modification_handler(request: Request, exc: ConcurrentModificationError):
    return JSONResponse(status_code=409, content={"detail": exc.message, "retryable": True})


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(RevertApplyError)
async def revert_apply_handler(request: Request, exc: RevertApplyError):
    return JSONResponse(
        status_code=502,
        content={
            "detail": exc.message,
            "checkpoint_version_number": exc.checkpoint.version_number,
            "target_version_number": exc.target_version_number,
        },
    )


@app.exception_handler(AuthenticationError)
async def auth_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.error("unhandled_app_error", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health")
async def health_check():
    return {"status": "ok"}
