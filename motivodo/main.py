from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from .api.v1.api import router as api_router
from .core.config import settings
from .core.errors import Internal, ValidationFailed
from .core.logging_config import setup_logging
from .db.session import create_db_and_tables
from . import models  # noqa: F401  (registers tables on SQLModel.metadata)

# Load environment variables
load_dotenv()

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables on startup
    create_db_and_tables()
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Personal task tracking with a daily motivational quote",
    version="1.0.0",
    lifespan=lifespan
)

# Cookies carry the session, so credentials must be allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Field-level errors under "detail", same shape as FastAPI's default
    return JSONResponse(
        status_code=ValidationFailed.status_code,
        content={"message": ValidationFailed.message, "detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Full traceback stays in the server log; the client gets a generic message
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=Internal.status_code, content={"detail": Internal.message})


# Include API routers
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def read_root():
    return {"message": settings.PROJECT_NAME}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
