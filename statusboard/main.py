from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from statusboard.api.middleware import RequestLogMiddleware
from statusboard.api.v1.router import v1_router
from statusboard.common.logging import setup_logging
from statusboard.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Drop folder for scheduled spreadsheet imports
    Path(settings.EXCEL_DIR).mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title="StatusBoard API",
    description="Weekly project status ingestion and portfolio RAG dashboard",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
origins = settings.ALLOWED_ORIGINS.split(",") if settings.ALLOWED_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLogMiddleware)

# API routes
app.include_router(v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "statusboard", "environment": settings.APP_ENV}
