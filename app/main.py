from datetime import datetime
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.routers import ai, ai_settings, uploads

# Import logging and middleware
from app.utils.logging_config import configure_for_environment, get_logger
from app.middleware.error_handlers import (
    ExceptionHandlerMiddleware,
    RequestLoggingMiddleware,
    PerformanceMiddleware,
    register_exception_handlers,
)

# Configure logging first
configure_for_environment()
logger = get_logger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info("Hiring AI API starting up...")

    from app.services.agents import get_ai_settings
    settings = get_ai_settings()
    logger.info(
        f"LLM model: {settings.llm_settings.model_name} at {settings.llm_settings.base_url} "
        f"(json schema mode: {settings.llm_settings.json_schema_mode})"
    )

    yield

    logger.info("Hiring AI API shutting down...")


app = FastAPI(title="Hiring AI API", version=API_VERSION, lifespan=lifespan)
register_exception_handlers(app)

# Add middleware in order (LIFO - Last In, First Out)
# Exception handler should be the outermost middleware
app.add_middleware(PerformanceMiddleware, slow_request_threshold=10.0)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionHandlerMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
@app.head("/")
async def root():
    """Root endpoint - handles both GET and HEAD requests for health checks"""
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to the Hiring AI API", "version": API_VERSION, "status": "ok"}


@app.get("/health")
@app.head("/health")
async def health_check():
    """Health check endpoint - handles both GET and HEAD requests"""
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat() + "Z"}


app.include_router(uploads.router, prefix="/api", tags=["upload"])
app.include_router(ai.router, prefix="/api", tags=["ai"])
app.include_router(ai_settings.router, prefix="/api", tags=["ai-settings"])

logger.info("Hiring AI API initialized successfully")
