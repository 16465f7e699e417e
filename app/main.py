import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import AppError
from app.core.logging import logger


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.DEBUG,
    )

    # Set up CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API router
    application.include_router(api_router, prefix=settings.API_V1_STR)

    # Register exception handlers
    register_exception_handlers(application)

    return application


def _field_name(loc) -> str:
    """Turn a pydantic error location like ("body", "text") into "text"."""
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "request"


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Domain errors become a client error with a flat message."""
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.error,
                "message": exc.message,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed requests get a 400 with one message per offending field."""
        fields = {_field_name(err["loc"]): err["msg"] for err in exc.errors()}
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Validation failed",
                "fields": fields,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler - logs details to console."""

        logger.error(f"Exception: {exc.__class__.__name__}: {exc}")

        if settings.DEBUG:
            logger.error(
                f"Request: {request.method} {request.url}\n"
                f"   Path Params: {request.path_params}\n"
                f"   Query Params: {dict(request.query_params)}\n"
                f"   Client: {request.client.host if request.client else 'unknown'}\n"
                f"   Traceback:\n{traceback.format_exc()}"
            )

        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "message": str(exc) if settings.DEBUG else "An unexpected error occurred",
            },
        )


app = create_application()


@app.on_event("startup")
async def startup_event():
    """Create tables and log startup information."""
    # Import models so they register with Base.metadata
    import app.models  # noqa: F401
    from app.core.database import engine, Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info("Documentation: http://127.0.0.1:8000/docs")
    logger.info("Database connected & tables created")
    if settings.DEBUG:
        logger.warning("DEBUG mode is ON - detailed errors will be logged to console")
    if not settings.GROQ_API_KEY:
        logger.warning("GROQ_API_KEY is not set - AI responses will be placeholders")


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - health check."""
    return {
        "message": f"Welcome to {settings.PROJECT_NAME} API",
        "version": settings.VERSION,
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
