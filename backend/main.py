"""
Moshiur Portfolio Backend - Main Application Entry Point

Blog, reviews and engagement CRUD plus the portfolio chat assistant.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.config import get_settings
from app.core.exceptions import (
    ExternalServiceError,
    NotFoundError,
    PersistenceError,
    PortfolioError,
    ValidationError,
)
from app.core.logger import logger

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting portfolio backend in {settings.ENVIRONMENT} mode...")

    from app.infrastructure.local.database import dispose_engine, init_db
    from app.services.knowledge_loader import load_knowledge_document

    await init_db()
    app.state.knowledge = load_knowledge_document(settings.KNOWLEDGE_FILE)

    yield

    # Shutdown
    logger.info("Shutting down portfolio backend...")
    await dispose_engine()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to HTTP responses with a {"message"} body."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        else:
            message = "Invalid request"
        logger.info(f"Rejected request to {request.url.path}: {message}")
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error_response(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(ExternalServiceError)
    async def external_service_handler(request: Request, exc: ExternalServiceError):
        logger.warning(f"LLM failure on {request.url.path}: {exc.kind.value}")
        if exc.is_throttled:
            return _error_response(status.HTTP_429_TOO_MANY_REQUESTS, exc.message)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(PersistenceError)
    async def persistence_handler(request: Request, exc: PersistenceError):
        logger.error(f"Persistence failure on {request.url.path}: {exc.message}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        logger.error(f"Unhandled application error on {request.url.path}: {exc.message}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception(f"Unexpected error on {request.url.path}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Something went wrong. Please try again.",
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Moshiur Portfolio Backend",
        description="Portfolio CRUD API with an AI chat assistant",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )
    app.state.knowledge = {}

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    from app.api import ai_commands, blogs, chat, comments, loves, reviews, taxonomy, visits

    app.include_router(chat.router, prefix="/chats", tags=["chat"])
    app.include_router(blogs.router, prefix="/blogs", tags=["blogs"])
    app.include_router(taxonomy.tags_router, prefix="/tags", tags=["tags"])
    app.include_router(taxonomy.categories_router, prefix="/categories", tags=["categories"])
    app.include_router(comments.router, prefix="/comments", tags=["comments"])
    app.include_router(loves.router, prefix="/loves", tags=["loves"])
    app.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
    app.include_router(visits.router, tags=["visits"])
    app.include_router(ai_commands.router, tags=["ai"])

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Banner."""
        return f"{settings.OWNER_NAME} Portfolio Server is Live"

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": APP_VERSION,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
