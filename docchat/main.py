import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docchat.core.config import Settings, settings as default_settings
from docchat.db.storage import MemStorage
from docchat.routes import chat, documents, sessions
from docchat.services.chat_service import CompletionClient
from docchat.services.groq_service import GroqService

logger = logging.getLogger("docchat")


def configure_logging(settings: Settings) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=settings.LOG_LEVEL,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("%s v%s starting...", settings.APP_NAME, settings.APP_VERSION)
    if not settings.GROQ_API_KEY:
        logger.warning("GROQ_API_KEY is not set; chat requests will fail until it is configured")
    yield
    logger.info("Application shutdown complete.")


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[MemStorage] = None,
    completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
    """Build the API with a single store and completion client for its lifetime."""
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Upload a document and chat with it",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage or MemStorage()
    app.state.completion_client = completion_client or GroqService(settings)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
        )

    # Register routers
    app.include_router(documents.router)
    app.include_router(sessions.router)
    app.include_router(chat.router)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
