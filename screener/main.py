from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from screener.middleware.error_handlers import ExceptionHandlerMiddleware, install_exception_handlers
from screener.routers import drafts, sessions, workflow
from screener.services.match_client import MatchRequestClient
from screener.services.role_catalog import RoleCatalogClient
from screener.services.session_manager import SessionManager
from screener.services.workflow import WorkflowController
from screener.utils.config import Settings
from screener.utils.logging_config import configure_for_environment, get_logger
from screener.utils.utils import build_http_client

# Configure logging first
configure_for_environment()
logger = get_logger(__name__)


def build_session_manager(settings: Settings, http_client) -> SessionManager:
    """Wire the scoring-service clients into a per-session controller factory"""
    catalog_client = RoleCatalogClient(settings, http_client)
    match_client = MatchRequestClient(settings, http_client)
    return SessionManager(
        lambda session_id: WorkflowController(catalog_client, match_client, session_id=session_id),
        idle_timeout=settings.session_idle_timeout,
        max_sessions=settings.max_sessions
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    settings = Settings.from_env()
    logger.info(f"Resume Screener starting up, scoring service at {settings.api_base_url}")
    if settings.request_timeout is None:
        logger.info("No request timeout configured; scoring calls wait for the service")

    async with build_http_client(settings) as http_client:
        app.state.settings = settings
        app.state.sessions = build_session_manager(settings, http_client)
        yield

    logger.info("Resume Screener shutdown completed")


def create_app(lifespan_handler=lifespan) -> FastAPI:
    application = FastAPI(title="Resume Screener", version="1.0.0", lifespan=lifespan_handler)

    install_exception_handlers(application)
    application.add_middleware(ExceptionHandlerMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/")
    @application.head("/")
    async def root():
        return {"message": "Welcome to the Resume Screener", "version": "1.0.0", "status": "ok"}

    @application.get("/health")
    @application.head("/health")
    async def health_check():
        return {"status": "healthy"}

    application.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
    application.include_router(workflow.router, prefix="/api/sessions", tags=["workflow"])
    application.include_router(drafts.router, prefix="/api/sessions", tags=["role-drafts"])
    return application


app = create_app()
