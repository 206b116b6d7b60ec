"""Main FastAPI application."""

from fastapi import FastAPI

from tasknotes_nlp import __version__
from tasknotes_nlp.api.dependencies import ParserCache
from tasknotes_nlp.api.routes import nlp_router
from tasknotes_nlp.api.schemas import HealthResponse


def create_app() -> FastAPI:
    """Build the API application with all routers mounted under /api."""
    application = FastAPI(
        title="TaskNotes NLP API",
        description="Parse natural language quick-entry text into structured task attributes.",
        version=__version__,
    )
    application.state.parser_cache = ParserCache()
    application.include_router(nlp_router, prefix="/api")

    @application.get("/health", response_model=HealthResponse, tags=["health"])
    def health_check() -> HealthResponse:
        """Basic health check endpoint.

        Returns 200 OK if the service is running.
        """
        return HealthResponse(status="healthy", version=__version__)

    return application


app = create_app()
