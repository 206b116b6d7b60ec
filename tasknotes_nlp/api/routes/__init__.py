"""API routes."""

from tasknotes_nlp.api.routes.nlp import router as nlp_router

__all__ = ["nlp_router"]
