"""
FastAPI API routes and endpoints.

- routes.py: POST /requirements/{id}/decision-makers, POST /industries/identify, GET /health
- dependencies.py: Dependency injection for provider clients, orchestrator, repository
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing (request_id in every log event)
"""

from leadgen_inference.api import dependencies, error_handlers, models
from leadgen_inference.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
