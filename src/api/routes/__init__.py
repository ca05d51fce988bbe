"""
API routes for the adjudication service.

This module contains all FastAPI router definitions.
Routes are organized by domain concern.

Available routers:
- health: Health check endpoints
- cases: Case registry
- sessions: Sessions, agenda and distribution
- votes: Vote recording and resolution
- judgment: Judgment confirmation and administrative results
- decisions: Decision emission and publication
- notifications: Notification lists, items and attempts
- registry: Members, case authorities and vote templates
"""

from src.api.routes.cases import router as cases_router
from src.api.routes.decisions import router as decisions_router
from src.api.routes.health import router as health_router
from src.api.routes.judgment import router as judgment_router
from src.api.routes.notifications import router as notifications_router
from src.api.routes.registry import router as registry_router
from src.api.routes.sessions import router as sessions_router
from src.api.routes.votes import router as votes_router

__all__: list[str] = [
    "cases_router",
    "decisions_router",
    "health_router",
    "judgment_router",
    "notifications_router",
    "registry_router",
    "sessions_router",
    "votes_router",
]
