"""
Domain layer - Pure business logic for the adjudication core.

This layer contains:
- Domain models (Case, Session, Distribution, Vote, Decision, Notification)
- Domain services (vote-text composer, vote resolution, authority conflict)
- Domain events (case judged, decision published)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
Only stdlib, typing and uuid6 imports are allowed.
"""

from src.domain.exceptions import AdjudicationError

__all__: list[str] = ["AdjudicationError"]
