"""
API layer - FastAPI routes for the adjudication core.

This layer contains:
- Routers for cases, sessions, votes, judgment, decisions and notifications
- Pydantic request/response models
- RFC 7807 error translation
- Request logging middleware

IMPORT RULES:
- CAN import from: application, domain, config, bootstrap
- CANNOT import from: infrastructure adapters (stubs) directly
- Services are resolved from the bootstrap container
"""

__all__: list[str] = []
