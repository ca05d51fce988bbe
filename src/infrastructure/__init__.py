"""
Infrastructure layer - External adapters for the adjudication core.

This layer contains:
- In-memory stubs implementing every application port
- Observability (structlog configuration, correlation IDs)

IMPORT RULES:
- CAN import from: domain, application, config
- Implements ports defined in application layer
"""

__all__: list[str] = []
