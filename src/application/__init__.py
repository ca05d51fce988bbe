"""
Application layer - Use cases and orchestration for the adjudication core.

This layer contains:
- Use case implementations (service orchestration)
- Port definitions (abstract interfaces for infrastructure)

IMPORT RULES:
- CAN import from: domain, config
- CANNOT import from: infrastructure (except observability), api, bootstrap
"""
