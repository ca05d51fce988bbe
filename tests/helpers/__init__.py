"""Test helpers for the adjudication core.

Helpers:
    Board: Seeded in-memory container with members and templates
    build_board: Factory for a fresh Board

Usage:
    from tests.helpers import build_board
"""

from tests.helpers.adjudication import SESSION_DATE, Board, build_board

__all__ = ["Board", "SESSION_DATE", "build_board"]
