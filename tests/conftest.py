"""
Pytest configuration and shared fixtures for the adjudication tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
- Services are exercised over the in-memory stubs, not mocks
"""

from collections.abc import Iterator

import pytest

from src.bootstrap.adjudication import reset_adjudication_dependencies
from tests.helpers import Board, build_board


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def board() -> Board:
    """A fresh container seeded with Alice, Bob, Carol and templates."""
    return build_board()


@pytest.fixture(autouse=True)
def _reset_container() -> Iterator[None]:
    """Never leak the process-wide container between tests."""
    yield
    reset_adjudication_dependencies()
