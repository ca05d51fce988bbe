"""Configuration module for the adjudication core.

Available Configurations:
- AdjudicationConfig: Numbering retries, authority matching, notification deadlines
"""

from src.config.adjudication_config import (
    DEFAULT_ADJUDICATION_CONFIG,
    TEST_ADJUDICATION_CONFIG,
    AdjudicationConfig,
)

__all__ = [
    "AdjudicationConfig",
    "DEFAULT_ADJUDICATION_CONFIG",
    "TEST_ADJUDICATION_CONFIG",
]
