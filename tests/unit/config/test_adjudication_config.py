"""Unit tests for AdjudicationConfig.

Tests defaults, bounds validation and loading from the environment.
"""

from __future__ import annotations

import os
from datetime import timedelta
from unittest.mock import patch

import pytest

from src.config.adjudication_config import (
    DEFAULT_ADJUDICATION_CONFIG,
    MAX_NOTIFICATION_DEADLINE_DAYS,
    MAX_SEQUENCE_RETRIES,
    TEST_ADJUDICATION_CONFIG,
    AdjudicationConfig,
)


class TestAdjudicationConfig:
    """Tests for AdjudicationConfig dataclass."""

    def test_defaults(self) -> None:
        """Defaults retry once, fall back to names and allow 15 days."""
        config = AdjudicationConfig()
        assert config.sequence_max_retries == 1
        assert config.authority_name_fallback is True
        assert config.notification_default_deadline == timedelta(days=15)
        assert config == DEFAULT_ADJUDICATION_CONFIG

    def test_test_config_disables_retries_and_deadline(self) -> None:
        assert TEST_ADJUDICATION_CONFIG.sequence_max_retries == 0
        assert TEST_ADJUDICATION_CONFIG.notification_default_deadline is None

    def test_retries_out_of_range_raise(self) -> None:
        with pytest.raises(ValueError, match="sequence_max_retries"):
            AdjudicationConfig(sequence_max_retries=MAX_SEQUENCE_RETRIES + 1)
        with pytest.raises(ValueError, match="sequence_max_retries"):
            AdjudicationConfig(sequence_max_retries=-1)

    def test_deadline_out_of_range_raises(self) -> None:
        with pytest.raises(ValueError, match="notification_default_deadline_days"):
            AdjudicationConfig(
                notification_default_deadline_days=MAX_NOTIFICATION_DEADLINE_DAYS + 1
            )

    def test_blank_environment_raises(self) -> None:
        with pytest.raises(ValueError, match="environment"):
            AdjudicationConfig(environment="  ")

    def test_is_production(self) -> None:
        assert AdjudicationConfig(environment="production").is_production
        assert not AdjudicationConfig().is_production

    def test_config_is_frozen(self) -> None:
        config = AdjudicationConfig()
        with pytest.raises(AttributeError):
            config.sequence_max_retries = 3  # type: ignore[misc]


class TestFromEnvironment:
    """Tests for from_environment factory method."""

    def test_from_environment_reads_values(self) -> None:
        env = {
            "SEQUENCE_MAX_RETRIES": "3",
            "AUTHORITY_NAME_FALLBACK": "false",
            "NOTIFICATION_DEFAULT_DEADLINE_DAYS": "30",
            "ENVIRONMENT": "production",
        }
        with patch.dict(os.environ, env, clear=True):
            config = AdjudicationConfig.from_environment()

        assert config.sequence_max_retries == 3
        assert config.authority_name_fallback is False
        assert config.notification_default_deadline_days == 30
        assert config.is_production

    def test_from_environment_without_env_vars(self) -> None:
        """No variables set yields the defaults."""
        with patch.dict(os.environ, {}, clear=True):
            config = AdjudicationConfig.from_environment()

        assert config == DEFAULT_ADJUDICATION_CONFIG

    def test_from_environment_clamps_out_of_range(self) -> None:
        env = {"SEQUENCE_MAX_RETRIES": "99", "NOTIFICATION_DEFAULT_DEADLINE_DAYS": "-4"}
        with patch.dict(os.environ, env, clear=True):
            config = AdjudicationConfig.from_environment()

        assert config.sequence_max_retries == MAX_SEQUENCE_RETRIES
        assert config.notification_default_deadline is None

    def test_from_environment_ignores_garbage(self) -> None:
        """Unparseable values fall back to the defaults."""
        env = {"SEQUENCE_MAX_RETRIES": "many", "AUTHORITY_NAME_FALLBACK": "maybe"}
        with patch.dict(os.environ, env, clear=True):
            config = AdjudicationConfig.from_environment()

        assert config.sequence_max_retries == 1
        assert config.authority_name_fallback is True
