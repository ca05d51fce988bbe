"""Adjudication core configuration.

Environment Variables:
- SEQUENCE_MAX_RETRIES: Automatic retries when a numbering collision is
  detected at save time (default: 1, min: 0, max: 5)
- AUTHORITY_NAME_FALLBACK: Also match case authorities by normalized
  name when no registry id matches (default: true)
- NOTIFICATION_DEFAULT_DEADLINE_DAYS: Deadline applied to a delivery
  attempt created without one; 0 disables (default: 15, max: 180)
- ENVIRONMENT: "production" selects JSON logs (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable ("true"/"false", "1"/"0", "yes"/"no")."""
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# =============================================================================
# Sequence numbering
# =============================================================================

DEFAULT_SEQUENCE_MAX_RETRIES = 1
MAX_SEQUENCE_RETRIES = 5

# =============================================================================
# Notification deadlines
# =============================================================================

DEFAULT_NOTIFICATION_DEADLINE_DAYS = 15
MAX_NOTIFICATION_DEADLINE_DAYS = 180

DEFAULT_ENVIRONMENT = "development"


@dataclass(frozen=True)
class AdjudicationConfig:
    """Configuration for the adjudication core.

    Attributes:
        sequence_max_retries: Retries after a numbering collision.
        authority_name_fallback: Match authorities by name as a fallback.
        notification_default_deadline_days: Default attempt deadline (0 = none).
        environment: Deployment environment name.
    """

    sequence_max_retries: int = DEFAULT_SEQUENCE_MAX_RETRIES
    authority_name_fallback: bool = True
    notification_default_deadline_days: int = DEFAULT_NOTIFICATION_DEADLINE_DAYS
    environment: str = DEFAULT_ENVIRONMENT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0 <= self.sequence_max_retries <= MAX_SEQUENCE_RETRIES:
            raise ValueError(
                f"sequence_max_retries must be between 0 and {MAX_SEQUENCE_RETRIES}, "
                f"got {self.sequence_max_retries}"
            )
        if not 0 <= self.notification_default_deadline_days <= MAX_NOTIFICATION_DEADLINE_DAYS:
            raise ValueError(
                "notification_default_deadline_days must be between 0 and "
                f"{MAX_NOTIFICATION_DEADLINE_DAYS}, "
                f"got {self.notification_default_deadline_days}"
            )
        if not self.environment.strip():
            raise ValueError("environment must not be blank")

    @property
    def notification_default_deadline(self) -> timedelta | None:
        """Default attempt deadline as a timedelta, or None when disabled."""
        if self.notification_default_deadline_days == 0:
            return None
        return timedelta(days=self.notification_default_deadline_days)

    @property
    def is_production(self) -> bool:
        """Whether JSON logging should be used."""
        return self.environment == "production"

    @classmethod
    def from_environment(cls) -> AdjudicationConfig:
        """Create config from environment variables with defaults.

        Out-of-range integers are clamped rather than rejected.

        Returns:
            AdjudicationConfig with values from environment or defaults.
        """
        retries = _get_int_env("SEQUENCE_MAX_RETRIES", DEFAULT_SEQUENCE_MAX_RETRIES)
        retries = max(0, min(retries, MAX_SEQUENCE_RETRIES))

        deadline_days = _get_int_env(
            "NOTIFICATION_DEFAULT_DEADLINE_DAYS",
            DEFAULT_NOTIFICATION_DEADLINE_DAYS,
        )
        deadline_days = max(0, min(deadline_days, MAX_NOTIFICATION_DEADLINE_DAYS))

        environment = os.environ.get("ENVIRONMENT", "").strip() or DEFAULT_ENVIRONMENT

        return cls(
            sequence_max_retries=retries,
            authority_name_fallback=_get_bool_env("AUTHORITY_NAME_FALLBACK", True),
            notification_default_deadline_days=deadline_days,
            environment=environment,
        )


# Default configuration
DEFAULT_ADJUDICATION_CONFIG = AdjudicationConfig()

# Test configuration: no automatic retries, no default deadline
TEST_ADJUDICATION_CONFIG = AdjudicationConfig(
    sequence_max_retries=0,
    notification_default_deadline_days=0,
    environment="test",
)
