"""Year-scoped sequence numbers ("0007/2025").

Cases, sessions, decisions and notification lists are numbered by a
sequence that restarts every year. The human-readable form is the
zero-padded sequence, a slash and the year.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

_NUMBER_PATTERN = re.compile(r"^(\d+)/(\d{4})$")


class SequenceScope(Enum):
    """Independent numbering sequences, each partitioned by year.

    Session ordinals are counted per session type. Publication order is
    not listed: it is scoped by decision, not by year, and is appended
    with a compare-and-append instead.
    """

    CASE = "case"
    SESSION = "session"
    DECISION = "decision"
    NOTIFICATION_LIST = "notification_list"
    ORDINARY_SESSION_ORDINAL = "ordinary_session_ordinal"
    EXTRAORDINARY_SESSION_ORDINAL = "extraordinary_session_ordinal"

    @property
    def pad_width(self) -> int:
        """Zero-padding used when rendering numbers of this scope."""
        return 3 if self is SequenceScope.NOTIFICATION_LIST else 4


@dataclass(frozen=True, eq=True, order=True)
class SequenceNumber:
    """A sequence value within a year.

    Ordering compares year first, then sequence.

    Attributes:
        year: Four-digit year partition.
        sequence: Positive sequence within the year.
        pad_width: Zero-padding of the rendered sequence.
    """

    year: int
    sequence: int
    pad_width: int = field(default=4, compare=False)

    def __post_init__(self) -> None:
        """Validate sequence number invariants."""
        if self.sequence < 1:
            raise ValueError(f"sequence must be >= 1, got {self.sequence}")
        if not 1000 <= self.year <= 9999:
            raise ValueError(f"year must have four digits, got {self.year}")

    @classmethod
    def for_scope(cls, scope: SequenceScope, sequence: int, year: int) -> SequenceNumber:
        """Build a number with the padding of the given scope."""
        return cls(year=year, sequence=sequence, pad_width=scope.pad_width)

    @classmethod
    def parse(cls, text: str, pad_width: int = 4) -> SequenceNumber:
        """Parse the "XXXX/YYYY" form.

        Raises:
            ValueError: If the text is not in the expected format.
        """
        match = _NUMBER_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid number format '{text}', expected XXXX/YYYY")
        return cls(
            year=int(match.group(2)),
            sequence=int(match.group(1)),
            pad_width=pad_width,
        )

    def __str__(self) -> str:
        return f"{self.sequence:0{self.pad_width}d}/{self.year}"
