"""
Period granularity and navigation enums for LiquidityLab.
"""

from __future__ import annotations

from enum import Enum

from .errors import ConfigError


class Granularity(Enum):
    """
    Resolution of the aggregated period sequence.

    Attributes:
        WEEKLY: One period per week bucket (4 per month)
        SEMI_MONTHLY: Two periods per month (weeks 1-2 and weeks 3-4)
        MONTHLY: One period per month
    """

    WEEKLY = "weekly"
    SEMI_MONTHLY = "semi-monthly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: Granularity | str) -> Granularity:
        """Coerce a string such as ``"semi-monthly"`` into a Granularity."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == normalized:
                    return member
        raise ConfigError(
            f"Unknown granularity '{value}' "
            f"(expected one of: {', '.join(m.value for m in cls)})"
        )


class Half(Enum):
    """Half of a month used by semi-monthly periods."""

    FIRST = "first"  # weeks 1-2
    SECOND = "second"  # weeks 3-4

    @classmethod
    def of_week(cls, week: int) -> Half:
        return cls.FIRST if week <= 2 else cls.SECOND

    @property
    def label(self) -> str:
        return "上半月" if self is Half.FIRST else "下半月"

    @property
    def snapshot_week(self) -> int:
        """Week whose emergency-fund value represents this half."""
        return 2 if self is Half.FIRST else 4


class Direction(Enum):
    """Step direction for anchor navigation."""

    BACKWARD = "backward"
    FORWARD = "forward"

    @property
    def offset(self) -> int:
        return -1 if self is Direction.BACKWARD else 1
