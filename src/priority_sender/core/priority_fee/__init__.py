# src/priority_sender/core/priority_fee/__init__.py
from enum import Enum


class PriorityLevel(Enum):
    """
    Percentile bucket the fee-estimation service uses over recent fee-market
    observations. Values are the names the service expects on the wire.
    """
    MIN = "MIN"              # 0th percentile
    LOW = "LOW"              # 25th percentile
    MEDIUM = "MEDIUM"        # 50th percentile
    HIGH = "HIGH"            # 75th percentile
    VERY_HIGH = "VERY_HIGH"  # 95th percentile
    # 100th percentile; can drain funds on a congested market
    UNSAFE_MAX = "UNSAFE_MAX"

    @classmethod
    def default(cls) -> "PriorityLevel":
        return cls.MEDIUM

    @classmethod
    def from_str(cls, value: str) -> "PriorityLevel":
        try:
            return cls[value.strip().upper().replace("-", "_")]
        except KeyError:
            valid = ", ".join(level.name for level in cls)
            raise ValueError(f"Unknown priority level '{value}'. Valid: {valid}") from None


from .estimator import PriorityFeeEstimator, get_recent_priority_fee_estimate  # noqa: E402

__all__ = [
    "PriorityLevel",
    "PriorityFeeEstimator",
    "get_recent_priority_fee_estimate",
]
