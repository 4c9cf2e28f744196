"""Settings read from the environment."""
import logging
import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """
    Attributes:
        log_level: Level for the stderr log handler.
        dispute_withdrawals: Whether withdrawals may be disputed like deposits.
    """

    log_level: int = logging.WARNING
    dispute_withdrawals: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from PAYMENTS_LOG_LEVEL and PAYMENTS_DISPUTE_WITHDRAWALS."""
        return cls(
            log_level=cls._parse_log_level(os.getenv("PAYMENTS_LOG_LEVEL", "WARNING")),
            dispute_withdrawals=os.getenv("PAYMENTS_DISPUTE_WITHDRAWALS", "").strip().lower() in TRUTHY,
        )

    @staticmethod
    def _parse_log_level(raw: str) -> int:
        level = logging.getLevelName(raw.strip().upper())
        if isinstance(level, int):
            return level
        return logging.WARNING
