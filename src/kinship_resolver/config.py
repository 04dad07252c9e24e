from __future__ import annotations

import os
from dataclasses import dataclass

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _b(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _s(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


@dataclass(frozen=True)
class KinshipConfig:
    # Default for apply_gender when a caller passes None
    apply_gender: bool = True
    # Label returned when ego and alter are the same user
    self_label: str = "Me"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> KinshipConfig:
        level = _s("KINSHIP_LOG_LEVEL", "WARNING").upper()
        return cls(
            apply_gender=_b("KINSHIP_APPLY_GENDER", True),
            self_label=_s("KINSHIP_SELF_LABEL", "Me"),
            log_level=level if level in _LOG_LEVELS else "WARNING",
        )


def load_config() -> KinshipConfig:
    """Load configuration from the environment and an optional .env file."""
    from dotenv import load_dotenv

    load_dotenv()
    return KinshipConfig.from_env()


CONFIG = KinshipConfig.from_env()
