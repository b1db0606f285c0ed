"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .money import to_decimal

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_decimal(name: str, default: Decimal) -> Decimal:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PayoffSage"
    DB_FILENAME = "payoffsage.db"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("PAYOFFSAGE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("PAYOFFSAGE_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("PAYOFFSAGE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


@dataclass(frozen=True, slots=True)
class PayoffPolicy:
    """Tunable rules for the strategy comparison.

    ``materiality_percent`` is the share of total debt that interest savings
    must exceed before avalanche is recommended. ``high_confidence_multiple``
    is how far past that threshold the savings must go for a ``"high"``
    confidence label. ``max_months`` bounds every simulation.
    """

    materiality_percent: Decimal = Decimal("1")
    high_confidence_multiple: Decimal = Decimal("3")
    max_months: int = 1200

    def __post_init__(self) -> None:
        for name in ("materiality_percent", "high_confidence_multiple"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        if self.materiality_percent < 0:
            raise ValueError("materiality_percent must be non-negative")
        if self.high_confidence_multiple < 1:
            raise ValueError("high_confidence_multiple must be at least 1")
        if self.max_months <= 0:
            raise ValueError("max_months must be positive")

    @classmethod
    def from_env(cls) -> "PayoffPolicy":
        """Build a policy from ``PAYOFFSAGE_*`` environment variables."""

        defaults = cls()
        return cls(
            materiality_percent=_env_decimal(
                "PAYOFFSAGE_MATERIALITY_PERCENT", defaults.materiality_percent
            ),
            high_confidence_multiple=_env_decimal(
                "PAYOFFSAGE_HIGH_CONFIDENCE_MULTIPLE", defaults.high_confidence_multiple
            ),
            max_months=_env_int("PAYOFFSAGE_MAX_MONTHS", defaults.max_months),
        )
