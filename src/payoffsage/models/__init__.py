"""SQLModel table exports."""

from .liability import Liability

__all__ = ["Liability"]
